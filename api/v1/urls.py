"""
API v1 URL configuration.
"""
from django.urls import path, include

app_name = 'v1'

urlpatterns = [
    path('auth/', include('api.v1.auth.urls')),
    path('trees/', include('api.v1.trees.urls')),
    path('users/', include('api.v1.users.urls')),
]
