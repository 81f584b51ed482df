"""
Family Tree API URL configuration.

Versioned endpoints live under v1/; the OpenAPI schema and its
Swagger and ReDoc renderings sit beside them.
"""
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

app_name = 'api'

urlpatterns = [
    path('v1/', include('api.v1.urls', namespace='v1')),

    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='api:schema'), name='swagger-ui'),
    path('redoc/', SpectacularRedocView.as_view(url_name='api:schema'), name='redoc'),
]
