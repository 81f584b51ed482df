"""
User administration URL patterns for the Family Tree API.
"""
from django.urls import path

from .views import UserListView, UserActivationView, UserRoleListView, UserRoleDetailView

urlpatterns = [
    path('', UserListView.as_view(), name='user_list'),
    path('<int:user_id>/', UserActivationView.as_view(), name='user_activation'),
    path('<int:user_id>/roles/', UserRoleListView.as_view(), name='user_roles'),
    path('<int:user_id>/roles/<str:role>/', UserRoleDetailView.as_view(), name='user_role_detail'),
]
