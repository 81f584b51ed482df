"""
Authentication URL patterns for the Family Tree API.
"""
from django.urls import path

from .views import (
    LoginView,
    SignupView,
    TokenRefreshAPIView,
    CurrentUserView,
)

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('signup/', SignupView.as_view(), name='signup'),
    path('token/refresh/', TokenRefreshAPIView.as_view(), name='token_refresh'),
    path('me/', CurrentUserView.as_view(), name='current_user'),
]
