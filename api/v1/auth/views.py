"""
Authentication views for the Family Tree API.

New accounts are inactive; an administrator activates them through
the users API before login succeeds.
"""
import logging
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.utils import extend_schema, OpenApiExample

from .serializers import EmailTokenObtainPairSerializer, SignupSerializer, UserSerializer

logger = logging.getLogger(__name__)


class LoginView(TokenObtainPairView):
    """Exchange an email and password for a JWT pair."""
    permission_classes = [AllowAny]
    serializer_class = EmailTokenObtainPairSerializer

    @extend_schema(
        summary="Login with email and password",
        examples=[
            OpenApiExample(
                'Login Request',
                value={'email': 'jane@example.com', 'password': 'correct-horse-battery'},
                request_only=True
            )
        ]
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class SignupView(APIView):
    """Register an account that awaits activation. No tokens are issued."""
    permission_classes = [AllowAny]

    @extend_schema(summary="Register an account", request=SignupSerializer, responses=UserSerializer)
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered user {user.id}, awaiting activation", extra={'target_user_id': user.id})
        return Response({
            'message': 'Account created. An administrator must activate it before you can log in.',
            'user': UserSerializer(user).data,
        }, status=status.HTTP_201_CREATED)


class TokenRefreshAPIView(TokenRefreshView):
    permission_classes = [AllowAny]

    @extend_schema(summary="Refresh access token")
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class CurrentUserView(APIView):

    @extend_schema(summary="Get current user", responses=UserSerializer)
    def get(self, request):
        return Response(UserSerializer(request.user).data)
