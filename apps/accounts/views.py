from datetime import datetime, timezone as dt_timezone

from django.conf import settings
from rest_framework import status, serializers
from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.exceptions import error_response
from .serializers import AdminLoginSerializer, SessionSerializer
from .services import (
    authenticate_admin,
    issue_admin_token,
    verify_admin_token,
    session_lifetime,
    AccountsServiceError,
)


class OkResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=AdminLoginSerializer,
    responses={
        200: OkResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Unlock the POS with the admin PIN. Sets the httpOnly session cookie.",
    tags=['auth'],
)
@api_view(['POST'])
def login(request):
    """Login with the admin PIN."""
    serializer = AdminLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        admin = authenticate_admin(pin=serializer.validated_data['pin'])
    except AccountsServiceError as e:
        return error_response(e)

    response = Response({'ok': True})
    response.set_cookie(
        settings.ADMIN_SESSION_COOKIE,
        issue_admin_token(admin),
        max_age=int(session_lifetime().total_seconds()),
        httponly=True,
        samesite='Lax',
        secure=settings.ADMIN_SESSION_SECURE,
        path='/',
    )
    return response


@extend_schema(
    request=None,
    responses={200: OkResponseSerializer},
    description="Clear the session cookie.",
    tags=['auth'],
)
@api_view(['POST'])
def logout(request):
    """Logout by deleting the session cookie."""
    response = Response({'ok': True})
    response.delete_cookie(settings.ADMIN_SESSION_COOKIE, path='/', samesite='Lax')
    return response


@extend_schema(
    responses={200: SessionSerializer, 401: ErrorResponseSerializer},
    description="Return the current admin session.",
    tags=['auth'],
)
@api_view(['GET'])
def me(request):
    """Get the current session."""
    try:
        claims = verify_admin_token(request.COOKIES.get(settings.ADMIN_SESSION_COOKIE, ''))
    except AccountsServiceError as e:
        return error_response(e)

    return Response({
        'authenticated': True,
        'name': claims.get('name', 'admin'),
        'expires_at': datetime.fromtimestamp(claims['exp'], tz=dt_timezone.utc),
    })
