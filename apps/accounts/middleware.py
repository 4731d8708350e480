"""Request gate: everything outside the public prefixes needs an admin session."""

import logging
from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpResponseRedirect, JsonResponse

from .services import InvalidTokenError, verify_admin_token

logger = logging.getLogger(__name__)

PUBLIC_PREFIXES = (
    '/api/auth/',
    '/api/health/',
    '/api/schema/',
    '/api/docs/',
    '/admin/',
    '/static/',
    '/login',
)


class AdminSessionMiddleware:
    """
    Check the signed admin cookie on every non-public request.

    API paths answer 401 JSON; page paths redirect to ``/login?next=<path>``.
    The token claims are exposed as ``request.admin_session``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.admin_session = None
        path = request.path

        if path.startswith(PUBLIC_PREFIXES):
            return self.get_response(request)

        try:
            request.admin_session = verify_admin_token(
                request.COOKIES.get(settings.ADMIN_SESSION_COOKIE, '')
            )
        except InvalidTokenError:
            if path.startswith('/api/'):
                logger.warning('Unauthorized API request: %s %s', request.method, path)
                return JsonResponse({'error': 'Unauthorized'}, status=401)
            query = urlencode({'next': request.get_full_path()})
            return HttpResponseRedirect(f'/login?{query}')

        return self.get_response(request)
