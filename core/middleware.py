import re

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.http import JsonResponse


class LoginRequiredMiddleware:
    """Send anonymous users to the login page.

    Paths matching ``settings.LOGIN_EXEMPT_URLS`` pass through; API paths get
    a JSON 401 instead of a redirect.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.exempt_urls = [
            re.compile(expr) for expr in getattr(settings, "LOGIN_EXEMPT_URLS", [])
        ]

    def __call__(self, request):
        if request.user.is_authenticated:
            return self.get_response(request)
        path = request.path_info.lstrip("/")
        if any(pattern.match(path) for pattern in self.exempt_urls):
            return self.get_response(request)
        if path.startswith("api/"):
            return JsonResponse(
                {"detail": "Authentication credentials were not provided.", "status_code": 401},
                status=401,
            )
        return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)
