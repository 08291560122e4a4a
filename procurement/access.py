"""Screen permissions backed by :class:`~procurement.models.UserAccess`."""

from __future__ import annotations

from functools import wraps

from django.core.exceptions import PermissionDenied

from .models import PERMISSION_KEYS


def user_permissions(user) -> list[str]:
    if not getattr(user, "is_authenticated", False):
        return []
    if user.is_superuser:
        return list(PERMISSION_KEYS)
    access = getattr(user, "access", None)
    return list(access.permissions or []) if access is not None else []


def has_permission(user, key: str) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if user.is_superuser:
        return True
    access = getattr(user, "access", None)
    return bool(access is not None and access.has_permission(key))


def require_permission(key: str):
    """Reject the request with 403 unless the user holds ``key``."""

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not has_permission(request.user, key):
                raise PermissionDenied(f"Missing permission: {key}")
            return view_func(request, *args, **kwargs)

        return _wrapped

    return decorator


def require_any_permission(*keys: str):
    """Reject the request with 403 unless the user holds one of ``keys``."""

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not any(has_permission(request.user, key) for key in keys):
                raise PermissionDenied(f"Missing permission: one of {', '.join(keys)}")
            return view_func(request, *args, **kwargs)

        return _wrapped

    return decorator


class PermissionRequiredMixin:
    permission_key: str | None = None

    def get_permission_key(self) -> str | None:
        return self.permission_key

    def dispatch(self, request, *args, **kwargs):
        key = self.get_permission_key()
        if key and not has_permission(request.user, key):
            raise PermissionDenied(f"Missing permission: {key}")
        return super().dispatch(request, *args, **kwargs)
