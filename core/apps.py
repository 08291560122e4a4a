"""Core application configuration."""

import os

from django.apps import AppConfig
from django.db.models.signals import post_migrate


def _create_admin_user(sender, **kwargs):
    """Ensure an ``admin`` superuser with unrestricted firm access exists."""

    from django.contrib.auth import get_user_model

    from procurement.models import ALL_FIRMS, UserAccess

    User = get_user_model()
    if User.objects.filter(username="admin").exists():
        return
    password = os.getenv("DJANGO_ADMIN_PASSWORD", "admin")
    user = User.objects.create_superuser("admin", email="", password=password)
    UserAccess.objects.create(user=user, firm_name_match=ALL_FIRMS, permissions=[])


class CoreConfig(AppConfig):
    """Configuration for the core app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self):  # pragma: no cover - executed via Django startup
        """Connect signal handlers when the app is ready."""

        post_migrate.connect(
            _create_admin_user, dispatch_uid="core.create_admin_user"
        )
