from django.apps import AppConfig


class ProcurementConfig(AppConfig):
    """Configuration for the procurement workflow app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "procurement"
