import logging
import os
from typing import Optional

from django.conf import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

_client: Client | None = None


def _config(name: str) -> str:
    return os.getenv(name) or getattr(settings, name, "") or ""


def get_supabase_client() -> Optional[Client]:
    """Return a cached Supabase client, or ``None`` when not configured.

    ``SUPABASE_URL`` and ``SUPABASE_KEY`` are read from the environment,
    falling back to Django settings. A failed connection is logged and
    treated like missing configuration.
    """

    global _client
    if _client is not None:
        return _client

    url = _config("SUPABASE_URL")
    key = _config("SUPABASE_KEY")
    if not url or not key:
        logger.debug("Supabase is not configured")
        return None
    try:  # pragma: no cover - network interaction
        _client = create_client(url, key)
    except Exception:  # pragma: no cover - network interaction
        logger.exception("Failed to initialise Supabase client")
        return None
    return _client


def reset_client() -> None:
    global _client
    _client = None
