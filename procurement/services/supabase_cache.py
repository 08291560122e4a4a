"""Time-based caching for reference data lookups.

Master data changes rarely but is read on nearly every form render; the
helper here wraps a loader with a lock and a TTL.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)


T = TypeVar("T")


@dataclass
class _CacheState(Generic[T]):
    value: T | None = None
    loaded_at: float | None = None


def get_cached(fetch_func: Callable[[], T], ttl: int | Callable[[], int]) -> Callable[..., T]:
    """Wrap ``fetch_func`` so its result is reused for ``ttl`` seconds.

    ``ttl`` may be a callable so settings overrides are honoured at call
    time. Calling the wrapper with ``force=True`` reloads immediately; a
    failed reload falls back to the stale value when one exists. The
    wrapper's ``clear()`` drops the cached value.
    """

    lock = threading.Lock()
    state: _CacheState[T] = _CacheState()

    def wrapper(force: bool = False) -> T:
        limit = ttl() if callable(ttl) else ttl
        with lock:
            current = time.time()
            if (
                not force
                and state.value is not None
                and state.loaded_at is not None
                and current - state.loaded_at < limit
            ):
                return state.value

            try:
                state.value = fetch_func()
            except Exception:
                if state.value is not None:
                    logger.exception("Failed to refresh cached value, serving stale copy")
                    return state.value
                raise
            state.loaded_at = current
            return state.value

    def clear() -> None:
        with lock:
            state.value = None
            state.loaded_at = None

    wrapper.clear = clear  # type: ignore[attr-defined]
    wrapper._state = state  # type: ignore[attr-defined]
    return wrapper


__all__ = ["get_cached"]
