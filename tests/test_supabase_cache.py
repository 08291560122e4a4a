import pytest

from procurement.services import supabase_cache


def test_get_cached_reuses_value(monkeypatch):
    calls = []

    def fetch():
        calls.append(1)
        return len(calls)

    clock = {"t": 1000.0}
    monkeypatch.setattr(supabase_cache.time, "time", lambda: clock["t"])
    cached = supabase_cache.get_cached(fetch, ttl=60)
    assert cached() == 1
    clock["t"] += 30
    assert cached() == 1
    clock["t"] += 31
    assert cached() == 2
    assert cached(force=True) == 3
    cached.clear()
    assert cached() == 4


def test_ttl_may_be_callable():
    ttl = {"value": 0}
    cached = supabase_cache.get_cached(lambda: object(), ttl=lambda: ttl["value"])
    assert cached() is not cached()
    ttl["value"] = 300
    first = cached()
    assert cached() is first


def test_failed_refresh_serves_stale_value():
    state = {"fail": False}

    def fetch():
        if state["fail"]:
            raise RuntimeError("backend down")
        return {"units": ["kg"]}

    cached = supabase_cache.get_cached(fetch, ttl=60)
    assert cached() == {"units": ["kg"]}
    state["fail"] = True
    assert cached(force=True) == {"units": ["kg"]}


def test_failed_first_load_raises():
    def fetch():
        raise RuntimeError("boom")

    cached = supabase_cache.get_cached(fetch, ttl=60)
    with pytest.raises(RuntimeError):
        cached()
