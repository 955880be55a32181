from __future__ import annotations

import time
from pathlib import Path

import pytest


def _tzset() -> None:
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture(autouse=True)
def utc_host(monkeypatch):
    """Pin the host clock to UTC so wall-clock anchoring is deterministic."""
    monkeypatch.setenv("TZ", "UTC")
    _tzset()
    yield
    monkeypatch.undo()
    _tzset()


@pytest.fixture
def host_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("host timezone switching requires time.tzset")

    def _set(name: str) -> None:
        if not (Path("/usr/share/zoneinfo") / name).exists():
            pytest.skip(f"system zoneinfo for {name} unavailable")
        monkeypatch.setenv("TZ", name)
        _tzset()

    return _set
