from __future__ import annotations

import pytest

from fleetplan.config import get_settings
from fleetplan.models import DeviceClass, FleetSpec


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("FLEETPLAN_CONFIG", raising=False)
    monkeypatch.setenv("LOGLEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def event_spec() -> FleetSpec:
    return FleetSpec(
        counts={
            DeviceClass.MANAGEMENT_HOST: 1,
            DeviceClass.CAMERA: 2,
            DeviceClass.WIRELESS_ACCESS_POINT: 3,
            DeviceClass.PRINTER: 2,
        }
    )
