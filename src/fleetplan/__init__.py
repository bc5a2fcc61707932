"""fleetplan - deterministic subnet, address and firewall plans for device fleets."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings, load_fleet_spec
from .core import AllocationError, allocate, build_plan, validate_plan
from .models import DeviceClass, DeviceInstance, FirewallRule, FleetPlan, FleetSpec
from .storage import PlanStore

__all__ = [
    "AllocationError",
    "DeviceClass",
    "DeviceInstance",
    "FirewallRule",
    "FleetPlan",
    "FleetSpec",
    "PlanStore",
    "Settings",
    "__version__",
    "allocate",
    "build_plan",
    "get_settings",
    "load_fleet_spec",
    "validate_plan",
]

__version__ = version("fleetplan")
