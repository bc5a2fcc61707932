"""Data models for fleetplan."""

from fleetplan.models.device import (
    INTERNET,
    DeviceClass,
    DeviceInstance,
    FirewallRule,
    FleetPlan,
)
from fleetplan.models.fleet import DEFAULT_ADDRESS_SPACE, FleetSpec
from fleetplan.models.validation import PlanValidationResult

__all__ = [
    "DEFAULT_ADDRESS_SPACE",
    "INTERNET",
    "DeviceClass",
    "DeviceInstance",
    "FirewallRule",
    "FleetPlan",
    "FleetSpec",
    "PlanValidationResult",
]
