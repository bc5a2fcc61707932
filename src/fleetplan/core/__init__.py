from __future__ import annotations

from .allocator import allocate, build_plan, class_rules
from .exceptions import (
    AllocationError,
    InvalidCount,
    MissingManagementHost,
    OverlappingSubnets,
    SubnetExhausted,
    SubnetOutsideAddressSpace,
)
from .inventory import ConnectionInstruction, connection_instructions
from .profiles import DEFAULT_PROFILES, DeviceProfile, ServicePort
from .provisioning import (
    ComputeRequest,
    SubnetRuleGroup,
    compute_requests,
    group_rules_by_subnet,
)
from .validator import validate_plan

__all__ = [
    "DEFAULT_PROFILES",
    "AllocationError",
    "ComputeRequest",
    "ConnectionInstruction",
    "DeviceProfile",
    "InvalidCount",
    "MissingManagementHost",
    "OverlappingSubnets",
    "ServicePort",
    "SubnetExhausted",
    "SubnetOutsideAddressSpace",
    "SubnetRuleGroup",
    "allocate",
    "build_plan",
    "class_rules",
    "compute_requests",
    "connection_instructions",
    "group_rules_by_subnet",
    "validate_plan",
]
