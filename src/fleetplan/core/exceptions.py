"""Allocation exception classes."""

from __future__ import annotations

from fleetplan.models import DeviceClass


class AllocationError(Exception):
    """Base exception for fleet allocation failures.

    Any AllocationError means no plan was produced and no infrastructure
    should be changed.
    """

    pass


class SubnetExhausted(AllocationError):
    """Requested count does not fit in the class subnet."""

    def __init__(
        self, device_class: DeviceClass, requested_count: int, capacity: int
    ):
        self.device_class = device_class
        self.requested_count = requested_count
        self.capacity = capacity
        super().__init__(
            f"Subnet for {device_class.label} exhausted: requested "
            f"{requested_count}, capacity {capacity}"
        )


class MissingManagementHost(AllocationError):
    """No management host requested, so admin rules cannot be bound."""

    def __init__(self) -> None:
        super().__init__(
            "Fleet has no management host; administrative access rules "
            "cannot be resolved"
        )


class InvalidCount(AllocationError):
    """Negative instance count."""

    def __init__(self, device_class: DeviceClass, count: int):
        self.device_class = device_class
        self.count = count
        super().__init__(f"Invalid count for {device_class.label}: {count}")


class OverlappingSubnets(AllocationError):
    """Two device classes share address space."""

    def __init__(self, first: DeviceClass, second: DeviceClass):
        self.classes = (first, second)
        super().__init__(f"Subnets for {first.label} and {second.label} overlap")


class SubnetOutsideAddressSpace(AllocationError):
    """Class subnet is not contained in the fleet address space."""

    def __init__(self, device_class: DeviceClass, subnet: str, address_space: str):
        self.device_class = device_class
        super().__init__(
            f"Subnet {subnet} for {device_class.label} is outside "
            f"address space {address_space}"
        )
