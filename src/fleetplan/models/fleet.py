from __future__ import annotations

from ipaddress import IPv4Network

from pydantic import BaseModel, Field

from .device import DeviceClass

DEFAULT_ADDRESS_SPACE = "10.0.0.0/16"


class FleetSpec(BaseModel):
    """Requested instance count per device class.

    Counts are deliberately unconstrained here: a negative count is rejected
    by the allocator with ``InvalidCount`` rather than by schema validation.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    counts: dict[DeviceClass, int] = Field(default_factory=dict)
    address_space: IPv4Network = IPv4Network(DEFAULT_ADDRESS_SPACE)

    def count(self, device_class: DeviceClass) -> int:
        return self.counts.get(device_class, 0)
