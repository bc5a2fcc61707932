from __future__ import annotations

from enum import Enum
from ipaddress import IPv4Address, IPv4Network
from typing import Literal

from pydantic import BaseModel

Protocol = Literal["tcp", "udp", "*"]
Access = Literal["allow", "deny"]

INTERNET = "Internet"


class DeviceClass(str, Enum):
    """Category of simulated device.

    Member order is the canonical allocation order: the management host is
    always allocated first so its address is known before any other rule set
    is resolved.
    """

    MANAGEMENT_HOST = "management_host"
    CAMERA = "camera"
    WIRELESS_ACCESS_POINT = "wireless_access_point"
    PRINTER = "printer"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class FirewallRule(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    priority: int
    direction: Literal["inbound"] = "inbound"
    access: Access = "allow"
    protocol: Protocol
    port: int | Literal["*"]
    source: str  # CIDR, /32 host or the Internet service tag


class DeviceInstance(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    device_class: DeviceClass
    ordinal: int
    name: str
    subnet: IPv4Network
    address: IPv4Address
    vm_size: str
    rules: tuple[FirewallRule, ...]


class FleetPlan(BaseModel):
    """Finished allocation handed to the provisioning and inventory layers."""

    model_config = {"frozen": True, "extra": "forbid"}

    address_space: IPv4Network
    management_address: IPv4Address
    instances: tuple[DeviceInstance, ...]

    def by_class(self, device_class: DeviceClass) -> tuple[DeviceInstance, ...]:
        return tuple(i for i in self.instances if i.device_class == device_class)
