"""Static addressing and firewall policy per device class."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network
from typing import NamedTuple

from fleetplan.models import DeviceClass
from fleetplan.models.device import Protocol

LAST_HOST_OCTET = 254
# .0 network, .1 gateway, .2/.3 platform DNS
RESERVED_OFFSETS = 4
ADMIN_PORT = 22


class ServicePort(NamedTuple):
    name: str
    protocol: Protocol
    port: int


@dataclass(frozen=True)
class DeviceProfile:
    subnet: IPv4Network
    base_offset: int
    service_ports: tuple[ServicePort, ...]
    name_prefix: str
    vm_size: str

    def __post_init__(self) -> None:
        if self.subnet.prefixlen != 24:
            raise ValueError(f"Device subnet must be a /24, got {self.subnet}")
        if not RESERVED_OFFSETS <= self.base_offset <= LAST_HOST_OCTET:
            raise ValueError(
                f"Base offset {self.base_offset} must be between "
                f"{RESERVED_OFFSETS} and {LAST_HOST_OCTET}"
            )

    @property
    def capacity(self) -> int:
        return LAST_HOST_OCTET - self.base_offset + 1

    def host_address(self, ordinal: int) -> IPv4Address:
        return self.subnet.network_address + self.base_offset + ordinal


DEFAULT_PROFILES: Mapping[DeviceClass, DeviceProfile] = {
    DeviceClass.MANAGEMENT_HOST: DeviceProfile(
        subnet=IPv4Network("10.0.1.0/24"),
        base_offset=4,
        service_ports=(),
        name_prefix="mgmt",
        vm_size="Standard_B2s",
    ),
    DeviceClass.CAMERA: DeviceProfile(
        subnet=IPv4Network("10.0.2.0/24"),
        base_offset=10,
        service_ports=(
            ServicePort("rtsp", "tcp", 554),
            ServicePort("http", "tcp", 80),
        ),
        name_prefix="camera",
        vm_size="Standard_B1s",
    ),
    DeviceClass.WIRELESS_ACCESS_POINT: DeviceProfile(
        subnet=IPv4Network("10.0.3.0/24"),
        base_offset=10,
        service_ports=(
            ServicePort("https", "tcp", 443),
            ServicePort("snmp", "udp", 161),
        ),
        name_prefix="wap",
        vm_size="Standard_B1s",
    ),
    DeviceClass.PRINTER: DeviceProfile(
        subnet=IPv4Network("10.0.4.0/24"),
        base_offset=10,
        service_ports=(
            ServicePort("raw-print", "tcp", 9100),
            ServicePort("ipp", "tcp", 631),
        ),
        name_prefix="printer",
        vm_size="Standard_B1s",
    ),
}
