"""Deterministic address and firewall allocation for a device fleet."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from ipaddress import IPv4Address, IPv4Network
from itertools import combinations

from fleetplan.models import (
    INTERNET,
    DeviceClass,
    DeviceInstance,
    FirewallRule,
    FleetPlan,
    FleetSpec,
)

from .exceptions import (
    AllocationError,
    InvalidCount,
    MissingManagementHost,
    OverlappingSubnets,
    SubnetExhausted,
    SubnetOutsideAddressSpace,
)
from .profiles import ADMIN_PORT, DEFAULT_PROFILES, DeviceProfile

logger = logging.getLogger(__name__)

ADMIN_RULE_NAME = "allow-admin-ssh"
DENY_RULE_NAME = "deny-vnet-inbound"

ADMIN_PRIORITY = 100
SERVICE_PRIORITY = 200
PRIORITY_STEP = 10
INTERNET_SSH_PRIORITY = 300
DENY_PRIORITY = 4096


def _check_profiles(profiles: Mapping[DeviceClass, DeviceProfile]) -> None:
    missing = [c for c in DeviceClass if c not in profiles]
    if missing:
        names = ", ".join(c.label for c in missing)
        raise AllocationError(f"No device profile for: {names}")

    for first, second in combinations(DeviceClass, 2):
        if profiles[first].subnet.overlaps(profiles[second].subnet):
            raise OverlappingSubnets(first, second)


def admin_rule(management_address: IPv4Address) -> FirewallRule:
    return FirewallRule(
        name=ADMIN_RULE_NAME,
        priority=ADMIN_PRIORITY,
        protocol="tcp",
        port=ADMIN_PORT,
        source=f"{management_address}/32",
    )


def class_rules(
    device_class: DeviceClass,
    profile: DeviceProfile,
    management_address: IPv4Address,
    address_space: IPv4Network,
) -> tuple[FirewallRule, ...]:
    """Resolve the rule set shared by every instance of ``device_class``.

    Order is admin access, service ports (own subnet only), internet SSH for
    the jump host, then a catch-all deny for the rest of the address space.
    """
    rules = [admin_rule(management_address)]

    for index, service in enumerate(profile.service_ports):
        rules.append(
            FirewallRule(
                name=f"allow-{service.name}",
                priority=SERVICE_PRIORITY + index * PRIORITY_STEP,
                protocol=service.protocol,
                port=service.port,
                source=str(profile.subnet),
            )
        )

    if device_class is DeviceClass.MANAGEMENT_HOST:
        rules.append(
            FirewallRule(
                name="allow-ssh-internet",
                priority=INTERNET_SSH_PRIORITY,
                protocol="tcp",
                port=ADMIN_PORT,
                source=INTERNET,
            )
        )

    rules.append(
        FirewallRule(
            name=DENY_RULE_NAME,
            priority=DENY_PRIORITY,
            access="deny",
            protocol="*",
            port="*",
            source=str(address_space),
        )
    )
    return tuple(rules)


def _check_spec(
    spec: FleetSpec, profiles: Mapping[DeviceClass, DeviceProfile]
) -> None:
    for device_class in DeviceClass:
        count = spec.count(device_class)
        if count < 0:
            raise InvalidCount(device_class, count)

    if spec.count(DeviceClass.MANAGEMENT_HOST) == 0:
        raise MissingManagementHost()

    for device_class in DeviceClass:
        count = spec.count(device_class)
        if count == 0:
            continue

        profile = profiles[device_class]
        if not profile.subnet.subnet_of(spec.address_space):
            raise SubnetOutsideAddressSpace(
                device_class, str(profile.subnet), str(spec.address_space)
            )
        if count > profile.capacity:
            raise SubnetExhausted(device_class, count, profile.capacity)


def allocate(
    spec: FleetSpec,
    profiles: Mapping[DeviceClass, DeviceProfile] = DEFAULT_PROFILES,
) -> tuple[DeviceInstance, ...]:
    """Assign subnet, static address and rules to every requested device.

    Pure function of its input: the same spec always yields the same tuple,
    ordered by canonical class order and then by ordinal. Every check runs
    before the first instance is built, so a failure never leaves a partial
    plan behind.

    Raises:
        InvalidCount: a class has a negative count.
        MissingManagementHost: no management host was requested.
        SubnetOutsideAddressSpace: a used class subnet is not in the space.
        SubnetExhausted: a class needs more addresses than its subnet holds.
        OverlappingSubnets: two profiles share addresses.
    """
    _check_profiles(profiles)
    _check_spec(spec, profiles)

    # ordinal 0 of the first class in canonical order
    management_address = profiles[DeviceClass.MANAGEMENT_HOST].host_address(0)

    instances: list[DeviceInstance] = []
    for device_class in DeviceClass:
        count = spec.count(device_class)
        if count == 0:
            continue

        profile = profiles[device_class]
        rules = class_rules(
            device_class, profile, management_address, spec.address_space
        )
        for ordinal in range(count):
            instances.append(
                DeviceInstance(
                    device_class=device_class,
                    ordinal=ordinal,
                    name=f"{profile.name_prefix}-{ordinal + 1}",
                    subnet=profile.subnet,
                    address=profile.host_address(ordinal),
                    vm_size=profile.vm_size,
                    rules=rules,
                )
            )
        logger.debug(
            "Allocated %d %s instance(s) in %s",
            count,
            device_class.label,
            profile.subnet,
        )

    logger.info(
        "Allocated %d instance(s), management host at %s",
        len(instances),
        management_address,
    )
    return tuple(instances)


def build_plan(
    spec: FleetSpec,
    profiles: Mapping[DeviceClass, DeviceProfile] = DEFAULT_PROFILES,
) -> FleetPlan:
    instances = allocate(spec, profiles)
    return FleetPlan(
        address_space=spec.address_space,
        management_address=instances[0].address,
        instances=instances,
    )
