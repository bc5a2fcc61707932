from __future__ import annotations

from collections.abc import Mapping
from ipaddress import IPv4Network

from fleetplan.models import (
    INTERNET,
    DeviceClass,
    FirewallRule,
    FleetPlan,
    PlanValidationResult,
)

from .allocator import ADMIN_RULE_NAME
from .profiles import DEFAULT_PROFILES, LAST_HOST_OCTET, DeviceProfile

UTILIZATION_WARNING = 0.8


def _class_index(device_class: DeviceClass) -> int:
    return list(DeviceClass).index(device_class)


def validate_plan(
    plan: FleetPlan,
    profiles: Mapping[DeviceClass, DeviceProfile] = DEFAULT_PROFILES,
) -> PlanValidationResult:
    """Check a finished or stored plan against the fleet's addressing policy.

    Instances are compared with their class profile, so a plan that is
    internally consistent but strays from the static class layout (wrong
    subnet, address in the reserved range, rule admitting another class's
    subnet) is still rejected.
    """
    errors: list[str] = []
    warnings: list[str] = []
    utilization: dict[DeviceClass, float] = {}

    expected_admin_source = f"{plan.management_address}/32"
    subnets_by_class: dict[DeviceClass, IPv4Network] = {}
    seen_addresses: dict[str, str] = {}

    for instance in plan.instances:
        address = str(instance.address)
        if address in seen_addresses:
            errors.append(
                f"Address {address} assigned to both "
                f"'{seen_addresses[address]}' and '{instance.name}'"
            )
        else:
            seen_addresses[address] = instance.name

        if instance.address not in instance.subnet:
            errors.append(
                f"'{instance.name}' address {address} is outside its subnet "
                f"{instance.subnet}"
            )

        subnets_by_class.setdefault(instance.device_class, instance.subnet)
        profile = profiles.get(instance.device_class)
        if profile is None:
            errors.append(
                f"'{instance.name}' has no profile for "
                f"{instance.device_class.label}"
            )
        elif instance.subnet != profile.subnet:
            errors.append(
                f"'{instance.name}' uses subnet {instance.subnet}, "
                f"expected {profile.subnet}"
            )
        else:
            offset = int(instance.address) - int(profile.subnet.network_address)
            if not profile.base_offset <= offset <= LAST_HOST_OCTET:
                errors.append(
                    f"'{instance.name}' address {address} is outside the "
                    f"assignable range .{profile.base_offset}-.{LAST_HOST_OCTET}"
                )

        admin = [r for r in instance.rules if r.name == ADMIN_RULE_NAME]
        if not admin:
            errors.append(f"'{instance.name}' has no administrative access rule")
        elif any(rule.source != expected_admin_source for rule in admin):
            errors.append(
                f"'{instance.name}' admin rule is not bound to the management "
                f"host {plan.management_address}"
            )

    for device_class, subnet in subnets_by_class.items():
        if not subnet.subnet_of(plan.address_space):
            errors.append(
                f"Subnet {subnet} ({device_class.label}) is outside address "
                f"space {plan.address_space}"
            )

    if DeviceClass.MANAGEMENT_HOST not in subnets_by_class:
        errors.append("Plan has no management host")
    elif str(plan.management_address) not in seen_addresses:
        errors.append(
            f"Management address {plan.management_address} is not assigned "
            "to any instance"
        )

    class_subnets = [(c, p.subnet) for c, p in profiles.items()]
    for device_class, subnet in subnets_by_class.items():
        if (device_class, subnet) not in class_subnets:
            class_subnets.append((device_class, subnet))
    errors.extend(_check_isolation(plan, class_subnets))
    errors.extend(_check_ordering(plan))
    errors.extend(_check_rule_consistency(plan))

    for device_class in DeviceClass:
        members = plan.by_class(device_class)
        if not members:
            continue
        first = members[0]
        profile = profiles.get(device_class)
        if profile is None:
            continue
        ratio = len(members) / profile.capacity
        utilization[device_class] = ratio
        if ratio > UTILIZATION_WARNING:
            warnings.append(
                f"Subnet {first.subnet} ({device_class.label}) is "
                f"{ratio:.0%} utilized"
            )

    return PlanValidationResult(
        errors=errors,
        warnings=warnings,
        instance_count=len(plan.instances),
        utilization=utilization,
    )


def _check_isolation(
    plan: FleetPlan, class_subnets: list[tuple[DeviceClass, IPv4Network]]
) -> list[str]:
    """Allow rules may only admit the device's own subnet or the jump host.

    ``class_subnets`` covers every class, including those absent from the plan.
    """
    errors: list[str] = []
    admin_source = IPv4Network(f"{plan.management_address}/32")
    reported: set[tuple[DeviceClass, str]] = set()

    for instance in plan.instances:
        for rule in instance.rules:
            if rule.access != "allow" or rule.source == INTERNET:
                continue
            if (instance.device_class, rule.name) in reported:
                continue

            try:
                source = IPv4Network(rule.source, strict=False)
            except ValueError:
                reported.add((instance.device_class, rule.name))
                errors.append(
                    f"Rule '{rule.name}' on {instance.device_class.label} has "
                    f"unrecognized source '{rule.source}'"
                )
                continue
            if source == admin_source:
                continue

            for other_class, other_subnet in class_subnets:
                if other_class == instance.device_class:
                    continue
                if source.overlaps(other_subnet):
                    reported.add((instance.device_class, rule.name))
                    errors.append(
                        f"Rule '{rule.name}' on {instance.device_class.label} "
                        f"admits traffic from {other_class.label} subnet "
                        f"{other_subnet}"
                    )
                    break

    return errors


def _check_ordering(plan: FleetPlan) -> list[str]:
    errors: list[str] = []
    previous: tuple[int, int] | None = None
    expected_ordinal: dict[DeviceClass, int] = {}

    for instance in plan.instances:
        key = (_class_index(instance.device_class), instance.ordinal)
        if previous is not None and key <= previous:
            errors.append(f"'{instance.name}' is out of canonical order")
        previous = key

        expected = expected_ordinal.get(instance.device_class, 0)
        if instance.ordinal != expected:
            errors.append(
                f"'{instance.name}' has ordinal {instance.ordinal}, "
                f"expected {expected}"
            )
        expected_ordinal[instance.device_class] = instance.ordinal + 1

    return errors


def _check_rule_consistency(plan: FleetPlan) -> list[str]:
    errors: list[str] = []
    reference: dict[DeviceClass, tuple[FirewallRule, ...]] = {}

    for instance in plan.instances:
        rules = reference.setdefault(instance.device_class, instance.rules)
        if rules != instance.rules:
            errors.append(
                f"'{instance.name}' rules differ from other "
                f"{instance.device_class.label} instances"
            )

    return errors
