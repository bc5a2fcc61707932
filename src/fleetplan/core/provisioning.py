"""Shape a plan into the requests the provisioning layer submits."""

from __future__ import annotations

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network

from fleetplan.models import DeviceClass, FirewallRule, FleetPlan


@dataclass(frozen=True)
class SubnetRuleGroup:
    """One network security group, attached to one subnet."""

    name: str
    device_class: DeviceClass
    subnet: IPv4Network
    rules: tuple[FirewallRule, ...]
    members: tuple[IPv4Address, ...]


@dataclass(frozen=True)
class ComputeRequest:
    name: str
    device_class: DeviceClass
    vm_size: str
    subnet: IPv4Network
    private_address: IPv4Address


def group_rules_by_subnet(plan: FleetPlan) -> list[SubnetRuleGroup]:
    groups: list[SubnetRuleGroup] = []

    for device_class in DeviceClass:
        members = plan.by_class(device_class)
        if not members:
            continue
        # rule sets are identical across a class
        first = members[0]
        groups.append(
            SubnetRuleGroup(
                name=f"{device_class.value.replace('_', '-')}-nsg",
                device_class=device_class,
                subnet=first.subnet,
                rules=first.rules,
                members=tuple(m.address for m in members),
            )
        )

    return groups


def compute_requests(plan: FleetPlan) -> list[ComputeRequest]:
    return [
        ComputeRequest(
            name=instance.name,
            device_class=instance.device_class,
            vm_size=instance.vm_size,
            subnet=instance.subnet,
            private_address=instance.address,
        )
        for instance in plan.instances
    ]
