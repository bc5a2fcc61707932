from __future__ import annotations

from dataclasses import dataclass

from fleetplan.models import DeviceClass, FleetPlan


@dataclass(frozen=True)
class ConnectionInstruction:
    name: str
    device_class: DeviceClass
    address: str
    command: str


def connection_instructions(
    plan: FleetPlan, ssh_user: str, jump_host: str | None = None
) -> list[ConnectionInstruction]:
    """Build SSH commands that reach every device through the jump host.

    ``jump_host`` is the externally reachable name of the management host;
    when omitted its private address is used.
    """
    jump = jump_host or str(plan.management_address)
    instructions: list[ConnectionInstruction] = []

    for instance in plan.instances:
        address = str(instance.address)
        if instance.address == plan.management_address:
            command = f"ssh {ssh_user}@{jump}"
        else:
            command = f"ssh -J {ssh_user}@{jump} {ssh_user}@{address}"
        instructions.append(
            ConnectionInstruction(
                name=instance.name,
                device_class=instance.device_class,
                address=address,
                command=command,
            )
        )

    return instructions
