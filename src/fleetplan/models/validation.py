from __future__ import annotations

from dataclasses import dataclass, field

from .device import DeviceClass


@dataclass
class PlanValidationResult:
    errors: list[str]
    warnings: list[str]
    instance_count: int
    utilization: dict[DeviceClass, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
