from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from fleetplan.config import FLEET_FILENAME, sample_fleet_spec, write_fleet_spec
from fleetplan.models import FleetPlan

PLANS_DIR = "plans"
CURRENT_PLAN_FILE = "current.json"


class PlanStore:
    """Data directory holding the sample fleet file and the last saved plan."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._plans_dir = data_dir / PLANS_DIR
        self._fleet_path = data_dir / FLEET_FILENAME
        self._current_plan_path = self._plans_dir / CURRENT_PLAN_FILE

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def fleet_path(self) -> Path:
        return self._fleet_path

    @property
    def current_plan_path(self) -> Path:
        return self._current_plan_path

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._plans_dir.mkdir(parents=True, exist_ok=True)

    def save_plan(self, plan: FleetPlan) -> Path:
        self.ensure_dirs()
        self._current_plan_path.write_text(plan.model_dump_json(indent=2) + "\n")
        return self._current_plan_path

    def load_current_plan(self) -> FleetPlan | None:
        if not self._current_plan_path.exists():
            return None

        try:
            with self._current_plan_path.open("r") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Invalid JSON in plan file: {self._current_plan_path}\n{exc}"
            ) from exc

        try:
            return FleetPlan.model_validate(data)
        except ValidationError as exc:
            raise ValueError(
                f"Invalid plan file: {self._current_plan_path}\n{exc}"
            ) from exc

    def init(self, force: bool = False) -> bool:
        """Create the data directory and a sample fleet file.

        Returns True when the fleet file was written.
        """
        self.ensure_dirs()
        if self._fleet_path.exists() and not force:
            return False
        write_fleet_spec(sample_fleet_spec(), self._fleet_path)
        return True
