"""Fleet spec files.

A fleet file is YAML with a ``devices`` mapping of device class to count and
an optional ``address_space``::

    address_space: 10.0.0.0/16
    devices:
      management_host: 1
      camera: 2
"""

from __future__ import annotations

from ipaddress import IPv4Network
from pathlib import Path

import yaml

from fleetplan.models import DeviceClass, FleetSpec

SAMPLE_COUNTS = {
    DeviceClass.MANAGEMENT_HOST: 1,
    DeviceClass.CAMERA: 2,
    DeviceClass.WIRELESS_ACCESS_POINT: 3,
    DeviceClass.PRINTER: 2,
}


def parse_fleet_spec(
    data: dict | None, default_address_space: IPv4Network | None = None
) -> FleetSpec:
    data = dict(data or {})
    devices = data.pop("devices", None)
    payload: dict = {"counts": {} if devices is None else devices}

    address_space = data.pop("address_space", None)
    if address_space is None:
        address_space = default_address_space
    if address_space is not None:
        payload["address_space"] = address_space

    if data:
        unknown = ", ".join(sorted(str(key) for key in data))
        raise ValueError(f"Unknown fleet file keys: {unknown}")

    return FleetSpec.model_validate(payload)


def load_fleet_spec(
    path: Path, default_address_space: IPv4Network | None = None
) -> FleetSpec:
    if not path.exists():
        raise FileNotFoundError(f"Fleet file not found: {path}")

    try:
        with path.open() as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in fleet file: {path}\n{exc}") from exc

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Fleet file must contain a mapping: {path}")

    try:
        return parse_fleet_spec(data, default_address_space)
    except ValueError as exc:
        raise ValueError(f"Invalid fleet file: {path}\n{exc}") from exc


def render_fleet_yaml(spec: FleetSpec) -> str:
    document = {
        "address_space": str(spec.address_space),
        "devices": {c.value: spec.count(c) for c in DeviceClass},
    }
    header = (
        "# fleetplan fleet definition\n"
        "# Requested instance count per device class\n\n"
    )
    return header + yaml.safe_dump(document, default_flow_style=False, sort_keys=False)


def write_fleet_spec(spec: FleetSpec, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_fleet_yaml(spec))


def sample_fleet_spec() -> FleetSpec:
    return FleetSpec(counts=SAMPLE_COUNTS)
