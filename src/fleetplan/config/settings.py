from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from ipaddress import IPv4Network
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from fleetplan.models import DEFAULT_ADDRESS_SPACE

from .paths import default_config_path, default_data_dir, expand_path

CONFIG_ENV_VAR = "FLEETPLAN_CONFIG"


class StorageConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class PlanningConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    address_space: IPv4Network = IPv4Network(DEFAULT_ADDRESS_SPACE)


class InventoryConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    ssh_user: str = Field(default="azureuser", min_length=1)
    jump_host: str | None = None


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    storage: StorageConfig = Field(default_factory=StorageConfig)
    planning: PlanningConfig = Field(default_factory=PlanningConfig)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.storage.path)


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# fleetplan configuration",
        "",
        "[storage]",
        f"path = {_toml_string(settings.storage.path)}",
        "",
        "[planning]",
        f"address_space = {_toml_string(str(settings.planning.address_space))}",
        "",
        "[inventory]",
        f"ssh_user = {_toml_string(settings.inventory.ssh_user)}",
    ]
    if settings.inventory.jump_host:
        lines.append(f"jump_host = {_toml_string(settings.inventory.jump_host)}")
    lines.append("")
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
