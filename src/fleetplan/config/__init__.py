from __future__ import annotations

from .fleet import (
    load_fleet_spec,
    parse_fleet_spec,
    render_fleet_yaml,
    sample_fleet_spec,
    write_fleet_spec,
)
from .paths import (
    APP_NAME,
    CONFIG_FILENAME,
    FLEET_FILENAME,
    default_config_path,
    default_data_dir,
    expand_path,
)
from .settings import (
    CONFIG_ENV_VAR,
    InventoryConfig,
    PlanningConfig,
    Settings,
    StorageConfig,
    data_dir_from_settings,
    get_settings,
    load_settings,
    render_settings_toml,
    resolve_config_path,
    write_settings,
)

__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "FLEET_FILENAME",
    "InventoryConfig",
    "PlanningConfig",
    "Settings",
    "StorageConfig",
    "data_dir_from_settings",
    "default_config_path",
    "default_data_dir",
    "expand_path",
    "get_settings",
    "load_fleet_spec",
    "load_settings",
    "parse_fleet_spec",
    "render_fleet_yaml",
    "render_settings_toml",
    "resolve_config_path",
    "sample_fleet_spec",
    "write_fleet_spec",
    "write_settings",
]
