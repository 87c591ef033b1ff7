"""
Settings for datatable_plus.

Settings come from an optional YAML file, with environment variables
taking precedence for the database URL and the config file location.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from datatable_plus.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_CONFIG = "DATATABLE_PLUS_CONFIG"
ENV_DATABASE_URL = "DATATABLE_PLUS_DATABASE_URL"


@dataclass
class Settings:
    """Runtime settings for the metadata service and CLI."""
    database_url: Optional[str] = None
    restore_connection_state: bool = True
    mappings_file: Optional[Path] = None
    catalog_queries: Dict[str, str] = field(default_factory=dict)
    echo_sql: bool = False

    def __post_init__(self):
        if isinstance(self.mappings_file, str):
            self.mappings_file = Path(self.mappings_file)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Settings:
        """Create from dictionary, rejecting unknown keys."""
        known = {"database_url", "restore_connection_state", "mappings_file", "catalog_queries", "echo_sql"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        queries = data.get("catalog_queries") or {}
        if not isinstance(queries, dict):
            raise ConfigError("catalog_queries must be a mapping of dialect to SQL")

        return cls(
            database_url=data.get("database_url"),
            restore_connection_state=bool(data.get("restore_connection_state", True)),
            mappings_file=data.get("mappings_file"),
            catalog_queries={str(k): str(v) for k, v in queries.items()},
            echo_sql=bool(data.get("echo_sql", False)),
        )


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Config file. Falls back to $DATATABLE_PLUS_CONFIG; with
            neither, defaults are used.

    Returns:
        Settings with $DATATABLE_PLUS_DATABASE_URL applied on top
    """
    if path is None:
        path = os.environ.get(ENV_CONFIG)

    data: Dict[str, Any] = {}
    if path:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")
        data = loaded
        logger.debug(f"Loaded settings from {path}")

    settings = Settings.from_dict(data)

    env_url = os.environ.get(ENV_DATABASE_URL)
    if env_url:
        settings.database_url = env_url

    return settings
