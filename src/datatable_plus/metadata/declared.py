"""
Mapping provider backed by a YAML declaration file.

For classes with no ORM mapping, e.g. plain dataclasses used for bulk
loads. File layout:

    entities:
      myapp.models.Order:
        table: Orders
        columns:
          id: OrderId
          total: OrderTotal
        keys: [OrderId]

Entries are matched on the class's dotted path first, then on its bare
class name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from datatable_plus.exceptions import ConfigError

logger = logging.getLogger(__name__)


class DeclaredMappingProvider:
    """Resolves mappings from declarations loaded from YAML or a dict."""

    def __init__(self, entities: Optional[Dict[str, Dict[str, Any]]] = None):
        self._entities: Dict[str, Dict[str, Any]] = {}
        for name, entry in (entities or {}).items():
            self._entities[name] = self._validate(name, entry)

    @classmethod
    def from_file(cls, path: Path) -> DeclaredMappingProvider:
        """Load declarations from YAML. A missing file yields an empty provider."""
        path = Path(path)
        if not path.exists():
            logger.warning(f"Mappings file not found: {path}")
            return cls()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        entities = data.get("entities", {}) if isinstance(data, dict) else None
        if not isinstance(entities, dict):
            raise ConfigError(f"Mappings file must define an 'entities' mapping: {path}")

        provider = cls(entities)
        logger.info(f"Loaded {len(provider._entities)} declared mappings from {path}")
        return provider

    @staticmethod
    def _validate(name: str, entry: Any) -> Dict[str, Any]:
        if not isinstance(entry, dict) or not entry.get("table"):
            raise ConfigError(f"Declared mapping for {name} needs a 'table'")
        columns = entry.get("columns") or {}
        keys = entry.get("keys") or []
        if not isinstance(columns, dict):
            raise ConfigError(f"'columns' for {name} must be a mapping")
        if not isinstance(keys, list):
            raise ConfigError(f"'keys' for {name} must be a list")
        return {
            "table": str(entry["table"]),
            "columns": {str(k): str(v) for k, v in columns.items()},
            "keys": [str(k) for k in keys],
        }

    def _entry(self, entity_type: type) -> Optional[Dict[str, Any]]:
        dotted = f"{entity_type.__module__}.{entity_type.__qualname__}"
        return self._entities.get(dotted) or self._entities.get(entity_type.__name__)

    def resolve_table_name(self, entity_type: type) -> Optional[str]:
        entry = self._entry(entity_type)
        return entry["table"] if entry else None

    def resolve_mappings(self, entity_type: type) -> Dict[str, str]:
        entry = self._entry(entity_type)
        return dict(entry["columns"]) if entry else {}

    def resolve_key_names(self, entity_type: type) -> List[str]:
        entry = self._entry(entity_type)
        return list(entry["keys"]) if entry else []

    def close(self) -> None:
        pass
