"""
Catalog query templates.

The SQL used to read a table's column metadata differs per database, so
it lives in a resource file keyed by SQLAlchemy dialect name rather than
in code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from datatable_plus.exceptions import ConfigError, UnsupportedDialectError

logger = logging.getLogger(__name__)

DEFAULT_QUERIES_FILE = Path(__file__).parent / "resources" / "catalog_queries.yaml"


def load_catalog_queries(path: Optional[Path] = None) -> Dict[str, str]:
    """Load dialect -> SQL templates from a YAML file."""
    path = Path(path) if path else DEFAULT_QUERIES_FILE
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Catalog query file must contain a mapping: {path}")

    return {str(dialect).lower(): str(sql) for dialect, sql in data.items()}


class CatalogQueries:
    """Bundled catalog queries with per-dialect overrides applied on top."""

    def __init__(self, overrides: Optional[Dict[str, str]] = None, path: Optional[Path] = None):
        self._queries = load_catalog_queries(path)
        for dialect, sql in (overrides or {}).items():
            logger.debug(f"Overriding catalog query for dialect: {dialect}")
            self._queries[dialect.lower()] = sql

    @property
    def dialects(self) -> List[str]:
        return sorted(self._queries)

    def for_dialect(self, dialect: str) -> str:
        """Return the catalog query for ``dialect`` or raise UnsupportedDialectError."""
        try:
            return self._queries[dialect.lower()]
        except KeyError:
            raise UnsupportedDialectError(dialect) from None
