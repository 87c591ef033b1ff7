"""
DataTable Plus - ORM mapping and table schema metadata

Looks up how model classes map onto database tables and fetches a
table's column metadata from the database catalog.

Features:
- Table name, attribute/column mapping, and primary key lookups for
  SQLAlchemy models or YAML-declared classes
- Catalog-driven schema fetch into a pandas DataFrame for SQLite,
  PostgreSQL, MySQL, SQL Server and Oracle
"""

__version__ = "0.1.0"

from datatable_plus.models import (
    ColumnMetadata,
    DataType,
    SchemaTable,
    TableMetadata,
)

from datatable_plus.config import Settings, load_settings
from datatable_plus.db import DatabaseConnection
from datatable_plus.exceptions import (
    ConfigError,
    DataTablePlusError,
    InvalidArgumentError,
    ServiceClosedError,
    UnsupportedDialectError,
)

from datatable_plus.metadata import (
    CatalogQueries,
    ChainMappingProvider,
    DeclaredMappingProvider,
    MappingProvider,
    MetadataService,
    SqlAlchemyMappingProvider,
)

__all__ = [
    # Models
    "ColumnMetadata",
    "DataType",
    "SchemaTable",
    "TableMetadata",
    # Config and connection
    "Settings",
    "load_settings",
    "DatabaseConnection",
    # Errors
    "ConfigError",
    "DataTablePlusError",
    "InvalidArgumentError",
    "ServiceClosedError",
    "UnsupportedDialectError",
    # Metadata
    "CatalogQueries",
    "ChainMappingProvider",
    "DeclaredMappingProvider",
    "MappingProvider",
    "MetadataService",
    "SqlAlchemyMappingProvider",
]
