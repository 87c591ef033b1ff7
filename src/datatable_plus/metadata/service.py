"""
MetadataService: read-only facade over a mapping provider and a database
connection.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from datatable_plus.config import Settings
from datatable_plus.db import DatabaseConnection
from datatable_plus.exceptions import ConfigError, InvalidArgumentError, ServiceClosedError
from datatable_plus.metadata.catalog import CatalogQueries
from datatable_plus.metadata.declared import DeclaredMappingProvider
from datatable_plus.metadata.mapping import (
    ChainMappingProvider,
    MappingProvider,
    SqlAlchemyMappingProvider,
)
from datatable_plus.models import SchemaTable

logger = logging.getLogger(__name__)


class MetadataService:
    """
    Looks up model mappings and fetches table schemas.

    Both collaborators belong to the caller's unit of work. The service
    is not thread-safe; use one instance per logical operation.
    """

    def __init__(
        self,
        context: MappingProvider,
        connection: Optional[DatabaseConnection] = None,
        catalog_queries: Optional[CatalogQueries] = None,
        restore_connection_state: bool = True,
    ):
        """
        Args:
            context: Mapping provider answering table/column/key lookups
            connection: Database connection used for schema fetches. May
                be None for a mapping-only service.
            catalog_queries: Catalog query templates (bundled ones if omitted)
            restore_connection_state: Return the connection to its
                pre-call open/closed state after a schema fetch. When
                False the connection is always closed afterwards.
        """
        self.context = context
        self.connection = connection
        self.catalog_queries = catalog_queries or CatalogQueries()
        self.restore_connection_state = restore_connection_state
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> MetadataService:
        """
        Build a service from Settings: SQLAlchemy mappers first, then the
        declared mappings file if one is configured.

        Without a ``database_url`` the service answers mapping lookups
        only. Otherwise it owns its connection; call
        ``service.connection.dispose()`` when done to release the engine.
        """
        connection = None
        if settings.database_url:
            connection = DatabaseConnection(settings.database_url, echo=settings.echo_sql)

        providers: List[MappingProvider] = [SqlAlchemyMappingProvider()]
        if settings.mappings_file:
            providers.append(DeclaredMappingProvider.from_file(settings.mappings_file))

        return cls(
            context=ChainMappingProvider(providers),
            connection=connection,
            catalog_queries=CatalogQueries(settings.catalog_queries),
            restore_connection_state=settings.restore_connection_state,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_usable(self) -> None:
        if self._closed:
            raise ServiceClosedError("MetadataService is closed")

    def get_table_name(self, entity_type: type) -> Optional[str]:
        """
        Get the table name mapped for a model class.

        Returns:
            Table name, or None if the class is not mapped
        """
        if entity_type is None:
            raise InvalidArgumentError.null("entity_type")
        self._ensure_usable()
        return self.context.resolve_table_name(entity_type)

    def get_mappings(self, entity_type: type) -> Dict[str, str]:
        """
        Get the attribute name -> column name mapping for a model class.

        Returns:
            New dict per call; empty if the class is not mapped
        """
        if entity_type is None:
            raise InvalidArgumentError.null("entity_type")
        self._ensure_usable()
        return dict(self.context.resolve_mappings(entity_type))

    def get_key_names(self, entity_type: type) -> List[str]:
        """
        Get the primary key column names of a model class, in key order.

        Returns:
            Column names; empty if no key is declared
        """
        if entity_type is None:
            raise InvalidArgumentError.null("entity_type")
        self._ensure_usable()
        return list(self.context.resolve_key_names(entity_type))

    def get_table_schema(self, table_name: str) -> SchemaTable:
        """
        Fetch the column metadata of a database table.

        Runs the catalog query for the connection's dialect and loads the
        result set into a SchemaTable named after ``table_name``. Driver
        errors propagate unchanged.

        Args:
            table_name: Name of the database table

        Returns:
            SchemaTable mirroring the table's columns
        """
        if not isinstance(table_name, str) or not table_name.strip():
            raise InvalidArgumentError.null_or_whitespace("table_name")
        self._ensure_usable()
        if self.connection is None:
            raise ConfigError("database_url is not configured")

        sql = self.catalog_queries.for_dialect(self.connection.dialect_name)

        was_open = self.connection.is_open
        if not was_open:
            self.connection.open()
        had_transaction = self.connection.in_transaction

        try:
            frame = self.connection.read_frame(sql, {"table_name": table_name})
        finally:
            if not was_open or not self.restore_connection_state:
                self.connection.close()
            elif not had_transaction:
                # End the transaction the query autobegan; the caller's own stays
                self.connection.rollback()

        logger.info(f"Fetched schema for {table_name}: {len(frame)} columns")
        return SchemaTable(name=table_name, frame=frame)

    def close(self) -> None:
        """Release the mapping context and connection. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self.context.close()
        if self.connection is not None:
            self.connection.close()
        logger.debug("MetadataService closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
