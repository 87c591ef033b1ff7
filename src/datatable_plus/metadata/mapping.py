"""
Mapping providers: table name, attribute/column mapping, and primary key
lookups for model classes.

MetadataService only depends on the MappingProvider protocol, so any
mapping mechanism (SQLAlchemy mappers, declared YAML files) can sit
behind it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence, runtime_checkable

from sqlalchemy import Column, inspect
from sqlalchemy.orm import Mapper, Session

logger = logging.getLogger(__name__)


@runtime_checkable
class MappingProvider(Protocol):
    """Capability interface over an ORM's mapping configuration."""

    def resolve_table_name(self, entity_type: type) -> Optional[str]:
        ...

    def resolve_mappings(self, entity_type: type) -> Dict[str, str]:
        ...

    def resolve_key_names(self, entity_type: type) -> List[str]:
        ...

    def close(self) -> None:
        ...


class SqlAlchemyMappingProvider:
    """
    Reads mapping information from SQLAlchemy mappers.

    Classes that are not mapped resolve to ``None`` / ``{}`` / ``[]``
    instead of raising.
    """

    def __init__(self, session: Optional[Session] = None):
        """
        Args:
            session: Optional ORM session owned by the caller's unit of
                work; closed when the provider is closed.
        """
        self.session = session

    @staticmethod
    def _mapper(entity_type: type) -> Optional[Mapper]:
        mapper = inspect(entity_type, raiseerr=False)
        if isinstance(mapper, Mapper):
            return mapper
        return None

    def resolve_table_name(self, entity_type: type) -> Optional[str]:
        mapper = self._mapper(entity_type)
        if mapper is None:
            return None
        return getattr(mapper.local_table, "name", None)

    def resolve_mappings(self, entity_type: type) -> Dict[str, str]:
        mapper = self._mapper(entity_type)
        if mapper is None:
            return {}

        mappings: Dict[str, str] = {}
        for prop in mapper.column_attrs:
            # column_property() over a SQL expression has no physical column
            columns = [c for c in prop.columns if isinstance(c, Column)]
            if columns:
                mappings[prop.key] = columns[0].name
        return mappings

    def resolve_key_names(self, entity_type: type) -> List[str]:
        mapper = self._mapper(entity_type)
        if mapper is None:
            return []
        return [col.name for col in mapper.primary_key]

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            logger.debug("Closed ORM session")


class ChainMappingProvider:
    """
    Tries providers in order; the first one that knows the class answers
    all lookups for it.
    """

    def __init__(self, providers: Sequence[MappingProvider]):
        self.providers = list(providers)

    def _provider_for(self, entity_type: type) -> Optional[MappingProvider]:
        for provider in self.providers:
            if provider.resolve_table_name(entity_type) is not None:
                return provider
        return None

    def resolve_table_name(self, entity_type: type) -> Optional[str]:
        provider = self._provider_for(entity_type)
        return provider.resolve_table_name(entity_type) if provider else None

    def resolve_mappings(self, entity_type: type) -> Dict[str, str]:
        provider = self._provider_for(entity_type)
        return provider.resolve_mappings(entity_type) if provider else {}

    def resolve_key_names(self, entity_type: type) -> List[str]:
        provider = self._provider_for(entity_type)
        return provider.resolve_key_names(entity_type) if provider else []

    def close(self) -> None:
        for provider in self.providers:
            provider.close()
