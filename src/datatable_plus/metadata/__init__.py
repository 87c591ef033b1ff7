"""
Metadata lookups for mapped model classes and database tables.

Provides the MetadataService facade, the mapping providers behind it,
and the per-dialect catalog queries used to read table schemas.
"""

from datatable_plus.metadata.catalog import CatalogQueries, load_catalog_queries
from datatable_plus.metadata.declared import DeclaredMappingProvider
from datatable_plus.metadata.mapping import (
    ChainMappingProvider,
    MappingProvider,
    SqlAlchemyMappingProvider,
)
from datatable_plus.metadata.service import MetadataService

__all__ = [
    "CatalogQueries",
    "load_catalog_queries",
    "DeclaredMappingProvider",
    "ChainMappingProvider",
    "MappingProvider",
    "SqlAlchemyMappingProvider",
    "MetadataService",
]
