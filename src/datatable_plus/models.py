"""
Core data models for the datatable_plus package.

Defines the schema table returned by catalog lookups and the normalized
column/table metadata derived from it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd


class DataType(str, Enum):
    """Normalized data types across catalog dialects."""
    STRING = "string"
    INTEGER = "integer"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    FLOAT = "float"
    DOUBLE = "double"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    BINARY = "binary"
    UNKNOWN = "unknown"


# Catalog type name (upper case, without size suffix) -> normalized type
CATALOG_TYPE_MAP = {
    "CHAR": DataType.STRING,
    "NCHAR": DataType.STRING,
    "VARCHAR": DataType.STRING,
    "VARCHAR2": DataType.STRING,
    "NVARCHAR": DataType.STRING,
    "NVARCHAR2": DataType.STRING,
    "CHARACTER": DataType.STRING,
    "CHARACTER VARYING": DataType.STRING,
    "TEXT": DataType.STRING,
    "NTEXT": DataType.STRING,
    "CLOB": DataType.STRING,
    "NCLOB": DataType.STRING,
    "LONG": DataType.STRING,
    "UNIQUEIDENTIFIER": DataType.STRING,
    "UUID": DataType.STRING,
    "INT": DataType.INTEGER,
    "INTEGER": DataType.INTEGER,
    "SMALLINT": DataType.INTEGER,
    "TINYINT": DataType.INTEGER,
    "MEDIUMINT": DataType.INTEGER,
    "BIGINT": DataType.BIGINT,
    "NUMBER": DataType.DECIMAL,
    "NUMERIC": DataType.DECIMAL,
    "DECIMAL": DataType.DECIMAL,
    "MONEY": DataType.DECIMAL,
    "SMALLMONEY": DataType.DECIMAL,
    "REAL": DataType.FLOAT,
    "FLOAT": DataType.FLOAT,
    "BINARY_FLOAT": DataType.FLOAT,
    "DOUBLE": DataType.DOUBLE,
    "DOUBLE PRECISION": DataType.DOUBLE,
    "BINARY_DOUBLE": DataType.DOUBLE,
    "DATE": DataType.DATE,
    "DATETIME": DataType.TIMESTAMP,
    "DATETIME2": DataType.TIMESTAMP,
    "SMALLDATETIME": DataType.TIMESTAMP,
    "DATETIMEOFFSET": DataType.TIMESTAMP,
    "TIMESTAMP": DataType.TIMESTAMP,
    "TIMESTAMP WITHOUT TIME ZONE": DataType.TIMESTAMP,
    "TIMESTAMP WITH TIME ZONE": DataType.TIMESTAMP,
    "TIMESTAMP WITH LOCAL TIME ZONE": DataType.TIMESTAMP,
    "BIT": DataType.BOOLEAN,
    "BOOL": DataType.BOOLEAN,
    "BOOLEAN": DataType.BOOLEAN,
    "BINARY": DataType.BINARY,
    "VARBINARY": DataType.BINARY,
    "BLOB": DataType.BINARY,
    "BYTEA": DataType.BINARY,
    "RAW": DataType.BINARY,
    "LONG RAW": DataType.BINARY,
    "IMAGE": DataType.BINARY,
}

_SIZE_SUFFIX = re.compile(r"\s*\(.*\)")


def normalize_type(type_name: Optional[str]) -> DataType:
    """Map a catalog type name such as ``VARCHAR(50)`` to a DataType."""
    if not type_name:
        return DataType.UNKNOWN
    base = _SIZE_SUFFIX.sub("", str(type_name)).strip().upper()
    return CATALOG_TYPE_MAP.get(base, DataType.UNKNOWN)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def _truthy_flag(value: Any) -> bool:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return False
    if isinstance(value, str):
        return value.strip().upper() in ("Y", "YES", "TRUE", "1")
    return bool(value)


@dataclass
class ColumnMetadata:
    """Metadata for a single column."""
    name: str
    data_type: DataType
    nullable: bool = True
    is_primary_key: bool = False
    ordinal_position: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    max_length: Optional[int] = None
    default_value: Optional[Any] = None
    native_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "data_type": self.data_type.value,
            "nullable": self.nullable,
            "is_primary_key": self.is_primary_key,
            "ordinal_position": self.ordinal_position,
            "precision": self.precision,
            "scale": self.scale,
            "max_length": self.max_length,
            "default_value": self.default_value,
            "native_type": self.native_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnMetadata:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            data_type=DataType(data["data_type"]),
            nullable=data.get("nullable", True),
            is_primary_key=data.get("is_primary_key", False),
            ordinal_position=data.get("ordinal_position"),
            precision=data.get("precision"),
            scale=data.get("scale"),
            max_length=data.get("max_length"),
            default_value=data.get("default_value"),
            native_type=data.get("native_type"),
        )


@dataclass
class TableMetadata:
    """Metadata for a database table."""
    name: str
    columns: List[ColumnMetadata] = field(default_factory=list)
    primary_key: List[str] = field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        """Return list of column names."""
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Optional[ColumnMetadata]:
        """Get column by name (case-insensitive)."""
        name_lower = name.lower()
        for col in self.columns:
            if col.name.lower() == name_lower:
                return col
        return None

    def get_pk_columns(self) -> List[ColumnMetadata]:
        """Get primary key columns."""
        return [c for c in self.columns if c.is_primary_key]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "primary_key": self.primary_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableMetadata:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            columns=[ColumnMetadata.from_dict(c) for c in data.get("columns", [])],
            primary_key=data.get("primary_key", []),
        )


@dataclass(eq=False)
class SchemaTable:
    """
    In-memory mirror of a database table's column metadata.

    ``frame`` holds the catalog result set as returned by the driver: one
    row per column of the physical table, with the catalog query's column
    names and ordering. The instance is built per call and owned by the
    caller.
    """
    name: str
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)

    def __post_init__(self):
        self.frame.attrs["table_name"] = self.name

    @property
    def column_names(self) -> List[str]:
        """Names of the catalog result set columns."""
        return [str(c) for c in self.frame.columns]

    @property
    def is_empty(self) -> bool:
        """True when the catalog returned no rows (unknown table)."""
        return self.frame.empty

    def __len__(self) -> int:
        return len(self.frame)

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as plain dictionaries, in catalog order."""
        return self.frame.to_dict(orient="records")

    def to_table_metadata(self) -> TableMetadata:
        """
        Normalize the catalog rows into a TableMetadata.

        Expects the column set projected by the bundled catalog queries
        (``column_name``, ``data_type``, ``is_nullable`` and friends).
        Missing optional columns are treated as unknown.
        """
        columns = []
        for row in self.to_records():
            native_type = row.get("data_type")
            mapped_type = normalize_type(native_type)
            max_length = _optional_int(row.get("max_length"))
            columns.append(ColumnMetadata(
                name=row["column_name"],
                data_type=mapped_type,
                nullable=_truthy_flag(row.get("is_nullable", "YES")),
                is_primary_key=_truthy_flag(row.get("is_primary_key")),
                ordinal_position=_optional_int(row.get("ordinal_position")),
                precision=_optional_int(row.get("numeric_precision")),
                scale=_optional_int(row.get("numeric_scale")),
                max_length=max_length if mapped_type == DataType.STRING else None,
                default_value=row.get("column_default"),
                native_type=native_type,
            ))

        columns.sort(key=lambda c: c.ordinal_position if c.ordinal_position is not None else 0)
        return TableMetadata(
            name=self.name,
            columns=columns,
            primary_key=[c.name for c in columns if c.is_primary_key],
        )
