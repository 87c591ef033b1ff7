"""Tests for core data models."""

import pandas as pd
import pytest

from datatable_plus.models import (
    ColumnMetadata,
    DataType,
    SchemaTable,
    TableMetadata,
    normalize_type,
)


class TestNormalizeType:
    """Tests for catalog type normalization."""

    @pytest.mark.parametrize("native,expected", [
        ("VARCHAR(50)", DataType.STRING),
        ("nvarchar", DataType.STRING),
        ("character varying", DataType.STRING),
        ("INTEGER", DataType.INTEGER),
        ("bigint", DataType.BIGINT),
        ("NUMBER(18, 2)", DataType.DECIMAL),
        ("double precision", DataType.DOUBLE),
        ("datetime2", DataType.TIMESTAMP),
        ("bit", DataType.BOOLEAN),
        ("varbinary(max)", DataType.BINARY),
        ("geometry", DataType.UNKNOWN),
        (None, DataType.UNKNOWN),
        ("", DataType.UNKNOWN),
    ])
    def test_mapping(self, native, expected):
        assert normalize_type(native) == expected


class TestColumnMetadata:
    """Tests for ColumnMetadata."""

    def test_basic_column(self):
        col = ColumnMetadata(
            name="ORDER_ID",
            data_type=DataType.BIGINT,
            nullable=False,
            is_primary_key=True,
        )
        assert col.name == "ORDER_ID"
        assert col.data_type == DataType.BIGINT
        assert col.nullable is False
        assert col.is_primary_key is True

    def test_serialization(self):
        col = ColumnMetadata(
            name="AMOUNT",
            data_type=DataType.DECIMAL,
            precision=18,
            scale=2,
            native_type="numeric",
        )
        restored = ColumnMetadata.from_dict(col.to_dict())

        assert restored == col


class TestTableMetadata:
    """Tests for TableMetadata."""

    def test_basic_table(self):
        table = TableMetadata(
            name="ORDERS",
            columns=[
                ColumnMetadata(name="ID", data_type=DataType.BIGINT, is_primary_key=True),
                ColumnMetadata(name="TOTAL", data_type=DataType.DECIMAL),
            ],
            primary_key=["ID"],
        )
        assert table.column_names == ["ID", "TOTAL"]
        assert table.get_column("id").is_primary_key is True
        assert table.get_column("missing") is None
        assert [c.name for c in table.get_pk_columns()] == ["ID"]

    def test_serialization(self):
        table = TableMetadata(
            name="ORDERS",
            columns=[ColumnMetadata(name="ID", data_type=DataType.INTEGER)],
            primary_key=["ID"],
        )
        restored = TableMetadata.from_dict(table.to_dict())

        assert restored.name == "ORDERS"
        assert restored.column_names == ["ID"]
        assert restored.primary_key == ["ID"]


class TestSchemaTable:
    """Tests for SchemaTable."""

    @pytest.fixture
    def catalog_frame(self):
        return pd.DataFrame([
            {
                "column_name": "Total",
                "ordinal_position": 2,
                "data_type": "numeric",
                "is_nullable": "YES",
                "max_length": None,
                "numeric_precision": 18,
                "numeric_scale": 2,
                "column_default": None,
                "is_primary_key": 0,
            },
            {
                "column_name": "Id",
                "ordinal_position": 1,
                "data_type": "int",
                "is_nullable": "NO",
                "max_length": None,
                "numeric_precision": 10,
                "numeric_scale": 0,
                "column_default": None,
                "is_primary_key": 1,
            },
            {
                "column_name": "Code",
                "ordinal_position": 3,
                "data_type": "varchar",
                "is_nullable": "NO",
                "max_length": 12,
                "numeric_precision": None,
                "numeric_scale": None,
                "column_default": "'X'",
                "is_primary_key": 0,
            },
        ])

    def test_name_is_recorded_on_frame(self, catalog_frame):
        schema = SchemaTable(name="Orders", frame=catalog_frame)

        assert schema.name == "Orders"
        assert schema.frame.attrs["table_name"] == "Orders"
        assert len(schema) == 3
        assert not schema.is_empty

    def test_empty_default(self):
        schema = SchemaTable(name="Orders")
        assert schema.is_empty
        assert schema.column_names == []

    def test_to_table_metadata(self, catalog_frame):
        metadata = SchemaTable(name="Orders", frame=catalog_frame).to_table_metadata()

        assert metadata.name == "Orders"
        assert metadata.column_names == ["Id", "Total", "Code"]
        assert metadata.primary_key == ["Id"]

        total = metadata.get_column("Total")
        assert total.data_type == DataType.DECIMAL
        assert total.nullable is True
        assert total.precision == 18
        assert total.scale == 2
        assert total.max_length is None

        code = metadata.get_column("Code")
        assert code.data_type == DataType.STRING
        assert code.nullable is False
        assert code.max_length == 12
        assert code.default_value == "'X'"
        assert code.native_type == "varchar"

    def test_to_table_metadata_tolerates_missing_columns(self):
        frame = pd.DataFrame([{"column_name": "A", "data_type": "text"}])
        metadata = SchemaTable(name="T", frame=frame).to_table_metadata()

        col = metadata.get_column("A")
        assert col.data_type == DataType.STRING
        assert col.nullable is True
        assert col.is_primary_key is False
        assert col.ordinal_position is None
