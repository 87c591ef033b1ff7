"""Shared fixtures: a small ORM model set and an in-memory SQLite database."""

from types import SimpleNamespace
from typing import Optional

import pytest
from sqlalchemy import ForeignKey, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from datatable_plus.db import DatabaseConnection


class Base(DeclarativeBase):
    pass


class Order(Base):
    __tablename__ = "Orders"

    id: Mapped[int] = mapped_column("OrderId", primary_key=True)
    total: Mapped[float] = mapped_column("OrderTotal")
    note: Mapped[Optional[str]] = mapped_column("Note", String(200))


class OrderLine(Base):
    __tablename__ = "OrderLines"

    order_id: Mapped[int] = mapped_column("OrderId", ForeignKey("Orders.OrderId"), primary_key=True)
    line_no: Mapped[int] = mapped_column("LineNo", primary_key=True)
    sku: Mapped[str] = mapped_column("Sku", String(32))


class PlainRecord:
    """Not mapped by any ORM."""

    def __init__(self, code: str):
        self.code = code


@pytest.fixture
def models():
    return SimpleNamespace(Order=Order, OrderLine=OrderLine, PlainRecord=PlainRecord)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def connection(engine):
    conn = DatabaseConnection(engine)
    yield conn
    conn.close()
