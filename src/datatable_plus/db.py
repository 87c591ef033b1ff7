"""
Database connection handle built on SQLAlchemy.

Wraps an Engine and tracks a single open Connection, so callers can ask
whether the handle is open and open or close it explicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, CursorResult, Engine

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Open/close-able connection over a SQLAlchemy engine.

    The handle is not thread-safe; use one per unit of work.
    """

    def __init__(self, engine: Union[str, Engine], echo: bool = False):
        """
        Initialize the handle. No connection is made until ``open()``.

        Args:
            engine: SQLAlchemy Engine, or a database URL to build one from
            echo: Log emitted SQL (only used when building from a URL)
        """
        if isinstance(engine, str):
            self._engine = create_engine(engine, echo=echo)
            self._owns_engine = True
        else:
            self._engine = engine
            self._owns_engine = False
        self._conn: Optional[Connection] = None

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    @property
    def is_open(self) -> bool:
        return self._conn is not None and not self._conn.closed

    @property
    def is_closed(self) -> bool:
        return not self.is_open

    def open(self) -> None:
        """Establish database connection."""
        if self.is_open:
            return
        self._conn = self._engine.connect()
        logger.debug(f"Opened connection to {self._engine.url.render_as_string(hide_password=True)}")

    def close(self) -> None:
        """Close database connection."""
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug("Closed connection")

    def dispose(self) -> None:
        """Close the connection and release the engine's pool if we built it."""
        self.close()
        if self._owns_engine:
            self._engine.dispose()

    def _require_open(self) -> Connection:
        if not self.is_open:
            raise RuntimeError("Connection is not open")
        return self._conn

    @property
    def in_transaction(self) -> bool:
        return self.is_open and self._conn.in_transaction()

    def rollback(self) -> None:
        """Roll back the current transaction, if any."""
        if self.in_transaction:
            self._conn.rollback()

    def execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> CursorResult:
        """Execute SQL text with bound parameters on the open connection."""
        return self._require_open().execute(text(sql), params or {})

    def read_frame(self, sql: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute SQL text and load the full result set into a DataFrame.

        Driver errors propagate as raised by SQLAlchemy, unwrapped.
        """
        result = self.execute(sql, params)
        return pd.DataFrame(result.fetchall(), columns=list(result.keys()))

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
