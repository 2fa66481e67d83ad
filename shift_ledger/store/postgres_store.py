from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import psycopg2
from psycopg2.extras import execute_values

from ..codec.schema import CANONICAL_SCHEMA
from .base import StoreError, StoreSnapshot

"""PostgreSQL store.

Rows live in one table of text columns named after the schema, plus a
``row_id`` bigserial that keeps append order. The header returned by
read_all is the table's column list (minus row_id) in ordinal order, so a
table created with extra or re-ordered columns still decodes by name.
"""

__all__ = [
    "PostgresStore",
    "ROW_ID_COLUMN",
]

logger = logging.getLogger(__name__)

ROW_ID_COLUMN = "row_id"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


class PostgresStore:
    def __init__(
        self,
        dsn: str,
        table: str = "shift_submissions",
        connect: Callable[[str], Any] | None = None,
    ) -> None:
        if not _IDENTIFIER_RE.match(table):
            raise ValueError(f"invalid table name: {table!r}")
        self.dsn = dsn
        self.table = table
        self._connect = connect or psycopg2.connect
        self._table_ready = False

    def describe(self) -> str:
        return f"postgres:{self.table}"

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        """Yield a cursor inside one transaction (commit on success, rollback on error)."""
        conn = self._connect(self.dsn)
        try:
            cur = conn.cursor()
            try:
                yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cur.close()
        finally:
            conn.close()

    def _create_sql(self) -> str:
        cols_sql = ", ".join(f"{_quote(c)} text NOT NULL DEFAULT ''" for c in CANONICAL_SCHEMA)
        return (
            f"CREATE TABLE IF NOT EXISTS {_quote(self.table)} "
            f"({_quote(ROW_ID_COLUMN)} bigserial PRIMARY KEY, {cols_sql})"
        )

    def ensure_table(self) -> None:
        """Create the table with the canonical columns if it does not exist."""
        try:
            with self._cursor() as cur:
                cur.execute(self._create_sql())
        except Exception as e:
            raise StoreError(f"failed creating {self.describe()}: {e}") from e
        self._table_ready = True

    def _columns(self, cur: Any) -> list[str]:
        cur.execute(
            "SELECT column_name FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = %s "
            "ORDER BY ordinal_position",
            (self.table,),
        )
        return [r[0] for r in cur.fetchall()]

    def append(self, row: Sequence[str]) -> None:
        cols_sql = ",".join(_quote(c) for c in CANONICAL_SCHEMA)
        base_sql = f"INSERT INTO {_quote(self.table)} ({cols_sql}) VALUES %s"
        values = [tuple(str(c) for c in row)]
        try:
            with self._cursor() as cur:
                # first append per instance creates the table in the same transaction
                if not self._table_ready:
                    cur.execute(self._create_sql())
                execute_values(cur, base_sql, values)
        except Exception as e:
            raise StoreError(f"failed appending to {self.describe()}: {e}") from e
        self._table_ready = True

    def read_all(self) -> StoreSnapshot:
        try:
            with self._cursor() as cur:
                all_columns = self._columns(cur)
                columns = [c for c in all_columns if c != ROW_ID_COLUMN]
                if not columns:
                    logger.info(f"postgres store: table {self.table} not found")
                    return StoreSnapshot(header=None, rows=[])
                cols_sql = ",".join(_quote(c) for c in columns)
                order = f" ORDER BY {_quote(ROW_ID_COLUMN)}" if ROW_ID_COLUMN in all_columns else ""
                cur.execute(f"SELECT {cols_sql} FROM {_quote(self.table)}{order}")
                rows = [["" if v is None else str(v) for v in r] for r in cur.fetchall()]
        except Exception as e:
            raise StoreError(f"failed reading {self.describe()}: {e}") from e
        return StoreSnapshot(header=columns, rows=rows)
