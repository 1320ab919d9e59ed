"""
Query gateway: the single place statements are sent to the database.

SELECTs take caller-written SQL (with optional bound parameters). Writes are
built from ColumnValue lists against the tables declared in
inspection_db.models and always use bound parameters; the rendered text
(``INSERT INTO t(a, b) VALUES ('x', NULL)``) is only used for logging and
for QueryError messages.

Every successful write notifies subscribers with a WriteIntent naming the
table, the kind of write and the affected row.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inspection_db.connection import Base, open_connection
from inspection_db.exceptions import DuplicateEntryError, QueryError, RestrictedTableError
from inspection_db.models import RELATION_SUFFIX
from inspection_db.statistics import ConnectionStatistics

logger = logging.getLogger(__name__)

DUPLICATE_MARKERS = (
    'UNIQUE constraint failed',
    'duplicate key',
    'Duplicate entry',
    'Violation of PRIMARY KEY constraint',
    'Violation of UNIQUE KEY constraint',
)


class QueryEvent(Enum):
    """Coarse kind of write reported to subscribers."""
    NONE = 'None'
    UPDATE = 'UPDATE'
    INSERT = 'INSERT'


@dataclass(frozen=True)
class WriteIntent:
    """What was written: carried alongside the write, never parsed out of SQL."""
    table: str
    kind: QueryEvent
    row_id: Optional[int] = None


def render_insert(table_name, values):
    columns = ', '.join(v.column for v in values)
    literals = ', '.join(v.literal for v in values)
    return f"INSERT INTO {table_name}({columns}) VALUES ({literals})"


def render_update(table_name, values, where_clause):
    assignments = ', '.join(f"{v.column}={v.literal}" for v in values)
    return f"UPDATE {table_name} SET {assignments} WHERE {where_clause}"


def render_delete(table_name, where_clause):
    return f"DELETE FROM {table_name} WHERE {where_clause}"


def _where(where_clause, params):
    clause = text(where_clause)
    if params:
        clause = clause.bindparams(**params)
    return clause


def _is_duplicate(diagnostic):
    return any(marker in diagnostic for marker in DUPLICATE_MARKERS)


class QueryGateway:
    """Executes statements one connection at a time against an engine."""

    def __init__(self, engine, metadata=None):
        # Import models to ensure they're registered with Base
        from inspection_db import models  # noqa: F401

        self.engine = engine
        self.metadata = metadata if metadata is not None else Base.metadata
        self.last_statistics = ConnectionStatistics()
        self.all_statistics = ConnectionStatistics()
        self._call_count = 0
        self._listeners: List[Callable[[WriteIntent], None]] = []
        self._lock = threading.Lock()

    @property
    def call_count(self):
        """Number of statements sent, successful or not."""
        return self._call_count

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self, listener: Callable[[WriteIntent], None]):
        """Register a callable to receive a WriteIntent after each successful write."""
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, intent):
        for listener in list(self._listeners):
            try:
                listener(intent)
            except Exception:
                logger.exception(f"Database-modified listener failed for {intent}")

    # =========================================================================
    # READS
    # =========================================================================

    def select(self, query, params=None):
        """
        Run a SELECT and return its rows as dictionaries.

        The caller owns the SQL text; pass values through ``params`` and
        reference them as ``:name`` rather than formatting them in.
        """
        statement = text(query)

        def work(conn):
            return [dict(row._mapping) for row in conn.execute(statement, params or {})]

        rows, stats = self._execute(query, work)
        stats.select_count = 1
        stats.select_rows = len(rows)
        self._record(stats)
        return rows

    def select_where(self, column, table_name, where_clause, params=None):
        return self.select(f"SELECT {column} FROM {table_name} WHERE {where_clause}", params)

    # =========================================================================
    # WRITES
    # =========================================================================

    def insert(self, table_name, values, source=None):
        """
        Insert one row.

        Args:
            table_name: Table to insert into
            values: ColumnValue list
            source: The in-memory object being saved, reported on duplicates

        Returns:
            The identity assigned by the database, or None for tables
            without a single-column identity
        """
        values = list(values)
        query = render_insert(table_name, values)
        table = self._table(table_name, query)
        statement = table.insert().values({v.column: v.param for v in values})

        def work(conn):
            result = conn.execute(statement)
            return result.rowcount, self._identity(table, result)

        (rowcount, identity), stats = self._execute(query, work, source=source)
        stats.idu_count = 1
        stats.idu_rows = max(rowcount, 0)
        self._record(stats)

        self._notify(WriteIntent(table_name, QueryEvent.INSERT, identity))
        return identity

    def update(self, table_name, values, where_clause, params=None, row_id=None, source=None):
        """
        Update the rows matching ``where_clause``.

        Args:
            row_id: Identity of the row being updated, reported to subscribers
        """
        values = list(values)
        query = render_update(table_name, values, where_clause)
        table = self._table(table_name, query)
        statement = (
            table.update()
            .where(_where(where_clause, params))
            .values({v.column: v.param for v in values})
        )

        rowcount, stats = self._execute(query, lambda conn: conn.execute(statement).rowcount, source=source)
        stats.idu_count = 1
        stats.idu_rows = max(rowcount, 0)
        self._record(stats)

        self._notify(WriteIntent(table_name, QueryEvent.UPDATE, row_id))
        return True

    def delete(self, table_name, where_clause, params=None):
        """Delete rows from a contact relation table."""
        query = render_delete(table_name, where_clause)
        if not table_name.endswith(RELATION_SUFFIX):
            logger.error(f"Refused delete outside the relation tables: {query}")
            raise RestrictedTableError(
                f"Deletes are only permitted on *{RELATION_SUFFIX} tables, not '{table_name}'"
            )

        table = self._table(table_name, query)
        statement = table.delete().where(_where(where_clause, params))

        rowcount, stats = self._execute(query, lambda conn: conn.execute(statement).rowcount)
        stats.idu_count = 1
        stats.idu_rows = max(rowcount, 0)
        self._record(stats)

        self._notify(WriteIntent(table_name, QueryEvent.NONE))
        return True

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _table(self, table_name, query):
        table = self.metadata.tables.get(table_name)
        if table is None:
            raise QueryError(query, f"Unknown table '{table_name}'")
        return table

    @staticmethod
    def _identity(table, result):
        primary_key = list(table.primary_key.columns)
        if len(primary_key) != 1 or not primary_key[0].autoincrement:
            return None
        inserted = result.inserted_primary_key
        return inserted[0] if inserted else None

    def _execute(self, query, work, source=None):
        """Open a connection, run ``work(conn)``, close it, and time the call."""
        with self._lock:
            self._call_count += 1

        logger.debug(f"SQL: {query}")
        stats = ConnectionStatistics(server_roundtrips=1, bytes_sent=len(query.encode('utf-8')))
        started = time.perf_counter()

        try:
            with open_connection(self.engine) as conn:
                connected = time.perf_counter()
                output = work(conn)
        except IntegrityError as e:
            diagnostic = str(e.orig)
            logger.error(f"Integrity error in statement: {query} ({diagnostic})")
            if _is_duplicate(diagnostic):
                raise DuplicateEntryError(query, diagnostic, failed_object=source) from e
            raise QueryError(query, diagnostic) from e
        except SQLAlchemyError as e:
            diagnostic = str(getattr(e, 'orig', None) or e)
            logger.error(f"Statement failed: {query} ({diagnostic})")
            raise QueryError(query, diagnostic) from e

        finished = time.perf_counter()
        stats.connection_time = (connected - started) * 1000
        stats.execution_time = (finished - connected) * 1000
        return output, stats

    def _record(self, stats):
        with self._lock:
            self.last_statistics = stats
            self.all_statistics.concat(stats)
