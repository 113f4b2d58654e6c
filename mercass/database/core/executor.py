"""
Query executor over the shared SQLAlchemy connection pool.

Commands run on a worker thread so the event loop is never blocked by the
driver. Every result set the driver yields is collected, which is what
stored procedures returning several record sets need.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from mercass.database.config.config import Settings
from mercass.database.core.commands import Batch, QueryResult
from mercass.exceptions import StoreError

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> Engine:
    """Build the pooled engine shared by every request."""
    return create_engine(
        settings.database_url(),
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
    )


class QueryExecutor:
    def __init__(self, engine: Engine):
        self._engine = engine
        self._driver_error = engine.dialect.loaded_dbapi.Error

    async def run(self, command) -> QueryResult:
        """Execute one command and return every record set it produced.

        Raises
        ------
        StoreError
            If the connection cannot be obtained or the driver rejects the command.
        """
        return await run_in_threadpool(self._execute, command)

    async def run_many(self, named: Mapping[str, Any], batch: bool = False) -> Dict[str, List[Dict[str, Any]]]:
        """Run several commands and key their first record sets by binding name.

        Isolated mode runs the commands concurrently on separate pooled
        connections. Batch mode sends them as one multi-statement batch and
        maps the n-th record set to the n-th binding.
        """
        bindings = list(named)
        if batch:
            result = await self.run(Batch(tuple(named.values())))
            sets = result.recordsets
            return {name: sets[i] if i < len(sets) else [] for i, name in enumerate(bindings)}
        results = await asyncio.gather(*(self.run(named[name]) for name in bindings), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return {name: result.recordset for name, result in zip(bindings, results)}

    def dispose(self) -> None:
        self._engine.dispose()

    def _execute(self, command) -> QueryResult:
        sql, values = command.compile()
        try:
            connection = self._engine.raw_connection()
        except SQLAlchemyError as exc:
            logger.error("Store connection failed: %s", exc)
            raise StoreError("Veritabanı bağlantısı kurulamadı") from exc
        try:
            cursor = connection.cursor()
            try:
                cursor.execute(sql, values)
                result = self._collect(cursor)
            finally:
                cursor.close()
            connection.commit()
            return result
        except self._driver_error as exc:
            logger.error("Store command failed: %s", exc, extra={"extra": {"sql": sql}})
            connection.rollback()
            raise StoreError(f"Veritabanı hatası: {exc}") from exc
        finally:
            connection.close()

    @staticmethod
    def _collect(cursor) -> QueryResult:
        result = QueryResult()
        nextset = getattr(cursor, "nextset", None)
        while True:
            if cursor.description is not None:
                columns = [column[0] for column in cursor.description]
                result.recordsets.append([dict(zip(columns, row)) for row in cursor.fetchall()])
            elif cursor.rowcount is not None and cursor.rowcount >= 0:
                result.rows_affected.append(cursor.rowcount)
            if nextset is None or not nextset():
                break
        return result
