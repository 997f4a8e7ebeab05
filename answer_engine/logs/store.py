"""SQLAlchemy-backed query log store."""

import asyncio
import logging
from collections.abc import Mapping
from datetime import timezone
from typing import Any

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import LogEntry, log_entry_adapter
from .sink import QueryLogSink, check_filters

logger = logging.getLogger(__name__)

Base = declarative_base()

_COMMON_FIELDS = {"type", "query_text", "success", "error_message", "created_at"}


class QueryLogRecord(Base):
    """
    One row per query attempt against a single source.

    Source-specific fields (retrieved chunks, model response, search results)
    live in ``payload`` so the table shape does not change per source.
    """
    __tablename__ = "query_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False, index=True)
    query_text = Column(Text, nullable=False)
    success = Column(Boolean, nullable=False, index=True)
    error_message = Column(Text, nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


def _to_record(entry: LogEntry) -> QueryLogRecord:
    data = entry.model_dump(mode="json", exclude=_COMMON_FIELDS)
    return QueryLogRecord(
        type=entry.type,
        query_text=entry.query_text,
        success=entry.success,
        error_message=entry.error_message,
        payload=data,
        created_at=entry.created_at,
    )


def _to_entry(record: QueryLogRecord) -> LogEntry:
    created_at = record.created_at
    if created_at is not None and created_at.tzinfo is None:
        # SQLite drops the offset
        created_at = created_at.replace(tzinfo=timezone.utc)
    return log_entry_adapter.validate_python(
        {
            **(record.payload or {}),
            "type": record.type,
            "query_text": record.query_text,
            "success": record.success,
            "error_message": record.error_message,
            "created_at": created_at,
        }
    )


class SQLQueryLogSink(QueryLogSink):
    """Query log sink persisting entries through a SQLAlchemy engine."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        """Create the engine and make sure the table exists.

        Args:
            database_url: SQLAlchemy URL, e.g. ``sqlite:///query_logs.db``
            echo: Log emitted SQL
        """
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if database_url.startswith("sqlite"):
            # Blocking calls run on worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
                engine_kwargs["poolclass"] = StaticPool

        self.database_url = database_url
        self.engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)
        logger.info(f"Query log store ready at {self.engine.url.render_as_string(hide_password=True)}")

    async def append(self, entry: LogEntry) -> None:
        await asyncio.to_thread(self._append_sync, entry)

    def _append_sync(self, entry: LogEntry) -> None:
        db = self.SessionLocal()
        try:
            db.add(_to_record(entry))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _list_sync(self, filters: dict[str, Any], limit: int | None) -> list[LogEntry]:
        db = self.SessionLocal()
        try:
            query = db.query(QueryLogRecord)
            for key, value in filters.items():
                query = query.filter(getattr(QueryLogRecord, key) == value)
            query = query.order_by(QueryLogRecord.created_at.desc(), QueryLogRecord.id.desc())
            if limit is not None:
                query = query.limit(limit)
            return [_to_entry(record) for record in query.all()]
        finally:
            db.close()

    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[LogEntry]:
        filters = check_filters(filters)
        return await asyncio.to_thread(self._list_sync, filters, limit)

    async def health_check(self) -> bool:
        try:
            await asyncio.to_thread(self._ping)
            return True
        except Exception as e:
            logger.warning(f"Query log store health check failed: {e}")
            return False

    def _ping(self) -> None:
        with self.engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")

    def close(self) -> None:
        self.engine.dispose()
