from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    MetaData,
    Table,
    Text,
    delete,
    false,
    insert,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from taskboard.config import Settings
from taskboard.errors import TaskNotFoundError, TaskStorageError
from taskboard.models import Task


logger = logging.getLogger("taskboard.store")


metadata = MetaData()

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("content", Text, nullable=False),
    Column("done", Boolean, nullable=False, default=False, server_default=false()),
)

_TASK_COLUMNS = (tasks.c.id, tasks.c.content, tasks.c.done)

# ids outside the 32-bit serial range can never exist in the table
MAX_TASK_ID = 2**31 - 1


def make_engine(settings: Settings) -> AsyncEngine:
    """Create the shared async engine; its pool is the only process-wide state."""
    kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if settings.database_url.startswith("postgresql"):
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
    return create_async_engine(settings.database_url, **kwargs)


async def create_schema(engine: AsyncEngine) -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    except SQLAlchemyError as e:
        logger.exception("create_schema failed")
        raise TaskStorageError("could not create tasks table") from e


def _storable_id(task_id: int) -> bool:
    return 1 <= task_id <= MAX_TASK_ID


def _row_to_task(row: Any) -> Task:
    return Task(id=row.id, content=row.content, done=bool(row.done))


class TaskStore:
    """Issues one parameterized statement per operation against ``tasks``."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def insert(self, content: str, done: bool = False) -> int:
        stmt = insert(tasks).values(content=content, done=done).returning(tasks.c.id)
        try:
            async with self._engine.begin() as conn:
                task_id = (await conn.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            logger.exception("insert failed")
            raise TaskStorageError("insert failed") from e
        logger.info("task[%s] created done=%s", task_id, done)
        return task_id

    async def get(self, task_id: int) -> Task:
        if not _storable_id(task_id):
            raise TaskNotFoundError(task_id)
        stmt = select(*_TASK_COLUMNS).where(tasks.c.id == task_id)
        try:
            async with self._engine.connect() as conn:
                row = (await conn.execute(stmt)).first()
        except SQLAlchemyError as e:
            logger.exception("get[%s] failed", task_id)
            raise TaskStorageError("select failed") from e
        if row is None:
            raise TaskNotFoundError(task_id)
        return _row_to_task(row)

    async def list(self) -> list[Task]:
        stmt = select(*_TASK_COLUMNS).order_by(tasks.c.id)
        try:
            async with self._engine.connect() as conn:
                rows = (await conn.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.exception("list failed")
            raise TaskStorageError("select failed") from e
        return [_row_to_task(r) for r in rows]

    async def toggle(self, task_id: int) -> Task:
        if not _storable_id(task_id):
            raise TaskNotFoundError(task_id)
        # Single statement, so concurrent toggles never lose a flip
        stmt = (
            update(tasks)
            .where(tasks.c.id == task_id)
            .values(done=~tasks.c.done)
            .returning(*_TASK_COLUMNS)
        )
        try:
            async with self._engine.begin() as conn:
                row = (await conn.execute(stmt)).first()
        except SQLAlchemyError as e:
            logger.exception("toggle[%s] failed", task_id)
            raise TaskStorageError("update failed") from e
        if row is None:
            raise TaskNotFoundError(task_id)
        task = _row_to_task(row)
        logger.info("task[%s] toggled done=%s", task_id, task.done)
        return task

    async def delete(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        stmt = delete(tasks).where(tasks.c.id == task_id)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("delete[%s] failed", task_id)
            raise TaskStorageError("delete failed") from e
        removed = result.rowcount > 0
        logger.info("task[%s] delete removed=%s", task_id, removed)
        return removed
