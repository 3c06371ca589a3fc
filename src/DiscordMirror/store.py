# store.py

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DataError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from DiscordMirror.capabilities import EntitySchema
from DiscordMirror.db import session_scope
from DiscordMirror.errors import FieldValidationError
from DiscordMirror.metrics import inc_counter
from DiscordMirror.result import Err, Ok, Result
from DiscordMirror.staging import StagedMutation

log = structlog.get_logger()

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


async def find_by_natural_key(
    s: AsyncSession, schema: EntitySchema, key: Mapping[str, Any]
) -> Any | None:
    model = schema.model
    q = await s.execute(
        select(model).where(*[getattr(model, col) == key[col] for col in schema.natural_key])
    )
    return q.scalar_one_or_none()


async def upsert(s: AsyncSession, schema: EntitySchema, values: Mapping[str, Any]) -> Any:
    """INSERT ... ON CONFLICT (natural key) DO UPDATE, then load the row.

    Only the supplied columns are overwritten on conflict, so fields a later
    payload omits keep their stored values.
    """
    dialect = s.bind.dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"upsert is not supported on dialect {dialect!r}")

    model = schema.model
    row = dict(values)
    if schema.declares("updated_at"):
        row["updated_at"] = datetime.now(timezone.utc)
    stmt = insert(model).values(**row)
    update_cols = {
        col: stmt.excluded[col] for col in row if col not in schema.natural_key
    }
    if update_cols:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(schema.natural_key), set_=update_cols
        )
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=list(schema.natural_key))
    await _execute_retry(s, stmt)
    inc_counter("store.upsert")

    key = {col: row[col] for col in schema.natural_key}
    q = await s.execute(
        select(model)
        .where(*[getattr(model, col) == key[col] for col in schema.natural_key])
        .execution_options(populate_existing=True)
    )
    obj = q.scalar_one()
    log.debug("store.upsert", kind=schema.kind.value, key=key, id=getattr(obj, "id", None))
    return obj


async def commit_mutation(
    mutation: StagedMutation, *, session_factory: SessionFactory = session_scope
) -> Result[Any]:
    """Write ``mutation`` and every staged dependency in one transaction.

    Dependencies are written first; the owning record is returned.
    """
    record = None
    current = mutation
    try:
        async with session_factory() as s:
            for current in mutation.walk():
                record = await upsert(s, current.schema, current.fields)
    except (IntegrityError, DataError) as exc:
        # The database message is passed through untouched
        return Err(FieldValidationError(current.kind, errors=(str(exc.orig),)))
    return Ok(record)


async def _execute_retry(s: AsyncSession, stmt: Any, attempts: int = 5, delay: float = 0.2) -> None:
    """Retry on transient SQLite 'database is locked' errors.

    Exponential backoff: delay * 2^i between attempts.
    """
    for i in range(attempts):
        try:
            await s.execute(stmt)
            return
        except OperationalError as e:  # pragma: no cover - timing dependent
            msg = str(e).lower()
            if "database is locked" in msg or "database is busy" in msg:
                if i == attempts - 1:
                    raise
                await asyncio.sleep(delay * (2**i))
                continue
            raise

