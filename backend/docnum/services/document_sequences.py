from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.errors import PersistenceError
from docnum.models.issued_document import IssuedDocument
from docnum.models.scope_counter import ScopeCounter
from docnum.services.scope import CountingScope

_UPSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_SCOPE_KEY_COLUMNS = [
    "scope_kind",
    "department_name",
    "document_type_name",
    "location_name",
    "year",
    "month",
]

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
# SQLITE_BUSY, SQLITE_LOCKED
SQLITE_BUSY_CODES = frozenset({5, 6})
SQLITE_BUSY_MESSAGES = ("database is locked", "database table is locked")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    if orig is None:
        return None
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is None and orig.__cause__ is not None:
        code = getattr(orig.__cause__, "sqlstate", None)
    return code


def is_conflict(exc: DBAPIError) -> bool:
    """True when the store rejected the transaction because of concurrent writers.

    Anything else (missing table, lost connection, I/O error, constraint
    violation) is not worth retrying.
    """
    if _sqlstate(exc) in CONFLICT_SQLSTATES:
        return True
    orig = exc.orig
    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    # extended result codes keep the primary code in the low byte
    if sqlite_code is not None and (sqlite_code & 0xFF) in SQLITE_BUSY_CODES:
        return True
    return isinstance(exc, OperationalError) and any(
        marker in str(orig).lower() for marker in SQLITE_BUSY_MESSAGES
    )


async def allocate(db: AsyncSession, scope: CountingScope) -> int:
    """Reserve the next sequence value of ``scope`` inside the caller's transaction.

    A single ``INSERT .. ON CONFLICT DO UPDATE .. RETURNING`` increments the
    scope row under the row lock the store takes for the upsert. A scope seen
    for the first time is seeded from the documents already issued in it.
    The reservation is released on rollback, so the document insert must run
    in the same transaction.
    """
    dialect = db.get_bind().dialect.name
    upsert = _UPSERT_BY_DIALECT.get(dialect)
    if upsert is None:
        raise PersistenceError(f"Unsupported database dialect for numbering: {dialect}")

    now = _utcnow()
    already_issued = (
        select(func.count()).select_from(IssuedDocument).where(*scope.predicate()).scalar_subquery()
    )
    stmt = (
        upsert(ScopeCounter)
        .values(id=uuid.uuid4(), counter=already_issued + 1, updated_at=now, **scope.counter_key())
        .on_conflict_do_update(
            index_elements=_SCOPE_KEY_COLUMNS,
            set_={"counter": ScopeCounter.counter + 1, "updated_at": now},
        )
        .returning(ScopeCounter.counter)
    )
    res = await db.execute(stmt)
    return res.scalar_one()


async def current_counter(db: AsyncSession, scope: CountingScope) -> int:
    """Last value handed out for ``scope``; 0 if nothing was allocated yet.

    Read-only, for audits and reconciliation against ``count_issued``. It must
    not be used to pick the next number: only ``allocate`` reserves values.
    """
    key = scope.counter_key()
    stmt = select(ScopeCounter.counter).where(
        *(getattr(ScopeCounter, column) == value for column, value in key.items())
    )
    res = await db.execute(stmt)
    return res.scalar_one_or_none() or 0
