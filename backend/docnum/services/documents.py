from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.errors import PersistenceError
from docnum.models.issued_document import IssuedDocument
from docnum.services.scope import CountingScope, month_window

logger = logging.getLogger("docnum_api.documents")


async def persist(db: AsyncSession, document: IssuedDocument) -> IssuedDocument:
    """Write the issued record in the current transaction; commit is the caller's job."""
    db.add(document)
    try:
        await db.flush()
    except (IntegrityError, DataError) as exc:
        logger.error("Store rejected issued number %s: %s", document.issued_number, exc)
        raise PersistenceError("Issued number could not be stored") from exc
    return document


async def count_issued(db: AsyncSession, scope: CountingScope) -> int:
    stmt = select(func.count()).select_from(IssuedDocument).where(*scope.predicate())
    res = await db.execute(stmt)
    return int(res.scalar_one())


async def list_issued(
    db: AsyncSession,
    *,
    requester_reference: str | None = None,
    department_name: str | None = None,
    year: int | None = None,
    month: int | None = None,
    tz_name: str = "UTC",
    limit: int = 50,
    offset: int = 0,
) -> list[IssuedDocument]:
    stmt = select(IssuedDocument)
    if requester_reference:
        stmt = stmt.where(IssuedDocument.requester_reference == requester_reference)
    if department_name:
        stmt = stmt.where(IssuedDocument.department_name == department_name)
    if year and month:
        # noon of the 1st lands inside the month in any timezone
        window = month_window(datetime(year, month, 1, 12, tzinfo=timezone.utc), tz_name)
        stmt = stmt.where(IssuedDocument.created_at >= window.start, IssuedDocument.created_at < window.end)
    stmt = stmt.order_by(IssuedDocument.created_at.desc()).limit(limit).offset(offset)
    res = await db.execute(stmt)
    return list(res.scalars().all())
