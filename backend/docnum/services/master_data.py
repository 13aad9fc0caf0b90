from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.errors import MasterDataAmbiguous, MasterDataNotFound
from docnum.models.master_data import Department, DocumentType, Location


@dataclass(frozen=True)
class ResolvedCodes:
    location_code: str
    department_code: str
    document_type_code: str


async def _short_code(db: AsyncSession, model, kind: str, name: str) -> str:
    # two rows are enough to tell a unique name from a duplicated one
    stmt = select(model.short_code).where(model.display_name == name).limit(2)
    res = await db.execute(stmt)
    codes = res.scalars().all()
    if not codes:
        raise MasterDataNotFound(kind, name)
    if len(codes) > 1:
        raise MasterDataAmbiguous(kind, name)
    return codes[0]


async def resolve(
    db: AsyncSession,
    location_name: str,
    department_name: str,
    document_type_name: str,
) -> ResolvedCodes:
    """Translate display names into the short codes printed in a number."""
    return ResolvedCodes(
        location_code=await _short_code(db, Location, "location", location_name),
        department_code=await _short_code(db, Department, "department", department_name),
        document_type_code=await _short_code(db, DocumentType, "document_type", document_type_name),
    )
