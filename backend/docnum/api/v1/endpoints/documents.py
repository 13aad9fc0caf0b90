from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.config import settings
from docnum.core.errors import ValidationError
from docnum.db.session import get_db
from docnum.schemas.numbering import IssuedDocumentOut
from docnum.services.documents import list_issued

router = APIRouter()


@router.get("", response_model=list[IssuedDocumentOut])
async def list_documents(
    requester_reference: str | None = Query(default=None),
    department_name: str | None = Query(default=None),
    year: int | None = Query(default=None, ge=1970, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> list[IssuedDocumentOut]:
    if (year is None) != (month is None):
        raise ValidationError("year and month must be given together")
    documents = await list_issued(
        db,
        requester_reference=requester_reference,
        department_name=department_name,
        year=year,
        month=month,
        tz_name=settings.numbering_timezone,
        limit=limit,
        offset=offset,
    )
    return [IssuedDocumentOut.model_validate(d) for d in documents]
