from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.config import settings
from docnum.core.errors import AllocationTimeout
from docnum.db.session import get_db
from docnum.schemas.numbering import ErrorResponse, NumberRequest, NumberResponse
from docnum.services.allocator import issue_number

router = APIRouter()
logger = logging.getLogger("docnum_api.numbers")


@router.post(
    "/generate-number",
    response_model=NumberResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 404, 409, 500, 504)},
)
async def generate_number(
    payload: NumberRequest,
    db: AsyncSession = Depends(get_db),
) -> NumberResponse:
    try:
        document = await asyncio.wait_for(
            issue_number(db, payload),
            timeout=settings.allocation_timeout_seconds,
        )
    except asyncio.TimeoutError:
        await db.rollback()
        logger.warning(
            "Number allocation timed out after %ss (dept=%s)",
            settings.allocation_timeout_seconds,
            payload.department_name,
        )
        raise AllocationTimeout("Number allocation timed out, please retry")
    return NumberResponse(number=document.issued_number)
