from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from docnum.core.config import Settings, settings
from docnum.core.errors import AllocationConflict, PersistenceError, ValidationError
from docnum.models.issued_document import IssuedDocument
from docnum.schemas.numbering import NumberRequest
from docnum.services.document_sequences import allocate, is_conflict
from docnum.services.documents import persist
from docnum.services.formatter import format_number
from docnum.services.master_data import resolve
from docnum.services.scope import compute_scope

logger = logging.getLogger("docnum_api.allocator")

REQUIRED_FIELDS = (
    "display_name",
    "location_name",
    "department_name",
    "document_type_name",
    "description",
)


def validate_request(request: NumberRequest) -> None:
    for field in REQUIRED_FIELDS:
        value = getattr(request, field)
        if value is None or not value.strip():
            raise ValidationError(f"{field} is required")


def backoff_delay(attempt: int, config: Settings) -> float:
    """Seconds to wait before retry ``attempt + 1`` (exponential, full jitter)."""
    base = config.allocation_backoff_base_ms / 1000
    cap = config.allocation_backoff_max_ms / 1000
    return random.uniform(0, min(cap, base * 2 ** (attempt - 1)))


async def issue_number(
    db: AsyncSession,
    request: NumberRequest,
    *,
    now: datetime | None = None,
    config: Settings | None = None,
) -> IssuedDocument:
    """Allocate, format and store the next number for the request's scope.

    Returns the committed record. Nothing is committed unless the number was
    stored, and a conflicting attempt is rolled back as a whole before it is
    retried.
    """
    config = config or settings
    validate_request(request)

    codes = await resolve(db, request.location_name, request.department_name, request.document_type_name)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    # one clock reading drives both the scope window and created_at
    now = now.astimezone(timezone.utc)
    scope = compute_scope(
        request.department_name,
        codes.department_code,
        request.document_type_name,
        request.location_name,
        now,
        aggregate_department_code=config.aggregate_department_code,
        tz_name=config.numbering_timezone,
    )

    max_attempts = config.allocation_max_attempts
    for attempt in range(1, max_attempts + 1):
        try:
            sequence = await allocate(db, scope)
            number = format_number(
                sequence,
                codes.location_code,
                codes.department_code,
                codes.document_type_code,
                scope.month,
                scope.year,
            )
            document = await persist(
                db,
                IssuedDocument(
                    requester_reference=request.requester_reference,
                    display_name=request.display_name,
                    issued_number=number,
                    document_type_name=request.document_type_name,
                    description=request.description,
                    location_name=request.location_name,
                    department_name=request.department_name,
                    created_at=now,
                ),
            )
            await db.commit()
        except DBAPIError as exc:
            await db.rollback()
            if not is_conflict(exc):
                logger.error("Numbering failed in %s scope of %s: %s", scope.kind.value, scope.department_name, exc)
                raise PersistenceError("Issued number could not be stored") from exc
            if attempt == max_attempts:
                break
            delay = backoff_delay(attempt, config)
            logger.warning(
                "Allocation conflict in %s scope of %s (attempt %s/%s), retrying in %.3fs",
                scope.kind.value,
                scope.department_name,
                attempt,
                max_attempts,
                delay,
            )
            await asyncio.sleep(delay)
            continue
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Issued %s (scope=%s dept=%s attempt=%s requester=%s)",
            document.issued_number,
            scope.kind.value,
            scope.department_name,
            attempt,
            request.requester_reference or "anonymous",
        )
        return document

    logger.error("Allocation gave up after %s attempts in scope of %s", max_attempts, scope.department_name)
    raise AllocationConflict(max_attempts)
