import uuid
from datetime import datetime, timezone

import pytest

from docnum.models.issued_document import IssuedDocument
from docnum.services.allocator import issue_number
from docnum.services.document_sequences import current_counter
from docnum.services.scope import compute_scope
from scripts.backfill_scope_counters import backfill_counters

JAN = datetime(2025, 1, 20, tzinfo=timezone.utc)


def _legacy(department: str, document_type: str, day: int) -> IssuedDocument:
    return IssuedDocument(
        id=uuid.uuid4(),
        requester_reference=None,
        display_name="Legacy",
        issued_number=f"legacy-{uuid.uuid4().hex[:8]}",
        document_type_name=document_type,
        description="imported",
        location_name="Balikpapan",
        department_name=department,
        created_at=datetime(2025, 1, day, tzinfo=timezone.utc),
    )


@pytest.mark.asyncio
async def test_backfill_raises_counters_to_observed_counts(db_session, master_data, make_request, numbering_settings):
    db_session.add_all(
        [
            _legacy("Operations", "Letter", 2),
            _legacy("Operations", "Letter", 3),
            _legacy("Operations", "Memo", 3),
            _legacy("Business Development", "Letter", 4),
            _legacy("Business Development", "Memo", 5),
        ]
    )
    await db_session.commit()

    updated = await backfill_counters(db_session, aggregate_department_code="BDS")

    assert updated[("narrow", "Operations", "Letter", "Balikpapan", 2025, 1)] == 2
    assert updated[("narrow", "Operations", "Memo", "Balikpapan", 2025, 1)] == 1
    assert updated[("aggregate", "Business Development", "", "", 2025, 1)] == 2

    aggregate = compute_scope("Business Development", "BDS", "Memo", "Jakarta", JAN, aggregate_department_code="BDS")
    assert await current_counter(db_session, aggregate) == 2

    doc = await issue_number(
        db_session, make_request(department="Business Development"), now=JAN, config=numbering_settings
    )
    assert doc.issued_number.startswith("003/")

    # counters already ahead are left alone
    assert await backfill_counters(db_session, aggregate_department_code="BDS") == {}


@pytest.mark.asyncio
async def test_backfill_dry_run_writes_nothing(db_session, master_data):
    db_session.add(_legacy("Operations", "Letter", 2))
    await db_session.commit()

    updated = await backfill_counters(db_session, aggregate_department_code="BDS", dry_run=True)
    assert len(updated) == 1

    narrow = compute_scope("Operations", "OPS", "Letter", "Balikpapan", JAN, aggregate_department_code="BDS")
    assert await current_counter(db_session, narrow) == 0
