from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from docnum.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScopeCounter(Base):
    __tablename__ = "scope_counters"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    scope_kind: Mapped[str] = mapped_column(String(10), nullable=False)
    department_name: Mapped[str] = mapped_column(String(120), nullable=False)
    # "" when the scope is department-wide
    document_type_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    location_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    counter: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint(
            "scope_kind",
            "department_name",
            "document_type_name",
            "location_name",
            "year",
            "month",
            name="uq_scope_counters_scope",
        ),
    )
