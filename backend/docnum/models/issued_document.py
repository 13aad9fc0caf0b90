from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from docnum.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IssuedDocument(Base):
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # opaque reference; anonymous requests store NULL
    requester_reference: Mapped[str | None] = mapped_column("user_id", String(64), nullable=True, index=True)
    display_name: Mapped[str] = mapped_column("nama", String(200), nullable=False)
    issued_number: Mapped[str] = mapped_column("nomor_surat", String(100), nullable=False, index=True)
    document_type_name: Mapped[str] = mapped_column("jenis_surat", String(120), nullable=False)
    description: Mapped[str] = mapped_column("deskripsi", Text, nullable=False)
    location_name: Mapped[str] = mapped_column("lokasi", String(120), nullable=False)
    department_name: Mapped[str] = mapped_column("departemen", String(120), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (Index("ix_documents_departemen_created_at", "departemen", "created_at"),)
