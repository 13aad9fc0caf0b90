from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from docnum.db.base import Base


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    display_name: Mapped[str] = mapped_column("nama", String(120), nullable=False, index=True)
    short_code: Mapped[str] = mapped_column("singkatan", String(20), nullable=False)


class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    display_name: Mapped[str] = mapped_column("nama", String(120), nullable=False, index=True)
    short_code: Mapped[str] = mapped_column("singkatan", String(20), nullable=False)


class DocumentType(Base):
    __tablename__ = "document_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    display_name: Mapped[str] = mapped_column("nama", String(120), nullable=False, index=True)
    short_code: Mapped[str] = mapped_column("singkatan", String(20), nullable=False)
