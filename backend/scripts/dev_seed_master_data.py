from __future__ import annotations

import asyncio
import os
import sys

from sqlalchemy import select

# Ensure /app is in sys.path when executed in the container.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from docnum.db.session import SessionLocal  # noqa: E402
from docnum.models.master_data import Department, DocumentType, Location  # noqa: E402

LOCATIONS = [("Balikpapan", "BPN"), ("Jakarta", "JKT"), ("Samarinda", "SMD")]
DEPARTMENTS = [("Operations", "OPS"), ("Business Development", "BDS"), ("Finance", "FIN")]
DOCUMENT_TYPES = [("Letter", "L"), ("Memo", "M"), ("Decree", "SK")]


async def _upsert(session, model, rows: list[tuple[str, str]]) -> None:
    for name, code in rows:
        res = await session.execute(select(model).where(model.display_name == name))
        row = res.scalar_one_or_none()
        if row is None:
            session.add(model(display_name=name, short_code=code))
            print(f"created {model.__tablename__}:", name, code)
        elif row.short_code != code:
            row.short_code = code
            print(f"updated {model.__tablename__}:", name, code)


async def main() -> None:
    async with SessionLocal() as session:
        await _upsert(session, Location, LOCATIONS)
        await _upsert(session, Department, DEPARTMENTS)
        await _upsert(session, DocumentType, DOCUMENT_TYPES)
        await session.commit()


if __name__ == "__main__":
    asyncio.run(main())
