import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_ROOT = PROJECT_ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Settings() needs a URL at import time; tests use their own engines.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from docnum.core.config import settings  # noqa: E402
from docnum.db.base import Base  # noqa: E402
from docnum.models import issued_document as _issued_document  # noqa: F401,E402
from docnum.models import scope_counter as _scope_counter  # noqa: F401,E402
from docnum.models.master_data import Department, DocumentType, Location  # noqa: E402
from docnum.schemas.numbering import NumberRequest  # noqa: E402


@pytest.fixture
def test_database_url(tmp_path) -> str:
    url = os.environ.get("TEST_DATABASE_URL")
    if url:
        return url
    return f"sqlite+aiosqlite:///{tmp_path / 'docnum_test.db'}"


@pytest_asyncio.fixture
async def async_engine(test_database_url: str) -> AsyncEngine:
    engine = create_async_engine(test_database_url, pool_pre_ping=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine: AsyncEngine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(async_session):
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def master_data(async_session):
    async with async_session() as session:
        session.add_all(
            [
                Location(display_name="Balikpapan", short_code="BPN"),
                Location(display_name="Jakarta", short_code="JKT"),
                Department(display_name="Operations", short_code="OPS"),
                Department(display_name="Business Development", short_code="BDS"),
                DocumentType(display_name="Letter", short_code="L"),
                DocumentType(display_name="Memo", short_code="M"),
            ]
        )
        await session.commit()


@pytest.fixture
def numbering_settings():
    return settings.model_copy(
        update={
            "aggregate_department_code": "BDS",
            "numbering_timezone": "UTC",
            "allocation_max_attempts": 5,
            "allocation_backoff_base_ms": 0,
            "allocation_backoff_max_ms": 0,
        }
    )


@pytest.fixture
def make_request():
    def _make(
        department: str = "Operations",
        document_type: str = "Letter",
        location: str = "Balikpapan",
        requester: str | None = "user-1",
    ) -> NumberRequest:
        return NumberRequest(
            requester_reference=requester,
            display_name="Budi Santoso",
            location_name=location,
            department_name=department,
            document_type_name=document_type,
            description="Surat pengantar",
        )

    return _make
