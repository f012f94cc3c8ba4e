from __future__ import annotations

import os
import uuid
from typing import TYPE_CHECKING

# An in-memory SQLite database unless the environment points at a real server.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from leavemarker.config import get_settings
from leavemarker.db import engine_options, get_session
from leavemarker.main import app
from leavemarker.models import SQLModel
from leavemarker.models.enums import Role
from leavemarker.services.company import CompanyInfo, InMemoryCompanyDirectory, set_company_directory
from leavemarker.services.employee import EmployeeInfo, InMemoryEmployeeDirectory, set_employee_directory
from tests.helpers import Org

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Create a fresh schema for each test."""
    url = get_settings().database_url
    _engine = create_async_engine(url, **engine_options(url))
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session wrapped in a transaction that rolls back after each test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Directory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def org() -> Iterator[Org]:
    """Seed fresh in-memory directories for every test that asks for them."""
    seeded = Org(
        company_id=uuid.uuid4(),
        hr_id=uuid.uuid4(),
        manager_id=uuid.uuid4(),
        employee_id=uuid.uuid4(),
        colleague_id=uuid.uuid4(),
    )

    companies = InMemoryCompanyDirectory()
    companies.seed(CompanyInfo(id=seeded.company_id, name="Acme Analytics"))

    employees = InMemoryEmployeeDirectory()
    employees.seed(
        EmployeeInfo(
            id=seeded.hr_id,
            company_id=seeded.company_id,
            employee_code="HR001",
            full_name="Hana Rao",
            email="hana@example.com",
            role=Role.HR_ADMIN,
            department="People",
        )
    )
    employees.seed(
        EmployeeInfo(
            id=seeded.manager_id,
            company_id=seeded.company_id,
            employee_code="MG001",
            full_name="Milan Gupta",
            email="milan@example.com",
            role=Role.MANAGER,
            department="Engineering",
        )
    )
    employees.seed(
        EmployeeInfo(
            id=seeded.employee_id,
            company_id=seeded.company_id,
            employee_code="EM001",
            full_name="Esha Menon",
            email="esha@example.com",
            manager_id=seeded.manager_id,
            department="Engineering",
        )
    )
    employees.seed(
        EmployeeInfo(
            id=seeded.colleague_id,
            company_id=seeded.company_id,
            employee_code="EM002",
            full_name="Chris Lobo",
            email="chris@example.com",
            manager_id=seeded.manager_id,
            department="Support",
        )
    )

    set_company_directory(companies)
    set_employee_directory(employees)
    yield seeded
    set_company_directory(InMemoryCompanyDirectory())
    set_employee_directory(InMemoryEmployeeDirectory())

