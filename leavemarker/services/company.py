# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class CompanyInfo(BaseModel):
    """Company (tenant) record as exposed by the company directory."""

    id: uuid.UUID
    name: str
    active: bool = True


@runtime_checkable
class CompanyDirectory(Protocol):
    """Read-only interface to the company directory."""

    async def get_company(self, company_id: uuid.UUID) -> CompanyInfo | None:
        """Fetch a company. Returns None if not found."""
        ...


class InMemoryCompanyDirectory:
    """In-memory directory used for development and tests."""

    def __init__(self) -> None:
        self._companies: dict[uuid.UUID, CompanyInfo] = {}

    def seed(self, company: CompanyInfo) -> None:
        """Insert or replace a company."""
        self._companies[company.id] = company

    async def get_company(self, company_id: uuid.UUID) -> CompanyInfo | None:
        return self._companies.get(company_id)


_company_directory: CompanyDirectory = InMemoryCompanyDirectory()


def get_company_directory() -> CompanyDirectory:
    """Return the configured company directory."""
    return _company_directory


def set_company_directory(directory: CompanyDirectory) -> None:
    """Override the directory (for testing or production wiring)."""
    global _company_directory
    _company_directory = directory
