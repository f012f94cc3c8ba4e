# ruff: noqa: TC003
from __future__ import annotations

from pydantic import BaseModel

from leavemarker.models.enums import AccrualRunKind


class AccrualRunResponse(BaseModel):
    """Outcome of a monthly accrual or year-end carry-forward sweep."""

    kind: AccrualRunKind
    year: int
    month: int
    balances_updated: int
    already_processed: bool
