from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from docnum.models.issued_document import IssuedDocument


class ScopeKind(str, Enum):
    # every document of the department in the month, whatever its type/location
    AGGREGATE = "aggregate"
    # department + document type + location in the month
    NARROW = "narrow"


@dataclass(frozen=True)
class MonthWindow:
    year: int
    month: int
    start: datetime
    end: datetime


def month_window(now: datetime, tz_name: str = "UTC") -> MonthWindow:
    """Return the calendar month containing ``now`` as a ``[start, end)`` UTC range.

    Month boundaries are taken in ``tz_name``; naive datetimes are read as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    tz = ZoneInfo(tz_name)
    local = now.astimezone(tz)
    start_local = datetime(local.year, local.month, 1, tzinfo=tz)
    if local.month == 12:
        end_local = datetime(local.year + 1, 1, 1, tzinfo=tz)
    else:
        end_local = datetime(local.year, local.month + 1, 1, tzinfo=tz)
    return MonthWindow(
        year=local.year,
        month=local.month,
        start=start_local.astimezone(timezone.utc),
        end=end_local.astimezone(timezone.utc),
    )


@dataclass(frozen=True)
class CountingScope:
    kind: ScopeKind
    department_name: str
    document_type_name: str | None
    location_name: str | None
    window: MonthWindow

    @property
    def year(self) -> int:
        return self.window.year

    @property
    def month(self) -> int:
        return self.window.month

    def predicate(self) -> list[Any]:
        """SQL criteria selecting the documents counted in this scope."""
        clauses = [
            IssuedDocument.department_name == self.department_name,
            IssuedDocument.created_at >= self.window.start,
            IssuedDocument.created_at < self.window.end,
        ]
        if self.kind is ScopeKind.NARROW:
            clauses.append(IssuedDocument.document_type_name == self.document_type_name)
            clauses.append(IssuedDocument.location_name == self.location_name)
        return clauses

    def counter_key(self) -> dict[str, Any]:
        """Column values identifying this scope's row in ``scope_counters``."""
        return {
            "scope_kind": self.kind.value,
            "department_name": self.department_name,
            "document_type_name": self.document_type_name or "",
            "location_name": self.location_name or "",
            "year": self.window.year,
            "month": self.window.month,
        }


def compute_scope(
    department_name: str,
    department_code: str,
    document_type_name: str,
    location_name: str,
    now: datetime,
    *,
    aggregate_department_code: str,
    tz_name: str = "UTC",
) -> CountingScope:
    window = month_window(now, tz_name)
    if department_code == aggregate_department_code:
        return CountingScope(
            kind=ScopeKind.AGGREGATE,
            department_name=department_name,
            document_type_name=None,
            location_name=None,
            window=window,
        )
    return CountingScope(
        kind=ScopeKind.NARROW,
        department_name=department_name,
        document_type_name=document_type_name,
        location_name=location_name,
        window=window,
    )
