from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class OnboardingType:
    type_id: int
    name: str
    color: str
    description: Optional[str] = None
    duration_days: int = 1
    is_active: bool = True


@dataclass(frozen=True)
class OnboardingSession:
    """Domain entity: onboarding session (no DB access)."""

    session_id: int
    title: str
    type_id: int
    start_date: date
    end_date: date
    status: SessionStatus = SessionStatus.SCHEDULED
    max_capacity: int = 1
    description: Optional[str] = None
    location: Optional[str] = None
    virtual_link: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    type_name: Optional[str] = None
    type_color: Optional[str] = None


@dataclass(frozen=True)
class TypeCount:
    name: str
    color: str
    count: int


@dataclass(frozen=True)
class SessionStats:
    """Aggregate figures over every stored session."""

    total: int
    by_status: dict[SessionStatus, int]
    total_capacity: int
    by_type: tuple[TypeCount, ...] = ()
