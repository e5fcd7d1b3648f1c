from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import OnboardingSession, OnboardingType, SessionStats


class OnboardingTypeRepository(Protocol):
    def get_by_id(self, type_id: int) -> Optional[OnboardingType]:
        raise NotImplementedError

    def list_active(self) -> Sequence[OnboardingType]:
        """Active types ordered by name."""

        raise NotImplementedError


class OnboardingSessionRepository(Protocol):
    """Storage interface for onboarding sessions.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, session_id: int) -> Optional[OnboardingSession]:
        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        type_id: int,
        start_date: date,
        end_date: date,
        status: SessionStatus,
        max_capacity: int,
        description: Optional[str] = None,
        location: Optional[str] = None,
        virtual_link: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, *, session_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, *, session_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        type_id: Optional[int] = None,
        status: Optional[SessionStatus] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[OnboardingSession], int]:
        """Return one page of sessions ordered by start date, plus the total count."""

        raise NotImplementedError

    def list_overlapping(self, *, start: date, end: date) -> Sequence[OnboardingSession]:
        """Active sessions whose [start_date, end_date] intersects [start, end]."""

        raise NotImplementedError

    def list_starting_between(
        self,
        *,
        start: date,
        end: date,
        status: Optional[SessionStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[OnboardingSession]:
        """Active sessions with start_date in [start, end], ordered by start date."""

        raise NotImplementedError

    def stats(self) -> SessionStats:
        raise NotImplementedError
