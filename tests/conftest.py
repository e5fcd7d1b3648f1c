from __future__ import annotations

from dataclasses import replace
from datetime import date
from types import SimpleNamespace
from typing import Optional

import pytest

from onboarding_system.calendar.model import CalendarEvent
from onboarding_system.calendar.service import CalendarService
from onboarding_system.core.enums import EventKind, SessionStatus
from onboarding_system.main import create_app
from onboarding_system.onboarding.model import OnboardingSession, OnboardingType, SessionStats, TypeCount
from onboarding_system.onboarding.service import OnboardingService


class InMemoryTypes:
    def __init__(self, types=()):
        self.types: dict[int, OnboardingType] = {t.type_id: t for t in types}

    def get_by_id(self, type_id: int) -> Optional[OnboardingType]:
        return self.types.get(type_id)

    def list_active(self):
        return sorted((t for t in self.types.values() if t.is_active), key=lambda t: t.name)


class InMemorySessions:
    def __init__(self, types: InMemoryTypes):
        self._types = types
        self.sessions: dict[int, OnboardingSession] = {}
        self._id = 0
        self.last_filter = None
        self.last_overlap = None

    def _with_type(self, session: OnboardingSession) -> OnboardingSession:
        t = self._types.get_by_id(session.type_id)
        return replace(session, type_name=t.name if t else None, type_color=t.color if t else None)

    def add(self, **kwargs) -> OnboardingSession:
        self._id += 1
        kwargs.setdefault("type_id", 1)
        session = self._with_type(OnboardingSession(session_id=self._id, **kwargs))
        self.sessions[self._id] = session
        return session

    def get_by_id(self, session_id: int) -> Optional[OnboardingSession]:
        return self.sessions.get(session_id)

    def create(self, *, title, type_id, start_date, end_date, status, max_capacity, description=None,
               location=None, virtual_link=None, notes=None) -> int:
        return self.add(
            title=title,
            type_id=type_id,
            start_date=start_date,
            end_date=end_date,
            status=status,
            max_capacity=max_capacity,
            description=description,
            location=location,
            virtual_link=virtual_link,
            notes=notes,
        ).session_id

    def update(self, *, session_id, changes) -> bool:
        current = self.sessions.get(session_id)
        if not current:
            return False
        self.sessions[session_id] = self._with_type(replace(current, **changes))
        return True

    def delete(self, *, session_id) -> bool:
        return self.sessions.pop(session_id, None) is not None

    def list_filtered(self, *, type_id=None, status=None, start_from=None, start_to=None, is_active=None,
                      offset=0, limit=10):
        self.last_filter = {
            "type_id": type_id,
            "status": status,
            "start_from": start_from,
            "start_to": start_to,
            "is_active": is_active,
            "offset": offset,
            "limit": limit,
        }
        rows = [
            s for s in self.sessions.values()
            if (type_id is None or s.type_id == type_id)
            and (status is None or s.status == status)
            and (start_from is None or s.start_date >= start_from)
            and (start_to is None or s.start_date <= start_to)
            and (is_active is None or s.is_active == is_active)
        ]
        rows.sort(key=lambda s: (s.start_date, s.session_id))
        return rows[offset:offset + limit], len(rows)

    def list_overlapping(self, *, start: date, end: date):
        self.last_overlap = (start, end)
        rows = [s for s in self.sessions.values() if s.is_active and s.start_date <= end and s.end_date >= start]
        return sorted(rows, key=lambda s: (s.start_date, s.session_id))

    def list_starting_between(self, *, start, end, status=None, limit=None):
        rows = [
            s for s in self.sessions.values()
            if s.is_active and start <= s.start_date <= end and (status is None or s.status == status)
        ]
        rows.sort(key=lambda s: (s.start_date, s.session_id))
        return rows[:limit] if limit is not None else rows

    def stats(self) -> SessionStats:
        rows = list(self.sessions.values())
        by_type = {}
        for s in rows:
            key = (s.type_name, s.type_color)
            by_type[key] = by_type.get(key, 0) + 1
        return SessionStats(
            total=len(rows),
            by_status={st: sum(1 for s in rows if s.status == st) for st in SessionStatus},
            total_capacity=sum(s.max_capacity for s in rows),
            by_type=tuple(TypeCount(name=n, color=c, count=k) for (n, c), k in sorted(by_type.items())),
        )


class InMemoryEvents:
    def __init__(self):
        self.events: dict[int, CalendarEvent] = {}
        self._id = 0
        self.last_query = None
        self.last_overlap = None

    def add(self, **kwargs) -> CalendarEvent:
        self._id += 1
        kwargs.setdefault("kind", EventKind.OTHER)
        kwargs.setdefault("color", "#00448D")
        event = CalendarEvent(event_id=self._id, **kwargs)
        self.events[self._id] = event
        return event

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        return self.events.get(event_id)

    def create(self, *, title, kind, start_date, color, end_date=None, is_all_day=False, description=None,
               session_id=None) -> int:
        return self.add(
            title=title,
            kind=kind,
            start_date=start_date,
            end_date=end_date,
            is_all_day=is_all_day,
            color=color,
            description=description,
            session_id=session_id,
        ).event_id

    def update(self, *, event_id, changes) -> bool:
        current = self.events.get(event_id)
        if not current:
            return False
        self.events[event_id] = replace(current, **changes)
        return True

    def deactivate(self, *, event_id) -> bool:
        return self.update(event_id=event_id, changes={"is_active": False})

    def list_by_start(self, *, start_from=None, start_to=None, kind=None, limit=None):
        self.last_query = {"start_from": start_from, "start_to": start_to, "kind": kind, "limit": limit}
        rows = [
            e for e in self.events.values()
            if e.is_active
            and (start_from is None or e.start_date >= start_from)
            and (start_to is None or e.start_date <= start_to)
            and (kind is None or e.kind == kind)
        ]
        rows.sort(key=lambda e: (e.start_date, e.event_id))
        return rows[:limit] if limit is not None else rows

    def list_overlapping(self, *, start: date, end: date):
        self.last_overlap = (start, end)
        rows = [
            e for e in self.events.values()
            if e.is_active and e.start_date <= end and (e.end_date or e.start_date) >= start
        ]
        return sorted(rows, key=lambda e: (e.start_date, e.event_id))


@pytest.fixture
def cloud_type() -> OnboardingType:
    return OnboardingType(type_id=1, name="Journey to Cloud", color="#E31937", duration_days=3)


@pytest.fixture
def types_repo(cloud_type) -> InMemoryTypes:
    return InMemoryTypes(
        [
            cloud_type,
            OnboardingType(type_id=2, name="Capítulo Data", color="#FFD100", duration_days=2),
            OnboardingType(type_id=3, name="Legacy", color="#999999", is_active=False),
        ]
    )


@pytest.fixture
def sessions_repo(types_repo) -> InMemorySessions:
    return InMemorySessions(types_repo)


@pytest.fixture
def events_repo() -> InMemoryEvents:
    return InMemoryEvents()


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 7, 16)


@pytest.fixture
def scheduled() -> SessionStatus:
    return SessionStatus.SCHEDULED


@pytest.fixture
def client(monkeypatch, events_repo, sessions_repo, types_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = SimpleNamespace(
        onboarding_service=OnboardingService(sessions_repo, types_repo),
        calendar_service=CalendarService(events_repo, sessions_repo),
    )
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()
