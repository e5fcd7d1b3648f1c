from __future__ import annotations

from datetime import date

import pytest

from onboarding_system.calendar.service import CalendarService
from onboarding_system.core.enums import EventKind, SessionStatus
from onboarding_system.core.exceptions import InvalidArgument, NotFoundError, ValidationError


@pytest.fixture
def service(events_repo, sessions_repo):
    return CalendarService(events_repo, sessions_repo)


def test_create_event_defaults_kind_and_strips_title(service, events_repo):
    event_id = service.create_event(title="  Kickoff  ", start_date=date(2024, 7, 2), color="#FF6B35")

    event = events_repo.get_by_id(event_id)
    assert event.title == "Kickoff"
    assert event.kind == EventKind.OTHER
    assert event.end_date is None
    assert event.is_active is True


def test_create_event_validates_fields(service):
    with pytest.raises(ValidationError):
        service.create_event(title="", start_date=date(2024, 7, 2), color="#FF6B35")
    with pytest.raises(ValidationError):
        service.create_event(title="x" * 151, start_date=date(2024, 7, 2), color="#FF6B35")
    with pytest.raises(ValidationError):
        service.create_event(title="Kickoff", start_date=date(2024, 7, 2), color="red")
    with pytest.raises(ValidationError):
        service.create_event(title="Kickoff", start_date=date(2024, 7, 2), color="#FF6B35", kind="fiesta")


def test_create_event_rejects_inverted_range(service):
    with pytest.raises(ValidationError, match="anterior"):
        service.create_event(
            title="Offsite",
            start_date=date(2024, 7, 10),
            end_date=date(2024, 7, 9),
            color="#FF6B35",
        )


def test_create_event_linked_to_missing_session(service):
    with pytest.raises(NotFoundError):
        service.create_event(
            title="Demo",
            start_date=date(2024, 7, 2),
            color="#FF6B35",
            kind=EventKind.SESSION_LINKED,
            session_id=99,
        )


def test_create_event_linked_to_existing_session(service, sessions_repo, events_repo):
    session = sessions_repo.add(title="Cloud", start_date=date(2024, 7, 1), end_date=date(2024, 7, 3))

    event_id = service.create_event(
        title="Demo",
        start_date=date(2024, 7, 2),
        color="#FF6B35",
        kind="sesion_onboarding",
        session_id=session.session_id,
    )

    assert events_repo.get_by_id(event_id).session_id == session.session_id
    assert events_repo.get_by_id(event_id).kind == EventKind.SESSION_LINKED


def test_get_event_hides_inactive(service, events_repo):
    event = events_repo.add(title="Old", start_date=date(2024, 7, 1), is_active=False)

    with pytest.raises(NotFoundError):
        service.get_event(event.event_id)
    with pytest.raises(NotFoundError):
        service.get_event(404)


def test_update_event_merges_and_validates(service, events_repo):
    event = events_repo.add(title="Standup", start_date=date(2024, 7, 1), end_date=date(2024, 7, 2))

    updated = service.update_event(event.event_id, title="Daily", kind="reunion")
    assert updated.title == "Daily"
    assert updated.kind == EventKind.MEETING
    assert updated.end_date == date(2024, 7, 2)

    with pytest.raises(ValidationError):
        service.update_event(event.event_id, start_date=date(2024, 7, 5))
    with pytest.raises(ValidationError):
        service.update_event(event.event_id, start_date=None)
    with pytest.raises(ValidationError, match="is_active"):
        service.update_event(event.event_id, is_active=False)


def test_update_event_without_changes_returns_current(service, events_repo):
    event = events_repo.add(title="Standup", start_date=date(2024, 7, 1))

    assert service.update_event(event.event_id) == event


def test_update_missing_event(service):
    with pytest.raises(NotFoundError):
        service.update_event(5, title="x")


def test_delete_event_is_soft(service, events_repo):
    event = events_repo.add(title="Standup", start_date=date(2024, 7, 1))

    service.delete_event(event.event_id)

    assert events_repo.get_by_id(event.event_id).is_active is False
    with pytest.raises(NotFoundError):
        service.get_event(event.event_id)
    with pytest.raises(NotFoundError):
        service.delete_event(77)


def test_list_events_with_only_from_runs_until_today(service, events_repo, monkeypatch, fixed_today):
    monkeypatch.setattr("onboarding_system.common.datetime_utils.today_local", lambda: fixed_today)
    events_repo.add(title="A", start_date=date(2024, 7, 1))
    events_repo.add(title="B", start_date=date(2024, 7, 20))

    events = service.list_events(date_from=date(2024, 7, 1))

    assert [e.title for e in events] == ["A"]
    assert events_repo.last_query["start_to"] == fixed_today


def test_list_events_with_only_to_and_kind(service, events_repo):
    events_repo.add(title="Holiday", start_date=date(2024, 7, 28), kind=EventKind.HOLIDAY)
    events_repo.add(title="Meeting", start_date=date(2024, 7, 1), kind=EventKind.MEETING)

    events = service.list_events(date_to=date(2024, 7, 31), kind="feriado")

    assert [e.title for e in events] == ["Holiday"]
    assert events_repo.last_query["start_from"] == date(2000, 1, 1)


def test_upcoming_events_window_and_limit(service, events_repo, fixed_today):
    events_repo.add(title="Past", start_date=date(2024, 7, 1))
    events_repo.add(title="Soon", start_date=date(2024, 7, 20))
    events_repo.add(title="Later", start_date=date(2024, 8, 10))
    events_repo.add(title="Far", start_date=date(2024, 9, 1))

    assert [e.title for e in service.upcoming_events(today=fixed_today)] == ["Soon", "Later"]
    assert [e.title for e in service.upcoming_events(1, today=fixed_today)] == ["Soon"]
    with pytest.raises(ValidationError):
        service.upcoming_events(0, today=fixed_today)


def test_events_by_kind(service, events_repo):
    events_repo.add(title="Holiday", start_date=date(2024, 7, 28), kind=EventKind.HOLIDAY)
    events_repo.add(title="Meeting", start_date=date(2024, 7, 1), kind=EventKind.MEETING)

    assert [e.title for e in service.events_by_kind(EventKind.MEETING)] == ["Meeting"]
    with pytest.raises(ValidationError):
        service.events_by_kind("otra_cosa")


def test_get_month_loads_entities_over_the_whole_grid(service, sessions_repo, events_repo):
    sessions_repo.add(
        title="Cloud",
        start_date=date(2024, 7, 30),
        end_date=date(2024, 8, 2),
        status=SessionStatus.SCHEDULED,
    )
    sessions_repo.add(title="June", start_date=date(2024, 6, 28), end_date=date(2024, 7, 1))
    sessions_repo.add(title="Inactive", start_date=date(2024, 7, 10), end_date=date(2024, 7, 10), is_active=False)
    events_repo.add(title="Padding only", start_date=date(2024, 8, 3))

    view = service.get_month(2024, 7)

    assert sessions_repo.last_overlap == (date(2024, 7, 1), date(2024, 8, 4))
    assert events_repo.last_overlap == (date(2024, 7, 1), date(2024, 8, 4))
    by_date = {d.date: d for d in view.days}
    assert [s.title for s in by_date[date(2024, 7, 1)].sessions] == ["June"]
    assert [s.title for s in by_date[date(2024, 8, 2)].sessions] == ["Cloud"]
    assert by_date[date(2024, 8, 2)].sessions[0].type_color == "#E31937"
    assert by_date[date(2024, 8, 2)].sessions[0].status == "programada"
    assert not by_date[date(2024, 7, 10)].sessions
    assert [e.title for e in by_date[date(2024, 8, 3)].events] == ["Padding only"]


def test_get_month_locale(events_repo, sessions_repo):
    service = CalendarService(events_repo, sessions_repo, default_locale="en")

    assert service.get_month(2024, 3).month_name == "March"
    assert service.get_month(2024, 3, locale="es").month_name == "Marzo"


def test_get_month_rejects_invalid_month_before_querying(service, sessions_repo):
    with pytest.raises(InvalidArgument):
        service.get_month(2024, 13)
    assert sessions_repo.last_overlap is None


def test_update_event_id_in_changes_is_rejected(service, events_repo):
    event = events_repo.add(title="Standup", start_date=date(2024, 7, 1))

    with pytest.raises(ValidationError, match="event_id"):
        service.update_event(event.event_id, event_id=9, title="X")
    assert events_repo.get_by_id(event.event_id).title == "Standup"


def test_is_all_day_is_parsed_strictly(service, events_repo):
    event_id = service.create_event(title="Feriado", start_date=date(2024, 7, 28), color="#E31937", is_all_day="false")
    assert events_repo.get_by_id(event_id).is_all_day is False

    assert service.update_event(event_id, is_all_day="true").is_all_day is True
    with pytest.raises(ValidationError):
        service.update_event(event_id, is_all_day="tal vez")
    with pytest.raises(ValidationError):
        service.create_event(title="X", start_date=date(2024, 7, 28), color="#E31937", is_all_day="quizas")
