from __future__ import annotations

from dataclasses import dataclass

from .calendar.builder import CalendarGridBuilder
from .calendar.mysql_event_repository import MySQLEventRepository
from .calendar.service import CalendarService
from .core.constants import DEFAULT_LOCALE
from .database.connection import DBConfig, DatabaseConnection
from .onboarding.mysql_session_repository import MySQLOnboardingSessionRepository
from .onboarding.mysql_type_repository import MySQLOnboardingTypeRepository
from .onboarding.service import OnboardingService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    types_repo: MySQLOnboardingTypeRepository
    sessions_repo: MySQLOnboardingSessionRepository
    events_repo: MySQLEventRepository

    onboarding_service: OnboardingService
    calendar_service: CalendarService


def build_container(*, db_config: dict, default_locale: str = DEFAULT_LOCALE.value) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    types_repo = MySQLOnboardingTypeRepository(conn)
    sessions_repo = MySQLOnboardingSessionRepository(conn)
    events_repo = MySQLEventRepository(conn)

    onboarding_service = OnboardingService(sessions_repo, types_repo)
    calendar_service = CalendarService(
        events_repo,
        sessions_repo,
        builder=CalendarGridBuilder(),
        default_locale=default_locale,
    )

    return Container(
        conn=conn,
        types_repo=types_repo,
        sessions_repo=sessions_repo,
        events_repo=events_repo,
        onboarding_service=onboarding_service,
        calendar_service=calendar_service,
    )
