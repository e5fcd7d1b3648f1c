from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OnboardingType
from .repository import OnboardingTypeRepository


def _row_to_type(r: dict) -> OnboardingType:
    return OnboardingType(
        type_id=int(r["type_id"]),
        name=r["name"],
        color=r["color"],
        description=r.get("description"),
        duration_days=int(r.get("duration_days") or 1),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLOnboardingTypeRepository(OnboardingTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, type_id: int) -> Optional[OnboardingType]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT type_id, name, color, description, duration_days, is_active
                FROM onboarding_types
                WHERE type_id=%s
                """,
                (int(type_id),),
            )
            r = fetchone(cur)
            return _row_to_type(r) if r else None

    def list_active(self) -> Sequence[OnboardingType]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT type_id, name, color, description, duration_days, is_active
                FROM onboarding_types
                WHERE is_active=1
                ORDER BY name ASC
                """
            )
            return [_row_to_type(r) for r in fetchall(cur)]
