from __future__ import annotations

from ..common.datetime_utils import format_iso
from .model import OnboardingSession, OnboardingType, SessionStats


def type_to_dict(onboarding_type: OnboardingType) -> dict:
    return {
        "id": onboarding_type.type_id,
        "name": onboarding_type.name,
        "color": onboarding_type.color,
        "description": onboarding_type.description or "",
        "duration_days": onboarding_type.duration_days,
    }


def session_to_dict(session: OnboardingSession) -> dict:
    return {
        "id": session.session_id,
        "title": session.title,
        "description": session.description or "",
        "type": {
            "id": session.type_id,
            "name": session.type_name or "",
            "color": session.type_color or "",
        },
        "start_date": format_iso(session.start_date),
        "end_date": format_iso(session.end_date),
        "status": session.status.value,
        "max_capacity": session.max_capacity,
        "location": session.location or "",
        "virtual_link": session.virtual_link or "",
        "notes": session.notes or "",
        "is_active": session.is_active,
    }


def stats_to_dict(stats: SessionStats) -> dict:
    return {
        "total": stats.total,
        "by_status": {status.value: count for status, count in stats.by_status.items()},
        "total_capacity": stats.total_capacity,
        "by_type": [{"name": t.name, "color": t.color, "count": t.count} for t in stats.by_type],
    }
