from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    """Tipo de evento del calendario."""

    SESSION_LINKED = "sesion_onboarding"
    MEETING = "reunion"
    HOLIDAY = "feriado"
    OTHER = "otro"


class SessionStatus(str, Enum):
    """Estado de una sesión de onboarding."""

    SCHEDULED = "programada"
    IN_PROGRESS = "en_curso"
    COMPLETED = "completada"
    CANCELLED = "cancelada"


class Locale(str, Enum):
    ES = "es"
    EN = "en"
