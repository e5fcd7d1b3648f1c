"""Ejemplo: construir la vista mensual sin Flask ni base de datos.

The grid builder is a pure function of its inputs, so it can be used from
scripts, tests or any other service layer.
"""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from onboarding_system.calendar.builder import build_month
from onboarding_system.calendar.model import EventSummary, SessionSummary
from onboarding_system.core.enums import EventKind


def main():
    sessions = [
        SessionSummary(id=1, title="Journey to Cloud", type_color="#E31937",
                       start_date=date(2024, 7, 30), end_date=date(2024, 8, 2)),
    ]
    events = [
        EventSummary(id=1, title="Kickoff", kind=EventKind.MEETING,
                     start_date=date(2024, 7, 16), color="#00448D"),
    ]

    month = build_month(2024, 7, sessions, events)
    print(month.month_name, month.year)
    for week in month.weeks:
        print(" ".join(
            f"{d.date.day:>2}{'*' if d.sessions or d.events else ' '}" if d.in_target_month else "  ."
            for d in week
        ))


if __name__ == "__main__":
    main()
