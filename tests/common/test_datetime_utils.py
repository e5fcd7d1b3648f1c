from datetime import date, datetime

import pytest

from onboarding_system.common import datetime_utils
from onboarding_system.common.datetime_utils import (
    format_display,
    format_iso,
    is_valid_date_range,
    month_bounds,
    parse_iso_date,
    parse_optional_date,
    require_date_only,
    start_date_window,
)
from onboarding_system.common.validators import (
    parse_bool,
    require_color,
    require_date_range,
    require_max_length,
    require_non_empty,
    require_positive,
)
from onboarding_system.core.exceptions import InvalidArgument, ValidationError


def test_parse_iso_date_ignores_time_part():
    assert parse_iso_date("2024-07-16") == date(2024, 7, 16)
    assert parse_iso_date("2024-07-16T23:30:00Z") == date(2024, 7, 16)
    assert parse_iso_date(date(2024, 7, 16)) == date(2024, 7, 16)


@pytest.mark.parametrize("raw", ["16/07/2024", "2024-02-30", "", "hoy"])
def test_parse_iso_date_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_iso_date(raw)


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("") is None
    assert parse_optional_date("2024-01-31") == date(2024, 1, 31)


def test_require_date_only_rejects_datetime():
    assert require_date_only(date(2024, 7, 1), "start_date") == date(2024, 7, 1)
    with pytest.raises(InvalidArgument):
        require_date_only(datetime(2024, 7, 1, 8, 0), "start_date")
    with pytest.raises(InvalidArgument):
        require_date_only("2024-07-01", "start_date")


def test_formatting_and_month_bounds():
    assert format_iso(date(2024, 7, 1)) == "2024-07-01"
    assert format_display(date(2024, 7, 1)) == "01/07/2024"
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 2) == (date(2023, 2, 1), date(2023, 2, 28))
    assert is_valid_date_range(date(2024, 7, 1), date(2024, 7, 1))
    assert not is_valid_date_range(date(2024, 7, 2), date(2024, 7, 1))


def test_start_date_window(monkeypatch):
    monkeypatch.setattr(datetime_utils, "today_local", lambda: date(2024, 7, 16))

    assert start_date_window(date(2024, 7, 1), date(2024, 7, 31)) == (date(2024, 7, 1), date(2024, 7, 31))
    assert start_date_window(date(2024, 7, 1), None) == (date(2024, 7, 1), date(2024, 7, 16))
    assert start_date_window(None, date(2024, 7, 31)) == (date(2000, 1, 1), date(2024, 7, 31))
    assert start_date_window(None, None) == (None, None)


def test_validators():
    assert require_non_empty("  Kickoff ", "Título") == "Kickoff"
    assert require_color("#abc") == "#abc"
    assert require_color("#E31937") == "#E31937"
    require_date_range(date(2024, 7, 1), None)
    require_date_range(date(2024, 7, 1), date(2024, 7, 1))

    with pytest.raises(ValidationError):
        require_non_empty("   ", "Título")
    with pytest.raises(ValidationError):
        require_max_length("abcd", "Título", 3)
    with pytest.raises(ValidationError):
        require_color("#12345")
    with pytest.raises(ValidationError):
        require_date_range(date(2024, 7, 2), date(2024, 7, 1))


def test_parse_bool_is_strict():
    assert parse_bool(True, "activo") is True
    assert parse_bool("false", "activo") is False
    assert parse_bool("Sí", "activo") is True
    assert parse_bool(0, "activo") is False

    for raw in ("quizas", "", None, 2):
        with pytest.raises(ValidationError):
            parse_bool(raw, "activo")


def test_require_positive_reports_missing_values():
    assert require_positive("3", "Capacidad") == 3

    with pytest.raises(ValidationError, match="entero"):
        require_positive(None, "Capacidad")
    with pytest.raises(ValidationError, match="al menos 1"):
        require_positive(0, "Capacidad")
