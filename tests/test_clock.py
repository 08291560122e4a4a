from datetime import date, datetime, timezone

from procurement.services import clock


def test_skip_sunday_moves_to_monday():
    # 2025-06-01 10:00 IST is a Sunday
    sunday = datetime(2025, 6, 1, 4, 30, tzinfo=timezone.utc)
    shifted = clock.skip_sunday(sunday)
    assert shifted.weekday() == 0
    assert shifted.date() == date(2025, 6, 2)
    assert shifted.hour == 10


def test_skip_sunday_leaves_weekdays():
    saturday = datetime(2025, 5, 31, 4, 30, tzinfo=timezone.utc)
    assert clock.skip_sunday(saturday).date() == date(2025, 5, 31)


def test_sunday_in_ist_but_saturday_in_utc():
    # 2025-05-31 20:00 UTC is Sunday 01:30 in IST
    late = datetime(2025, 5, 31, 20, 0, tzinfo=timezone.utc)
    assert clock.skip_sunday(late).date() == date(2025, 6, 2)


def test_now_is_ist():
    assert clock.now().utcoffset().total_seconds() == 5.5 * 3600


def test_fiscal_year_code():
    assert clock.fiscal_year_code(date(2024, 4, 1)) == "24-25"
    assert clock.fiscal_year_code(date(2025, 1, 15)) == "24-25"
    assert clock.fiscal_year_code(date(2099, 12, 1)) == "99-00"


def test_format_ist():
    value = datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert clock.format_ist(value) == "01/01/2025 05:30"
    assert clock.format_ist(None) == ""
