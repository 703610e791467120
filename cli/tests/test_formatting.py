from bakery_cli.formatting import format_day, format_list_timestamp, format_price


def test_format_list_timestamp_truncates_microseconds() -> None:
    ts = "2026-01-04T23:04:51.290171Z"
    assert format_list_timestamp(ts) == "2026-01-04T23:04:51.290Z"


def test_format_list_timestamp_normalizes_utc_offset() -> None:
    ts = "2026-01-04T23:04:51.290171+00:00"
    assert format_list_timestamp(ts) == "2026-01-04T23:04:51.290Z"


def test_format_price() -> None:
    assert format_price("15000.00") == "15,000"
    assert format_price(12.5) == "12.50"
    assert format_price(None) == "-"
    assert format_price("n/a") == "n/a"


def test_format_day() -> None:
    assert format_day("2025-03-05T08:00:00Z") == "05 Mar 2025 (Wed)"
    assert format_day(None) == "-"
    assert format_day("soon") == "soon"
