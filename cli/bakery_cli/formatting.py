from __future__ import annotations

from datetime import datetime, timezone

from bakery_client.orders import parse_timestamp


def format_price(value) -> str:
    if value is None or value == "":
        return "-"
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return str(value)
    if amount.is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def format_day(value: datetime | str | None) -> str:
    """Calendar day of a timestamp, e.g. "05 Mar 2025 (Wed)"."""
    dt = parse_timestamp(value)
    if dt is None:
        return "-" if value is None else str(value)
    return dt.strftime("%d %b %Y (%a)")


def format_list_timestamp(value: datetime | str | None) -> str:
    if value is None:
        return "-"
    dt = parse_timestamp(value)
    if dt is None:
        return str(value)
    dt = dt.astimezone(timezone.utc)
    ms = dt.microsecond // 1000
    if ms:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ms:03d}Z"
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
