from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable

ORDER_LEAD_DAYS = 2


def _to_utc_iso(dt: datetime) -> str:
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def default_order_date(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return _to_utc_iso(now + timedelta(days=ORDER_LEAD_DAYS))


def parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _price(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def order_total(items: Iterable[dict[str, Any]]) -> float:
    return sum(_price(i.get("price")) * int(i.get("quantity") or 0) for i in items)


def filter_by_date_range(
        orders: Iterable[dict[str, Any]],
        start: date,
        end: date,
        *,
        key: str = "delivery_date",
) -> list[dict[str, Any]]:
    """Orders whose `key` timestamp falls on a day in [start, end]."""
    out = []
    for order in orders:
        dt = parse_timestamp(order.get(key))
        if dt is not None and start <= dt.date() <= end:
            out.append(order)
    return out


def filter_by_month(orders: Iterable[dict[str, Any]], month: str, *, key: str = "submitted_at") -> list[dict[str, Any]]:
    """`month` is "YYYY-MM", compared in UTC."""
    out = []
    for order in orders:
        dt = parse_timestamp(order.get(key))
        if dt is not None and dt.astimezone(timezone.utc).strftime("%Y-%m") == month:
            out.append(order)
    return out


@dataclass
class RecapRow:
    item_name: str
    food_id: int
    store_quantities: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.store_quantities.values())


@dataclass
class Recap:
    store_names: list[str]
    rows: list[RecapRow]


def recap(orders: Iterable[dict[str, Any]], food_items: Iterable[dict[str, Any]] = ()) -> Recap:
    """Quantity per food item per branch; rows and columns in first-seen order."""
    food_ids = {str(f.get("food_name")): int(f.get("food_id") or 0) for f in food_items}
    store_names: list[str] = []
    rows: dict[str, RecapRow] = {}
    for order in orders:
        branch = str(order.get("branch_name") or "")
        if branch not in store_names:
            store_names.append(branch)
        for item in order.get("items") or []:
            name = str(item.get("food_name") or "")
            row = rows.get(name)
            if row is None:
                row = rows[name] = RecapRow(item_name=name, food_id=food_ids.get(name, 0))
            row.store_quantities[branch] = row.store_quantities.get(branch, 0) + int(item.get("quantity") or 0)
    return Recap(store_names=store_names, rows=list(rows.values()))
