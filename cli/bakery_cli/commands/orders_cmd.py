from __future__ import annotations

from datetime import date, datetime

import typer
from rich.table import Table

from bakery_client.orders import filter_by_date_range, filter_by_month, order_total, recap

from .. import console
from ..formatting import format_day, format_list_timestamp, format_price
from ..http import client_for, rows_or_empty, run_api

app = typer.Typer(help="Order commands.")


def _parse_day(value: str, flag: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.err(f"{flag} must be YYYY-MM-DD, got {value!r}")
        raise typer.Exit(code=2)


def parse_item(raw: str) -> dict[str, int]:
    """Parse FOOD_ID:QTY (quantity defaults to 1) into an order item."""
    food_id, sep, qty = raw.partition(":")
    try:
        item = {"food_id": int(food_id), "quantity": int(qty) if sep else 1}
    except ValueError:
        raise typer.BadParameter(f"expected FOOD_ID:QTY, got {raw!r}")
    if item["quantity"] <= 0:
        raise typer.BadParameter(f"quantity must be positive in {raw!r}")
    return item


def _orders_table(title: str, orders: list[dict]) -> Table:
    table = Table(title=title)
    table.add_column("id", style="bold")
    table.add_column("branch")
    table.add_column("order date")
    table.add_column("delivery")
    table.add_column("items", justify="right")
    table.add_column("total", justify="right")
    for o in orders:
        items = o.get("items") or []
        table.add_row(
            str(o.get("order_id", "-")),
            str(o.get("branch_name") or "-"),
            format_day(o.get("order_date")),
            format_day(o.get("delivery_date")) if o.get("delivery_date") else "-",
            str(sum(int(i.get("quantity") or 0) for i in items)),
            format_price(order_total(items)),
        )
    return table


@app.command("list", help="All orders (admin).")
def list_orders(
        ctx: typer.Context,
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = client_for(ctx, base_url)

    async def _list():
        async with client:
            return await client.admin_orders_list()

    orders = run_api(_list())
    if json_out:
        console.print_json(orders)
        return
    if rows_or_empty(orders, "orders"):
        console.print(_orders_table("Orders", orders))


@app.command("filter", help="Orders by branch and/or order date (admin).")
def filter_orders(
        ctx: typer.Context,
        branch: str | None = typer.Option(None, "--branch", help="Branch name."),
        order_date: str | None = typer.Option(None, "--date", help="Order date, YYYY-MM-DD."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    if not branch and not order_date:
        console.err("Select at least one filter: --branch or --date.")
        raise typer.Exit(code=2)
    if order_date:
        _parse_day(order_date, "--date")
    client = client_for(ctx, base_url)

    async def _filter():
        async with client:
            return await client.admin_orders_filter(branch_name=branch, order_date=order_date)

    orders = run_api(_filter())
    if json_out:
        console.print_json(orders)
        return
    if rows_or_empty(orders, "orders"):
        console.print(_orders_table("Filtered orders", orders))


@app.command("recap", help="Quantity per item per branch for a delivery date range (admin).")
def recap_orders(
        ctx: typer.Context,
        date_from: str = typer.Option(..., "--from", help="First delivery day, YYYY-MM-DD."),
        date_to: str = typer.Option(..., "--to", help="Last delivery day, YYYY-MM-DD."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    start = _parse_day(date_from, "--from")
    end = _parse_day(date_to, "--to")
    if end < start:
        console.err("--to is before --from.")
        raise typer.Exit(code=2)
    client = client_for(ctx, base_url)

    async def _fetch():
        async with client:
            return await client.admin_orders_list(), await client.admin_food_items_list()

    orders, foods = run_api(_fetch())
    result = recap(filter_by_date_range(orders, start, end), foods)
    if not rows_or_empty(result.rows, "orders in range"):
        return

    table = Table(title=f"Recap {start.isoformat()} - {end.isoformat()}")
    table.add_column("item", style="bold")
    for name in result.store_names:
        table.add_column(name, justify="right")
    table.add_column("total", justify="right", style="bold")
    for row in result.rows:
        cells = [str(row.store_quantities.get(name, 0)) for name in result.store_names]
        table.add_row(row.item_name, *cells, str(row.total))
    console.print(table)


@app.command("mine", help="Orders of the logged-in branch.")
def my_orders(
        ctx: typer.Context,
        month: str | None = typer.Option(None, "--month", help="Only orders submitted in YYYY-MM."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = client_for(ctx, base_url)

    async def _list():
        async with client:
            return await client.branch_orders_list()

    orders = run_api(_list())
    if month:
        orders = filter_by_month(orders, month)
    if json_out:
        console.print_json(orders)
        return
    if rows_or_empty(orders, "orders"):
        console.print(_orders_table("My orders", orders))


@app.command("show", help="One order of the logged-in branch.")
def show_order(
        ctx: typer.Context,
        order_id: int = typer.Argument(..., help="Order ID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = client_for(ctx, base_url)

    async def _get():
        async with client:
            return await client.branch_order_get(order_id)

    order = run_api(_get())
    if json_out:
        console.print_json(order)
        return

    items = order.get("items") or []
    console.ok(f"Order {order.get('order_id', order_id)}:")
    console.print(f"  order_date: {format_day(order.get('order_date'))}")
    console.print(f"  submitted_at: {format_list_timestamp(order.get('submitted_at'))}")
    table = Table()
    table.add_column("item")
    table.add_column("qty", justify="right")
    table.add_column("price", justify="right")
    for i in items:
        table.add_row(str(i.get("food_name") or "-"), str(i.get("quantity", 0)), format_price(i.get("price")))
    console.print(table)
    console.print(f"  total: {format_price(order_total(items))}")


@app.command("create", help="Place an order for the logged-in branch.")
def create_order(
        ctx: typer.Context,
        items: list[str] = typer.Option(..., "--item", help="FOOD_ID:QTY, repeatable."),
        order_date: str | None = typer.Option(None, "--date", help="Order date (ISO); defaults to two days ahead."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    parsed = [parse_item(raw) for raw in items]
    client = client_for(ctx, base_url)

    async def _create():
        async with client:
            return await client.branch_order_create(parsed, order_date=order_date)

    created = run_api(_create())
    console.ok(f"Order placed (id={created.get('order_id', '-')}).")
