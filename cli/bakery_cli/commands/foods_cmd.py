from __future__ import annotations

import typer
from rich.prompt import Confirm
from rich.table import Table

from .. import console
from ..formatting import format_price
from ..http import client_for, rows_or_empty, run_api

app = typer.Typer(help="Food catalog commands.")


@app.command("list")
def list_foods(
        ctx: typer.Context,
        branch: bool = typer.Option(False, "--branch", help="Use the branch store catalog instead of the admin one."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = client_for(ctx, base_url)

    async def _list():
        async with client:
            if branch:
                return await client.branch_food_items()
            return await client.admin_food_items_list()

    items = run_api(_list())
    if json_out:
        console.print_json(items)
        return
    if not rows_or_empty(items, "food items"):
        return

    table = Table(title="Food items")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("price", justify="right")
    table.add_column("available")
    table.add_column("description")
    for f in items:
        table.add_row(
            str(f.get("food_id", "-")),
            str(f.get("food_name") or "-"),
            format_price(f.get("price")),
            "yes" if f.get("is_available", True) else "no",
            str(f.get("description") or ""),
        )
    console.print(table)


@app.command("add")
def add_food(
        ctx: typer.Context,
        name: str = typer.Option(..., "--name", help="Food name."),
        description: str = typer.Option(..., "--description", help="Description."),
        price: float = typer.Option(..., "--price", help="Unit price."),
        available: bool = typer.Option(True, "--available/--unavailable", help="Availability."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = client_for(ctx, base_url)

    async def _add():
        async with client:
            return await client.admin_food_item_create(
                food_name=name, description=description, price=price, is_available=available
            )

    created = run_api(_add())
    console.ok(f"Food item created (id={created.get('food_id', '-')}).")


@app.command("update")
def update_food(
        ctx: typer.Context,
        food_id: int = typer.Argument(..., help="Food ID."),
        name: str | None = typer.Option(None, "--name", help="Food name."),
        description: str | None = typer.Option(None, "--description", help="Description."),
        price: float | None = typer.Option(None, "--price", help="Unit price."),
        available: bool | None = typer.Option(None, "--available/--unavailable", help="Availability."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if name is None and description is None and price is None and available is None:
        console.err("Nothing to update.")
        raise typer.Exit(code=2)
    client = client_for(ctx, base_url)

    async def _update():
        async with client:
            return await client.admin_food_item_update(
                food_id, food_name=name, description=description, price=price, is_available=available
            )

    run_api(_update())
    console.ok(f"Food item {food_id} updated.")


@app.command("delete")
def delete_food(
        ctx: typer.Context,
        food_id: int = typer.Argument(..., help="Food ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not Confirm.ask(f"Delete food item {food_id}?", default=False):
        raise typer.Exit(code=0)
    client = client_for(ctx, base_url)

    async def _delete():
        async with client:
            return await client.admin_food_item_delete(food_id)

    run_api(_delete())
    console.ok(f"Food item {food_id} deleted.")
