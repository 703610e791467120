from __future__ import annotations

import typer
from rich.prompt import Confirm
from rich.table import Table

from .. import console
from ..http import client_for, rows_or_empty, run_api

app = typer.Typer(help="Branch store commands (admin only).")


@app.command("list")
def list_branches(
        ctx: typer.Context,
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = client_for(ctx, base_url)

    async def _list():
        async with client:
            return await client.admin_branches_list()

    items = run_api(_list())
    if json_out:
        console.print_json(items)
        return
    if not rows_or_empty(items, "branches"):
        return

    table = Table(title="Branches")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("email")
    table.add_column("address")
    table.add_column("delivery time")
    for b in items:
        table.add_row(
            str(b.get("user_id", "-")),
            str(b.get("full_name") or "-"),
            str(b.get("email") or "-"),
            str(b.get("branch_address") or "-"),
            str(b.get("delivery_time") or "-"),
        )
    console.print(table)


@app.command("add")
def add_branch(
        ctx: typer.Context,
        name: str = typer.Option(..., "--name", help="Branch display name."),
        email: str = typer.Option(..., "--email", help="Login email."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, confirmation_prompt=True),
        address: str | None = typer.Option(None, "--address", help="Branch address."),
        delivery_time: str | None = typer.Option(None, "--delivery-time", help="Preferred delivery time, e.g. 07:00."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = client_for(ctx, base_url)

    async def _add():
        async with client:
            return await client.auth_register(
                full_name=name,
                email=email,
                password=password,
                branch_address=address,
                delivery_time=delivery_time,
            )

    run_api(_add())
    console.ok(f"Branch {name} created.")


@app.command("update")
def update_branch(
        ctx: typer.Context,
        user_id: int = typer.Argument(..., help="Branch user ID."),
        name: str = typer.Option(..., "--name", help="Branch display name."),
        email: str = typer.Option(..., "--email", help="Login email."),
        address: str | None = typer.Option(None, "--address", help="Branch address."),
        delivery_time: str | None = typer.Option(None, "--delivery-time", help="Preferred delivery time."),
        password: str | None = typer.Option(None, "--password", help="New password; omit to keep the current one."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = client_for(ctx, base_url)

    async def _update():
        async with client:
            return await client.admin_branch_update(
                user_id,
                full_name=name,
                email=email,
                branch_address=address,
                delivery_time=delivery_time,
                password=password,
            )

    run_api(_update())
    console.ok(f"Branch {user_id} updated.")


@app.command("delete")
def delete_branch(
        ctx: typer.Context,
        user_id: int = typer.Argument(..., help="Branch user ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not Confirm.ask(f"Delete branch {user_id}?", default=False):
        raise typer.Exit(code=0)
    client = client_for(ctx, base_url)

    async def _delete():
        async with client:
            return await client.admin_branch_delete(user_id)

    run_api(_delete())
    console.ok(f"Branch {user_id} deleted.")
