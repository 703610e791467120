from __future__ import annotations

import typer

from bakery_client import Session

from .. import console
from ..auth_state import ConfigSessionStore, resolve_auth_context
from ..config import load_config, save_config
from ..http import make_client, run_api, state_from

app = typer.Typer(help="Auth commands.")


@app.command("login")
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", prompt=True, help="Account email."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Account password."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL and remember it."),
):
    state = state_from(ctx)
    cfg = load_config()
    client = make_client(
        cfg,
        base_url_override=base_url or state.base_url_override,
        auth_notifier=state.auth_notifier,
        at_login=True,
    )

    async def _login():
        async with client:
            return await client.auth_login(email=email, password=password)

    result = run_api(_login())

    if base_url:
        cfg = load_config()
        cfg.base_url = client.api.cfg.base_url
        save_config(cfg)
    ConfigSessionStore().save(Session(token=result.token, role=result.role, full_name=result.full_name))
    who = result.full_name or email
    console.ok(f"Logged in as {who}" + (f" ({result.role})." if result.role else "."))


@app.command("logout", help="Clear the stored session.")
def logout():
    ConfigSessionStore().clear()
    console.ok("Session cleared.")


def whoami_impl():
    ctx = resolve_auth_context()
    if ctx.state != "authed":
        console.err("Not logged in. Run: bakery auth login")
        raise typer.Exit(code=2)
    console.print(f"name: {ctx.full_name or '-'}")
    console.print(f"role: {ctx.role or '-'}")


@app.command("whoami", help="Show the stored session.")
def whoami():
    whoami_impl()


@app.command("reset-password", help="Reset a password with an emailed OTP code.")
def reset_password(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", prompt=True, help="Account email."),
):
    state = state_from(ctx)
    cfg = load_config()

    def _client():
        return make_client(
            cfg,
            base_url_override=state.base_url_override,
            auth_notifier=state.auth_notifier,
            at_login=True,
        )

    async def _request_reset():
        async with _client() as client:
            await client.auth_request_reset(email=email)

    run_api(_request_reset())
    console.ok("OTP sent. Check your email for the code.")

    otp = typer.prompt("OTP code").strip()

    async def _verify():
        async with _client() as client:
            await client.auth_verify_otp(email=email, otp=otp)

    run_api(_verify())

    new_password = typer.prompt("New password", hide_input=True, confirmation_prompt=True)

    async def _reset():
        async with _client() as client:
            await client.auth_reset_password(email=email, otp=otp, new_password=new_password)

    run_api(_reset())
    console.ok("Password reset. You can now log in with the new password.")
