from __future__ import annotations

import typer

from . import console
from .auth_state import resolve_auth_context
from .commands import auth_cmd, branches_cmd, foods_cmd, orders_cmd
from .http import CliState
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="bakery",
        help="bakery orders CLI",
        no_args_is_help=True,
    )

    ctx = resolve_auth_context()

    app.add_typer(auth_cmd.app, name="auth")
    if ctx.state == "authed":
        app.command("whoami")(auth_cmd.whoami_impl)
        app.add_typer(orders_cmd.app, name="orders")
        app.add_typer(foods_cmd.app, name="foods")
        # unknown role: let the server decide
        if ctx.role in (None, "admin"):
            app.add_typer(branches_cmd.app, name="branches")

    @app.callback()
    def _main(
            ctx: typer.Context,
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
            base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
    ):
        setup_logging(verbose)
        state = CliState(base_url_override=base_url)
        ctx.obj = state
        ctx.with_resource(state.auth_notifier.registered(console.unauthorized))

    return app


app = _build_app()
