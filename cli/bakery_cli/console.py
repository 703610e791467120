from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from bakery_client.side_effects import Toast

console = Console()

UNAUTHORIZED_TITLE = "Akses Tidak Diizinkan"
UNAUTHORIZED_DEFAULT = "Sesi Anda telah berakhir atau Anda tidak memiliki akses ke halaman ini."


def print_json(data) -> None:
    console.print_json(data=data)


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {msg}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/] {msg}")


def err(msg: str) -> None:
    console.print(f"[bold red]ERR[/] {msg}")


def print(*args, **kwargs):
    """Proxy to underlying rich Console.print()."""
    console.print(*args, **kwargs)


def toast(t: Toast) -> None:
    line = f"[bold red]ERR[/] {escape(t.message)}"
    if t.action_label:
        line += f" [dim]\\[{escape(t.action_label)}: run the command again][/]"
    console.print(line)
    if t.description:
        console.print(f"    [dim]{escape(t.description)}[/]")


def unauthorized(message: str | None = None) -> None:
    body = escape(message or UNAUTHORIZED_DEFAULT)
    console.print(Panel(body, title=f"[bold]{UNAUTHORIZED_TITLE}[/]", border_style="yellow", expand=False))
