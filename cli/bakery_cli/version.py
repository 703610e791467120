from __future__ import annotations

from importlib import metadata


def cli_version() -> str:
    try:
        return metadata.version("bakery-orders")
    except Exception:
        return "0.0.0"
