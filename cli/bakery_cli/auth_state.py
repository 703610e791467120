from __future__ import annotations

from dataclasses import dataclass

from bakery_client import Session

from .config import load_config, save_config


class ConfigSessionStore:
    """Session persisted in the [auth] table of the config file.

    Every read goes to disk so a login from another shell is picked up.
    """

    def get_token(self) -> str | None:
        token = (load_config().auth.token or "").strip()
        return token or None

    def load(self) -> Session:
        auth = load_config().auth
        return Session(token=auth.token, role=auth.role or None, full_name=auth.full_name or None)

    def save(self, session: Session) -> None:
        cfg = load_config()
        cfg.auth.token = session.token
        cfg.auth.token_type = "bearer"
        cfg.auth.role = session.role or ""
        cfg.auth.full_name = session.full_name or ""
        save_config(cfg)

    def clear(self) -> None:
        cfg = load_config()
        if not (cfg.auth.token or cfg.auth.role or cfg.auth.full_name):
            return
        cfg.auth.token = ""
        cfg.auth.role = ""
        cfg.auth.full_name = ""
        save_config(cfg)


@dataclass
class AuthContext:
    state: str
    role: str | None = None
    full_name: str | None = None


def resolve_auth_context() -> AuthContext:
    session = ConfigSessionStore().load()
    if not session.token.strip():
        return AuthContext(state="no_token")
    return AuthContext(state="authed", role=session.role, full_name=session.full_name)
