from .api import ApiClient
from .auth_bridge import AuthNotifier
from .client import BakeryClient, LoginResult
from .config_types import ClientConfig, RequestOptions
from .connectivity import ConnectivityTracker, RequestQueue
from .errors import ApiError, BakeryClientError, ErrorCode, ResponseParseError
from .session import MemorySessionStore, Session, SessionStore
from .side_effects import Toast

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthNotifier",
    "BakeryClient",
    "BakeryClientError",
    "ClientConfig",
    "ConnectivityTracker",
    "ErrorCode",
    "LoginResult",
    "MemorySessionStore",
    "RequestOptions",
    "RequestQueue",
    "ResponseParseError",
    "Session",
    "SessionStore",
    "Toast",
]
