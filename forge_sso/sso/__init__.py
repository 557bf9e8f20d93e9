"""Ordered single sign-on chain."""

from .chain import ChainResolver, session_user
from .errors import SessionError, SSOError, UserNotExistError, log_and_continue
from .methods import default_methods
from .models import Identity, SessionStore, SingleSignOn
from .paths import is_api_path, is_attachment_download, is_git_or_lfs_path
from .registry import MethodRegistry
from .session import DictSessionStore
from .signin import TRANSIENT_SESSION_KEYS, SignInHandler
from .store import MemoryIdentityStore

__all__ = [
    "ChainResolver",
    "DictSessionStore",
    "Identity",
    "MemoryIdentityStore",
    "MethodRegistry",
    "SSOError",
    "SessionError",
    "SessionStore",
    "SignInHandler",
    "SingleSignOn",
    "TRANSIENT_SESSION_KEYS",
    "UserNotExistError",
    "default_methods",
    "is_api_path",
    "is_attachment_download",
    "is_git_or_lfs_path",
    "log_and_continue",
    "session_user",
]
