"""SSO errors and the logged-and-continue policy."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger()


class SSOError(Exception):
    """Base error for the SSO package."""


class UserNotExistError(SSOError):
    """Raised by identity stores when no such user exists."""

    def __init__(self, user_id: int | None = None, name: str | None = None):
        self.user_id = user_id
        self.name = name
        super().__init__(f"user does not exist [uid: {user_id}, name: {name}]")


class SessionError(SSOError):
    """Raised by session stores when a key cannot be written or removed."""


@contextmanager
def log_and_continue(event: str, **context: Any) -> Iterator[None]:
    """Log any exception raised in the block and resume after it.

    Used for every operation whose failure must not abort the caller.
    """
    try:
        yield
    except Exception as e:
        logger.error(event, error=str(e), error_type=type(e).__name__, **context)
