"""SSO models, the method contract and its collaborators."""

from dataclasses import dataclass
from typing import Any, Protocol

from starlette.requests import Request
from starlette.responses import Response


@dataclass
class Identity:
    """A resolved user. Only ``language`` is ever written by the chain."""

    id: int
    name: str
    language: str = ""
    email: str = ""


class SessionStore(Protocol):
    """Per-client key/value session."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class IdentityStore(Protocol):
    """Durable user records.

    Lookups raise ``UserNotExistError`` when the user is absent.
    """

    async def get_user_by_id(self, user_id: int) -> Identity: ...

    async def get_user_by_name(self, name: str) -> Identity: ...

    async def update_user_cols(self, identity: Identity, *cols: str) -> None: ...


class TokenValidator(Protocol):
    """Turns an access token into a user id, or None when invalid."""

    async def validate(self, token: str) -> int | None: ...


class PasswordVerifier(Protocol):
    """Checks a username/password pair."""

    async def verify(self, username: str, password: str) -> Identity | None: ...


class LocaleNegotiator(Protocol):
    def negotiate(self, request: Request, response: Response) -> str: ...

    def set_cookie(self, response: Response, language: str, max_age: int) -> None: ...


class CSRFInvalidator(Protocol):
    def delete(self, response: Response) -> None: ...


class SingleSignOn(Protocol):
    """Contract implemented by every authentication scheme in the chain.

    ``name`` labels the method in log lines. ``init`` and ``free`` raise on
    failure. ``resolve`` returns None for anything it cannot vouch for,
    including invalid credentials.
    """

    name: str

    def init(self) -> None: ...

    def free(self) -> None: ...

    def is_applicable(self, request: Request) -> bool: ...

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None: ...
