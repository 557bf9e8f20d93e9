"""Cookie session method."""

from starlette.requests import Request
from starlette.responses import Response

from ..chain import session_user
from ..models import Identity, IdentityStore, SessionStore


class SessionMethod:
    """Reuse the identity of a browser session that is already signed in."""

    name = "session"

    def __init__(self, identity_store: IdentityStore):
        self.identity_store = identity_store

    def init(self) -> None:
        pass

    def free(self) -> None:
        pass

    def is_applicable(self, request: Request) -> bool:
        return True

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None:
        return await session_user(session, self.identity_store)
