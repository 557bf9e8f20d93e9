"""HTTP Basic authentication method."""

import base64
import binascii

import structlog
from starlette.requests import Request
from starlette.responses import Response

from ..errors import UserNotExistError
from ..models import (
    Identity,
    IdentityStore,
    PasswordVerifier,
    SessionStore,
    TokenValidator,
)
from ..paths import is_api_path, is_git_or_lfs_path

logger = structlog.get_logger()

TOKEN_PASSWORD = "x-oauth-basic"


def decode_basic_auth(header: str) -> tuple[str, str] | None:
    """Decode an ``Authorization: Basic`` header into (username, password)."""
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "basic":
        return None
    try:
        decoded = base64.b64decode(parts[1], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


class BasicMethod:
    """Authenticate API and Git requests with HTTP Basic credentials.

    Git clients cannot send bearer headers, so an access token is accepted
    as the username (empty or ``x-oauth-basic`` password) or as the
    password. Otherwise the pair is checked as a real password.
    """

    name = "basic"

    def __init__(
        self,
        identity_store: IdentityStore,
        token_validator: TokenValidator | None = None,
        password_verifier: PasswordVerifier | None = None,
        lfs_enabled: bool = False,
    ):
        self.identity_store = identity_store
        self.token_validator = token_validator
        self.password_verifier = password_verifier
        self.lfs_enabled = lfs_enabled

    def init(self) -> None:
        pass

    def free(self) -> None:
        pass

    def is_applicable(self, request: Request) -> bool:
        return is_api_path(request) or is_git_or_lfs_path(request, self.lfs_enabled)

    async def _user_from_token(self, token: str) -> Identity | None:
        if self.token_validator is None or not token:
            return None
        try:
            user_id = await self.token_validator.validate(token)
            if user_id is None:
                return None
            return await self.identity_store.get_user_by_id(user_id)
        except UserNotExistError:
            return None
        except Exception as e:
            logger.warning(
                "Basic auth token check failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None:
        credentials = decode_basic_auth(request.headers.get("authorization", ""))
        if credentials is None:
            return None
        username, password = credentials

        is_username_token = not password or password == TOKEN_PASSWORD
        user = await self._user_from_token(username if is_username_token else password)
        if user is not None:
            logger.debug("Basic authorization: token accepted", user=user.name)
            return user

        if is_username_token or self.password_verifier is None:
            return None
        try:
            user = await self.password_verifier.verify(username, password)
        except Exception as e:
            logger.warning(
                "Basic auth sign in failed",
                username=username,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        if user is not None:
            logger.debug("Basic authorization: logged in user", user=user.name)
        return user
