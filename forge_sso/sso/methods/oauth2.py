"""OAuth2 bearer token method."""

import hashlib

import structlog
from cachetools import TTLCache
from starlette.requests import Request
from starlette.responses import Response

from ..errors import SSOError, UserNotExistError
from ..models import Identity, IdentityStore, SessionStore, TokenValidator
from ..paths import is_api_path, is_attachment_download

logger = structlog.get_logger()


def _cache_key(token: str) -> str:
    """Cache key from the token hash, so tokens never sit in memory as keys."""
    return hashlib.sha256(token.encode()).hexdigest()[:16]


def token_from_request(request: Request) -> str | None:
    """Extract an access token from the query string or Authorization header."""
    token = request.query_params.get("token") or request.query_params.get(
        "access_token"
    )
    if token:
        return token

    auth_header = request.headers.get("authorization", "")
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() in ("bearer", "token"):
        return parts[1]
    return None


class OAuth2Method:
    """Authenticate API and attachment requests with an access token.

    Runs before every other method and never reads the session, since a
    token may belong to a different user than the one signed in.
    """

    name = "oauth2"

    def __init__(
        self,
        identity_store: IdentityStore,
        token_validator: TokenValidator | None = None,
        cache_ttl_seconds: int = 300,
    ):
        self.identity_store = identity_store
        self.token_validator = token_validator
        self.cache: TTLCache[str, int] = TTLCache(maxsize=1000, ttl=cache_ttl_seconds)

    def init(self) -> None:
        if self.token_validator is None:
            raise SSOError("no token validator configured")

    def free(self) -> None:
        self.cache.clear()

    def is_applicable(self, request: Request) -> bool:
        return is_api_path(request) or is_attachment_download(request)

    async def user_id_from_token(self, token: str) -> int | None:
        key = _cache_key(token)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Token validation cache hit", cache_key=key)
            return cached

        if self.token_validator is None:
            return None
        try:
            user_id = await self.token_validator.validate(token)
        except Exception as e:
            logger.warning(
                "Token validation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if user_id is not None:
            self.cache[key] = user_id
        return user_id

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None:
        token = token_from_request(request)
        if not token:
            return None

        user_id = await self.user_id_from_token(token)
        if user_id is None:
            return None

        try:
            user = await self.identity_store.get_user_by_id(user_id)
        except UserNotExistError:
            return None
        except Exception as e:
            logger.error("Failed to look up token user", uid=user_id, error=str(e))
            return None

        request.state.is_api_token = True
        return user
