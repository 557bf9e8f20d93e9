"""Reverse proxy header method."""

import structlog
from starlette.requests import Request
from starlette.responses import Response

from ..errors import SSOError, UserNotExistError
from ..models import Identity, IdentityStore, SessionStore
from ..paths import is_api_path, is_attachment_download, is_git_or_lfs_path
from ..signin import SignInHandler

logger = structlog.get_logger()


class ReverseProxyMethod:
    """Trust the user name a fronting proxy puts in a request header.

    Last in the chain so it never overrides real credentials. Browser
    requests also get a signed-in session.
    """

    name = "reverse_proxy"

    def __init__(
        self,
        identity_store: IdentityStore,
        sign_in: SignInHandler | None = None,
        enabled: bool = False,
        header_name: str = "X-WEBAUTH-USER",
        lfs_enabled: bool = False,
    ):
        self.identity_store = identity_store
        self.sign_in = sign_in
        self.enabled = enabled
        self.header_name = header_name
        self.lfs_enabled = lfs_enabled

    def init(self) -> None:
        if self.enabled and not self.header_name:
            raise SSOError("reverse proxy authentication enabled without a header name")

    def free(self) -> None:
        pass

    def is_applicable(self, request: Request) -> bool:
        return self.enabled

    def starts_session(self, request: Request) -> bool:
        """Browser pages get a session; API, attachment and Git/LFS requests do not."""
        return not (
            is_api_path(request)
            or is_attachment_download(request)
            or is_git_or_lfs_path(request, self.lfs_enabled)
        )

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None:
        username = request.headers.get(self.header_name, "").strip()
        if not username:
            return None
        logger.debug("Reverse proxy authorization: found username", username=username)

        try:
            user = await self.identity_store.get_user_by_name(username)
        except UserNotExistError:
            logger.debug("Reverse proxy user does not exist", username=username)
            return None
        except Exception as e:
            logger.error(
                "Failed to look up reverse proxy user",
                username=username,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if self.sign_in is not None and self.starts_session(request):
            await self.sign_in.handle(response, request, session, user)
        return user
