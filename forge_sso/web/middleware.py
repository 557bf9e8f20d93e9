"""SSO middleware for Starlette applications."""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..sso.chain import ChainResolver
from ..sso.session import DictSessionStore

logger = structlog.get_logger()

UNPROTECTED_PATHS = ("/health",)


class SSOMiddleware(BaseHTTPMiddleware):
    """Resolve the request's identity into ``request.state.user``.

    Anonymous requests pass through with ``request.state.user`` set to None;
    rejecting them is up to the route.
    """

    def __init__(self, app: ASGIApp, resolver: ChainResolver):
        super().__init__(app)
        self.resolver = resolver

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with SSO resolution."""
        if request.url.path in UNPROTECTED_PATHS:
            return await call_next(request)

        # Without SessionMiddleware the session only lives for this request
        session_data = request.scope.get("session")
        session = DictSessionStore(session_data if session_data is not None else {})

        # Methods write cookies here; they are copied onto the real response
        pending = Response()
        user = await self.resolver.resolve(request, pending, session)
        request.state.user = user

        if user is None:
            logger.debug("Anonymous request", path=request.url.path)

        response = await call_next(request)
        for key, value in pending.raw_headers:
            if key == b"set-cookie":
                response.headers.append("set-cookie", value.decode("latin-1"))
        return response
