"""Application wiring: settings, SSO registry and Starlette app."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from .config import SSOSettings, get_settings
from .logging import configure_logging
from .sso.chain import ChainResolver
from .sso.methods import default_methods
from .sso.models import IdentityStore, PasswordVerifier, TokenValidator
from .sso.registry import MethodRegistry
from .sso.signin import SignInHandler
from .web.csrf import CSRFCookie
from .web.locale import Locale
from .web.middleware import SSOMiddleware

logger = structlog.get_logger()


def build_registry(
    settings: SSOSettings,
    identity_store: IdentityStore,
    token_validator: TokenValidator | None = None,
    password_verifier: PasswordVerifier | None = None,
) -> MethodRegistry:
    """Create the registry holding the built-in methods in precedence order."""
    sign_in = SignInHandler(identity_store, Locale(settings), CSRFCookie(settings))
    return MethodRegistry(
        default_methods(
            settings,
            identity_store,
            sign_in,
            token_validator=token_validator,
            password_verifier=password_verifier,
        )
    )


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy"})


def build_app(
    identity_store: IdentityStore,
    settings: SSOSettings | None = None,
    registry: MethodRegistry | None = None,
    token_validator: TokenValidator | None = None,
    password_verifier: PasswordVerifier | None = None,
    routes: list[Route] | None = None,
) -> Starlette:
    """Build a Starlette app that resolves every request through the SSO chain.

    Configures logging at ``settings.log_level``. Methods are initialized on
    startup and freed on shutdown. Extra methods
    must be registered on ``registry`` before the app starts.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if registry is None:
        registry = build_registry(
            settings,
            identity_store,
            token_validator=token_validator,
            password_verifier=password_verifier,
        )

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        registry.init()
        logger.info(
            "SSO methods initialized",
            methods=[method.name for method in registry.methods()],
        )
        try:
            yield
        finally:
            registry.free()
            logger.info("SSO methods freed")

    app = Starlette(
        routes=[Route("/health", health), *(routes or [])],
        middleware=[
            Middleware(
                SessionMiddleware,
                secret_key=settings.session_secret,
                path=settings.cookie_path,
                https_only=settings.cookie_secure,
            ),
            Middleware(SSOMiddleware, resolver=ChainResolver(registry)),
        ],
        lifespan=lifespan,
    )
    app.state.sso_registry = registry
    app.state.sso_settings = settings
    return app
