"""Built-in SSO methods."""

from ...config import SSOSettings
from ..models import IdentityStore, PasswordVerifier, SingleSignOn, TokenValidator
from ..signin import SignInHandler
from .basic import BasicMethod
from .oauth2 import OAuth2Method
from .reverse_proxy import ReverseProxyMethod
from .session import SessionMethod


def default_methods(
    settings: SSOSettings,
    identity_store: IdentityStore,
    sign_in: SignInHandler,
    token_validator: TokenValidator | None = None,
    password_verifier: PasswordVerifier | None = None,
) -> list[SingleSignOn]:
    """Return the built-in methods in precedence order.

    OAuth2 comes first because it must ignore whatever user the session
    holds. Basic follows so explicit credentials beat a stale cookie.
    Session is the fast path for signed-in browsers. The reverse proxy is
    the fallback and never overrides a credential-bearing method.
    """
    return [
        OAuth2Method(
            identity_store,
            token_validator=token_validator,
            cache_ttl_seconds=settings.token_cache_ttl_seconds,
        ),
        BasicMethod(
            identity_store,
            token_validator=token_validator,
            password_verifier=password_verifier,
            lfs_enabled=settings.lfs_start_server,
        ),
        SessionMethod(identity_store),
        ReverseProxyMethod(
            identity_store,
            sign_in=sign_in,
            enabled=settings.enable_reverse_proxy_auth,
            header_name=settings.reverse_proxy_auth_user,
            lfs_enabled=settings.lfs_start_server,
        ),
    ]


__all__ = [
    "BasicMethod",
    "OAuth2Method",
    "ReverseProxyMethod",
    "SessionMethod",
    "default_methods",
]
