"""Session bookkeeping performed when a user signs in."""

import structlog
from starlette.requests import Request
from starlette.responses import Response

from .errors import log_and_continue
from .models import (
    CSRFInvalidator,
    Identity,
    IdentityStore,
    LocaleNegotiator,
    SessionStore,
)

logger = structlog.get_logger()

# Keys left behind by OpenID, two-factor and account-linking flows
TRANSIENT_SESSION_KEYS = (
    "openid_verified_uri",
    "openid_signin_remember",
    "openid_determined_email",
    "openid_determined_username",
    "twofaUid",
    "twofaRemember",
    "u2fChallenge",
    "linkAccount",
)


class SignInHandler:
    """Write a fresh session for a user who has just signed in."""

    def __init__(
        self,
        identity_store: IdentityStore,
        locale: LocaleNegotiator,
        csrf: CSRFInvalidator,
    ):
        self.identity_store = identity_store
        self.locale = locale
        self.csrf = csrf

    async def handle(
        self,
        response: Response,
        request: Request,
        session: SessionStore,
        identity: Identity,
    ) -> None:
        """Reset the session for ``identity``.

        Clears stale flow keys, stores ``uid`` and ``uname``, saves the
        negotiated language when the user has none, sets the locale cookie
        and expires the CSRF cookie. If saving the language fails, the
        locale and CSRF cookies are left untouched.
        """
        for key in TRANSIENT_SESSION_KEYS:
            with log_and_continue("Error deleting session key", key=key):
                session.delete(key)

        with log_and_continue("Error setting session", key="uid", uid=identity.id):
            session.set("uid", identity.id)
        with log_and_continue("Error setting session", key="uname", uid=identity.id):
            session.set("uname", identity.name)

        # The user's stored language wins over the negotiated one
        if not identity.language:
            identity.language = self.locale.negotiate(request, response)
            try:
                await self.identity_store.update_user_cols(identity, "language")
            except Exception as e:
                logger.error(
                    "Error updating user language",
                    uid=identity.id,
                    locale=identity.language,
                    error=str(e),
                )
                return

        self.locale.set_cookie(response, identity.language, 0)

        # Forces a new CSRF token on the next render
        self.csrf.delete(response)
