"""Resolution of a request's identity through the ordered SSO chain."""

import structlog
from starlette.requests import Request
from starlette.responses import Response

from .errors import UserNotExistError
from .models import Identity, IdentityStore, SessionStore
from .registry import MethodRegistry

logger = structlog.get_logger()


class ChainResolver:
    """Try each registered method in order until one yields an identity."""

    def __init__(self, registry: MethodRegistry):
        self.registry = registry

    async def resolve(
        self, request: Request, response: Response, session: SessionStore
    ) -> Identity | None:
        """Return the identity from the first applicable method that resolves.

        A method that raises counts as having found nothing. Returns None
        when the request is anonymous.
        """
        for method in self.registry.methods():
            try:
                if not method.is_applicable(request):
                    continue
                identity = await method.resolve(request, response, session)
            except Exception as e:
                logger.error(
                    "SSO method failed",
                    method=method.name,
                    path=request.url.path,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            if identity is not None:
                logger.debug(
                    "Request authenticated",
                    method=method.name,
                    user=identity.name,
                    path=request.url.path,
                )
                return identity

        return None


async def session_user(
    session: SessionStore, identity_store: IdentityStore
) -> Identity | None:
    """Return the user referenced by the session's ``uid`` key."""
    uid = session.get("uid")
    if uid is None:
        return None
    logger.debug("Session authorization: found user", uid=uid)

    # bool is an int subclass but never a valid user id
    if not isinstance(uid, int) or isinstance(uid, bool):
        return None

    try:
        user = await identity_store.get_user_by_id(uid)
    except UserNotExistError:
        return None
    except Exception as e:
        logger.error(
            "Failed to look up session user",
            uid=uid,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None

    logger.debug("Session authorization: logged in user", uid=user.id, user=user.name)
    return user
