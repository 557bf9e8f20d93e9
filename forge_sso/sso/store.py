"""In-memory identity store for development and tests."""

from dataclasses import replace

import structlog

from .errors import UserNotExistError
from .models import Identity

logger = structlog.get_logger()


class MemoryIdentityStore:
    """IdentityStore keeping user records in a dict keyed by id."""

    def __init__(self, identities: list[Identity] | None = None):
        self._users: dict[int, Identity] = {}
        for identity in identities or []:
            self.add(identity)

    def add(self, identity: Identity) -> None:
        self._users[identity.id] = replace(identity)

    async def get_user_by_id(self, user_id: int) -> Identity:
        try:
            return replace(self._users[user_id])
        except KeyError:
            raise UserNotExistError(user_id=user_id) from None

    async def get_user_by_name(self, name: str) -> Identity:
        lowered = name.lower()
        for user in self._users.values():
            if user.name.lower() == lowered:
                return replace(user)
        raise UserNotExistError(name=name)

    async def update_user_cols(self, identity: Identity, *cols: str) -> None:
        """Copy only the named columns from ``identity`` onto the stored record."""
        stored = self._users.get(identity.id)
        if stored is None:
            raise UserNotExistError(user_id=identity.id)
        for col in cols:
            setattr(stored, col, getattr(identity, col))
        logger.debug("User columns updated", uid=identity.id, cols=list(cols))
