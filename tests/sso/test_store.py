"""Tests for the in-memory identity store and the dict session store."""

import pytest

from forge_sso.sso.errors import UserNotExistError
from forge_sso.sso.models import Identity
from forge_sso.sso.session import DictSessionStore
from forge_sso.sso.store import MemoryIdentityStore


class TestMemoryIdentityStore:
    """Test MemoryIdentityStore lookups and column updates."""

    def setup_method(self) -> None:
        self.store = MemoryIdentityStore(
            [Identity(id=1, name="Alice", email="alice@example.com")]
        )

    @pytest.mark.asyncio
    async def test_get_by_id(self) -> None:
        user = await self.store.get_user_by_id(1)
        assert user.name == "Alice"

    @pytest.mark.asyncio
    async def test_get_by_name_is_case_insensitive(self) -> None:
        user = await self.store.get_user_by_name("alice")
        assert user.id == 1

    @pytest.mark.asyncio
    async def test_missing_users(self) -> None:
        with pytest.raises(UserNotExistError):
            await self.store.get_user_by_id(2)
        with pytest.raises(UserNotExistError):
            await self.store.get_user_by_name("bob")

    @pytest.mark.asyncio
    async def test_returned_identity_is_a_copy(self) -> None:
        user = await self.store.get_user_by_id(1)
        user.language = "de-DE"

        assert (await self.store.get_user_by_id(1)).language == ""

    @pytest.mark.asyncio
    async def test_update_user_cols_only_touches_named_columns(self) -> None:
        user = await self.store.get_user_by_id(1)
        user.language = "de-DE"
        user.email = "changed@example.com"

        await self.store.update_user_cols(user, "language")

        stored = await self.store.get_user_by_id(1)
        assert stored.language == "de-DE"
        assert stored.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_update_missing_user(self) -> None:
        with pytest.raises(UserNotExistError):
            await self.store.update_user_cols(Identity(id=9, name="x"), "language")


class TestDictSessionStore:
    """Test DictSessionStore."""

    def test_wraps_given_mapping(self) -> None:
        data: dict = {"uid": 1}
        session = DictSessionStore(data)

        session.set("uname", "alice")
        session.delete("uid")

        assert data == {"uname": "alice"}

    def test_missing_keys(self) -> None:
        session = DictSessionStore()

        assert session.get("uid") is None
        session.delete("uid")
