"""
Unit Tests for the Role Mutator
===============================

Tests:
1. Roles field removed, other profile fields untouched
2. Unknown or empty user ids return False without raising
3. Store faults are logged and reported as False
4. Batch clearing reports one result per user
"""

import logging

import pytest
from unittest.mock import AsyncMock, MagicMock
from pymongo.errors import AutoReconnect

from wallet.roles import remove_all_roles, remove_all_roles_many


class TestRemoveAllRoles:

    @pytest.mark.asyncio
    async def test_removes_roles_keeps_other_fields(self, fake_db, add_user):
        add_user("u1", "ankush", roles={"super_user": True, "member": True},
                       first_name="Ankush", github_id="ankushdharkar")

        assert await remove_all_roles(fake_db, "u1") is True

        profile = await fake_db.users.find_one({"id": "u1"}, {"_id": 0})
        assert "roles" not in profile
        assert profile["username"] == "ankush"
        assert profile["first_name"] == "Ankush"
        assert profile["github_id"] == "ankushdharkar"

    @pytest.mark.asyncio
    async def test_user_without_roles(self, fake_db, add_user):
        add_user("u1", "ankush")

        assert await remove_all_roles(fake_db, "u1") is True

    @pytest.mark.asyncio
    async def test_other_users_untouched(self, fake_db, add_user):
        add_user("u1", "ankush", roles=["super_user"])
        add_user("u2", "nikhil", roles=["member"])

        await remove_all_roles(fake_db, "u1")

        other = await fake_db.users.find_one({"id": "u2"})
        assert other["roles"] == ["member"]

    @pytest.mark.asyncio
    async def test_nonexistent_user(self, fake_db):
        assert await remove_all_roles(fake_db, "missing") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [None, ""])
    async def test_empty_user_id(self, fake_db, user_id):
        assert await remove_all_roles(fake_db, user_id) is False

    @pytest.mark.asyncio
    async def test_store_fault_returns_false(self, caplog):
        users = MagicMock()
        users.update_one = AsyncMock(side_effect=AutoReconnect("connection reset"))
        db = MagicMock()
        db.__getitem__.return_value = users

        with caplog.at_level(logging.ERROR, logger="wallet.roles"):
            assert await remove_all_roles(db, "u1") is False

        assert "remove_all_roles failed for user u1" in caplog.text


class TestRemoveAllRolesMany:

    @pytest.mark.asyncio
    async def test_batch_results(self, fake_db, add_user):
        add_user("u1", "ankush", roles=["super_user"])
        add_user("u2", "nikhil", roles=["member"])

        results = await remove_all_roles_many(fake_db, ["u1", "missing", "u2"])

        assert results == {"u1": True, "missing": False, "u2": True}


class TestClearRolesCli:

    @pytest.mark.asyncio
    async def test_run_clear_counts_failures(self, fake_db, add_user, monkeypatch):
        from unittest.mock import patch
        from wallet import clear_roles

        add_user("u1", "ankush", roles=["super_user"])
        monkeypatch.setenv("MONGO_URL", "mongodb://localhost:27017")
        monkeypatch.setenv("DB_NAME", "dinero_wallet_test")

        client = MagicMock()
        client.__getitem__.return_value = fake_db
        with patch.object(clear_roles, "AsyncIOMotorClient", return_value=client):
            failures = await clear_roles.run_clear(["u1", "missing"])

        assert failures == 1
        assert "roles" not in await fake_db.users.find_one({"id": "u1"})
        client.close.assert_called_once()
