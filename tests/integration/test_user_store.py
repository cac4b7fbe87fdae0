"""Integration tests for the SQLAlchemy user store on SQLite."""

import pytest

from user_service.kernel.identity.errors import NotFoundError
from user_service.kernel.identity.store import Credential, Identity

PHONE = "+62812345678"


class TestSqlAlchemyUserStore:
    
    async def test_create_assigns_sequential_ids(self, user_store):
        first = await user_store.create_user(PHONE, "first user", "hash-1")
        second = await user_store.create_user("+6281111111", "second user", "hash-2")
        
        assert first.id is not None and not first.phone_number_exists
        assert second.id == first.id + 1
    
    async def test_duplicate_phone_reported_as_flag(self, user_store):
        await user_store.create_user(PHONE, "first user", "hash-1")
        
        result = await user_store.create_user(PHONE, "second user", "hash-2")
        
        assert result.phone_number_exists is True
        assert result.id is None
    
    async def test_store_still_usable_after_conflict(self, user_store):
        await user_store.create_user(PHONE, "first user", "hash-1")
        await user_store.create_user(PHONE, "second user", "hash-2")
        
        result = await user_store.create_user("+6281111111", "third user", "hash-3")
        
        assert result.id is not None
    
    async def test_find_credential_by_phone(self, user_store):
        created = await user_store.create_user(PHONE, "first user", "hash-1")
        
        credential = await user_store.find_credential_by_phone(PHONE)
        
        assert credential == Credential(id=created.id, phone_number=PHONE, hashed_secret="hash-1")
        assert "hash-1" not in repr(credential)
    
    async def test_find_credential_missing(self, user_store):
        with pytest.raises(NotFoundError):
            await user_store.find_credential_by_phone(PHONE)
    
    async def test_find_identity_by_id(self, user_store):
        created = await user_store.create_user(PHONE, "first user", "hash-1")
        
        identity = await user_store.find_identity_by_id(created.id)
        
        assert identity == Identity(id=created.id, phone_number=PHONE, full_name="first user")
    
    async def test_find_identity_missing(self, user_store):
        with pytest.raises(NotFoundError):
            await user_store.find_identity_by_id(12345)
    
    async def test_update_identity(self, user_store):
        created = await user_store.create_user(PHONE, "first user", "hash-1")
        
        taken = await user_store.update_identity(created.id, "+6289999999", "renamed user")
        identity = await user_store.find_identity_by_id(created.id)
        
        assert taken is False
        assert identity.phone_number == "+6289999999"
        assert identity.full_name == "renamed user"
    
    async def test_update_identity_to_taken_phone(self, user_store):
        await user_store.create_user(PHONE, "first user", "hash-1")
        other = await user_store.create_user("+6281111111", "second user", "hash-2")
        
        taken = await user_store.update_identity(other.id, PHONE, "second user")
        identity = await user_store.find_identity_by_id(other.id)
        
        assert taken is True
        assert identity.phone_number == "+6281111111"
    
    async def test_update_identity_missing(self, user_store):
        with pytest.raises(NotFoundError):
            await user_store.update_identity(999, PHONE, "nobody")
    
    async def test_increment_login_count(self, user_store, login_count):
        created = await user_store.create_user(PHONE, "first user", "hash-1")
        
        await user_store.increment_login_count(created.id)
        await user_store.increment_login_count(created.id)
        
        assert await login_count(created.id) == 2
