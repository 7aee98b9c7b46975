"""
Unit tests for UserService.

This module tests the users business logic including:
- Registration and the verification email hand-off
- Partial updates with email uniqueness and profile upsert
- Soft delete and restore
- Lookup and paginated listing
"""

import pytest
from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import verify_password
from app.models import Capability, User, UserPermission
from app.repositories.users import Lifecycle, UserCriteria
from app.schemas.user import UserCreate, UserUpdate
from app.services.base import Page
from app.services.user import EMAIL_TAKEN, UserService, is_email_conflict
from tests.utils import make_user


def new_user(**overrides) -> UserCreate:
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "password123",
        "password_confirmation": "password123",
    }
    data.update(overrides)
    return UserCreate(**data)


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_create_user(self, session_factory, sent_emails):
        async with session_factory() as db:
            user = await UserService.create_user(db, new_user())

        assert user.id is not None
        assert user.email == "jane@example.com"
        assert user.deleted_at is None
        assert user.email_verified_at is None
        assert verify_password("password123", user.password)
        sent_emails.assert_called_once_with("jane@example.com", "Jane Doe")

    @pytest.mark.asyncio
    async def test_create_user_defers_email_to_background(self, session_factory, sent_emails):
        background_tasks = BackgroundTasks()

        async with session_factory() as db:
            await UserService.create_user(db, new_user(), background_tasks)

        sent_emails.assert_not_called()
        assert len(background_tasks.tasks) == 1
        assert background_tasks.tasks[0].args == ("jane@example.com", "Jane Doe")

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self, session_factory):
        await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            with pytest.raises(ValidationError) as exc_info:
                await UserService.create_user(db, new_user())

        assert exc_info.value.errors == {"email": [EMAIL_TAKEN]}
        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_commit_maps_unique_violation_to_field_error(self, session_factory):
        await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            db.add(User(name="Twin", email="jane@example.com", password="x"))
            with pytest.raises(ValidationError) as exc_info:
                await UserService._commit(db)

        assert exc_info.value.errors == {"email": [EMAIL_TAKEN]}

    @pytest.mark.asyncio
    async def test_commit_reraises_other_integrity_errors(self, session_factory):
        user = await make_user(session_factory, email="jane@example.com", capabilities=[Capability.VIEW])

        async with session_factory() as db:
            db.add(UserPermission(user_id=user.id, permission=Capability.VIEW.value))
            with pytest.raises(IntegrityError) as exc_info:
                await UserService._commit(db)

        assert not is_email_conflict(exc_info.value)


class TestUpdateUser:

    @pytest.mark.asyncio
    async def test_partial_update(self, session_factory):
        created = await make_user(session_factory, name="Jane", email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id, relations=("profile",))
            user = await UserService.update_user(db, user, UserUpdate(name="Jane Doe"))

        assert user.name == "Jane Doe"
        assert user.email == "jane@example.com"
        assert verify_password("password123", user.password)

    @pytest.mark.asyncio
    async def test_update_password_is_hashed(self, session_factory):
        created = await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            update = UserUpdate(password="newpassword1", password_confirmation="newpassword1")
            user = await UserService.update_user(db, user, update)

        assert verify_password("newpassword1", user.password)

    @pytest.mark.asyncio
    async def test_update_email_taken_by_other_user(self, session_factory):
        await make_user(session_factory, email="taken@example.com")
        created = await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            with pytest.raises(ValidationError):
                await UserService.update_user(db, user, UserUpdate(email="taken@example.com"))

    @pytest.mark.asyncio
    async def test_update_profile_without_eager_load(self, session_factory):
        created = await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            update = UserUpdate(profile={"city": "Madrid", "country": "es"})
            user = await UserService.update_user(db, user, update)

            assert user.profile.city == "Madrid"
            assert user.profile.country == "ES"
            assert user.profile.locale == "es"

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id, relations=("profile",))
            assert user.profile.city == "Madrid"


class TestDeleteAndRestore:

    @pytest.mark.asyncio
    async def test_soft_delete_and_restore(self, session_factory):
        created = await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            await UserService.delete_user(db, user)

        async with session_factory() as db:
            with pytest.raises(NotFoundError):
                await UserService.get_user(db, created.id)

            user = await UserService.get_user(db, created.id, Lifecycle.ALL)
            assert user.is_deleted

            user = await UserService.restore_user(db, user)
            assert not user.is_deleted

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            assert user.deleted_at is None

    @pytest.mark.asyncio
    async def test_restore_live_user_changes_nothing(self, session_factory):
        created = await make_user(session_factory, email="jane@example.com")

        async with session_factory() as db:
            user = await UserService.get_user(db, created.id)
            updated_at = user.updated_at
            user = await UserService.restore_user(db, user)

        assert user.updated_at == updated_at
        assert user.deleted_at is None


class TestListUsers:

    @pytest.mark.asyncio
    async def test_list_users_paginates(self, session_factory):
        for i in range(3):
            await make_user(session_factory, name=f"User {i}", email=f"user{i}@example.com")

        async with session_factory() as db:
            result = await UserService.list_users(db, UserCriteria(), page=1, per_page=2)

        assert isinstance(result, Page)
        assert [user.name for user in result.items] == ["User 2", "User 1"]
        assert result.total == 3
        assert result.last_page == 2
        assert result.first_item == 1
        assert result.last_item == 2

    @pytest.mark.asyncio
    async def test_get_missing_user(self, session_factory):
        async with session_factory() as db:
            with pytest.raises(NotFoundError) as exc_info:
                await UserService.get_user(db, 42)

        assert exc_info.value.message == "User not found"


def test_empty_page():
    page = Page(items=[], total=0, page=1, per_page=15)

    assert page.last_page == 1
    assert page.first_item is None
    assert page.last_item is None
