"""User service.

This module contains the business logic for the users resource: registration,
partial updates (including the attached profile), soft delete and restore,
lookup and paginated listing. It sits between the HTTP layer and the
database so endpoints never touch persistence details directly.
"""

from typing import Iterable, Optional

from fastapi import BackgroundTasks
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.core.security import get_password_hash
from app.models.user import User
from app.models.user_profile import UserProfile
from app.repositories.users import (
    Lifecycle,
    UserCriteria,
    build_user_query,
    by_email,
    by_id,
    latest,
    with_relations,
)
from app.schemas.user import UserCreate, UserUpdate
from app.services.base import Page, get_one_or_404, paginate
from app.services.email import EmailService
from app.utils.logger import user_logger

EMAIL_TAKEN = "The email has already been taken"

email_service = EmailService()


def is_email_conflict(error: IntegrityError) -> bool:
    """True when ``error`` comes from the unique index on users.email.

    SQLite names the column ("users.email"), PostgreSQL the index ("ix_users_email").
    """
    message = str(error.orig)
    return "users.email" in message or "ix_users_email" in message


class UserService:
    """Service class for user operations.

    Writes are single-attempt: storage errors are surfaced to the caller,
    never retried.
    """

    @staticmethod
    async def ensure_email_available(
        db: AsyncSession, email: str, ignore_user_id: Optional[int] = None
    ) -> None:
        """Raise a field error when another row, live or deleted, owns ``email``."""
        result = await db.execute(by_email(email))
        owner = result.scalar_one_or_none()
        if owner is not None and owner.id != ignore_user_id:
            raise ValidationError.for_field("email", EMAIL_TAKEN)

    @staticmethod
    async def _commit(db: AsyncSession) -> None:
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            user_logger.warning(f"Integrity error on commit: {e.orig}", "COMMIT")
            if is_email_conflict(e):
                # Lost a race on the unique email index
                raise ValidationError.for_field("email", EMAIL_TAKEN)
            raise

    @staticmethod
    def send_verification(user: User, background_tasks: Optional[BackgroundTasks] = None) -> None:
        """Dispatch the verification email without blocking the response."""
        if background_tasks is not None:
            background_tasks.add_task(email_service.send_verification_email, user.email, user.name)
        else:
            email_service.send_verification_email(user.email, user.name)

    @classmethod
    async def create_user(
        cls,
        db: AsyncSession,
        data: UserCreate,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> User:
        """Register a new user and trigger the verification email."""
        await cls.ensure_email_available(db, data.email)

        user = User(
            name=data.name,
            email=data.email,
            password=get_password_hash(data.password),
        )
        db.add(user)
        await cls._commit(db)
        await db.refresh(user)

        cls.send_verification(user, background_tasks)
        user_logger.success("Created user", "CREATE", user_id=user.id, email=user.email)
        return user

    @classmethod
    async def update_user(cls, db: AsyncSession, user: User, data: UserUpdate) -> User:
        """Apply a partial update; fields absent from ``data`` are left untouched."""
        changes = data.model_dump(exclude_unset=True, exclude={"password_confirmation", "profile"})

        if "email" in changes:
            if changes["email"] == user.email:
                del changes["email"]
            else:
                await cls.ensure_email_available(db, changes["email"], ignore_user_id=user.id)

        if "password" in changes:
            changes["password"] = get_password_hash(changes["password"])

        for field, value in changes.items():
            setattr(user, field, value)

        if data.profile is not None:
            await cls._apply_profile(db, user, data.profile.model_dump(exclude_unset=True))

        await cls._commit(db)
        user_logger.info(
            "Updated user", "UPDATE", user_id=user.id,
            fields=sorted(changes) + (["profile"] if data.profile is not None else []),
        )
        return user

    @staticmethod
    async def _apply_profile(db: AsyncSession, user: User, profile_data: dict) -> None:
        if "profile" in inspect(user).unloaded:
            await db.refresh(user, attribute_names=["profile"])

        if user.profile is None:
            user.profile = UserProfile(**profile_data)
        else:
            for field, value in profile_data.items():
                setattr(user.profile, field, value)

    @classmethod
    async def delete_user(cls, db: AsyncSession, user: User) -> None:
        """Soft delete: the row is kept and tagged with a deletion timestamp."""
        user.soft_delete()
        await cls._commit(db)
        user_logger.info("Soft deleted user", "DELETE", user_id=user.id)

    @classmethod
    async def restore_user(cls, db: AsyncSession, user: User) -> User:
        """Clear the deletion marker. Restoring a live user changes nothing."""
        if user.is_deleted:
            user.restore()
            await cls._commit(db)
            user_logger.info("Restored user", "RESTORE", user_id=user.id)
        return user

    @staticmethod
    async def get_user(
        db: AsyncSession,
        user_id: int,
        lifecycle: Lifecycle = Lifecycle.ACTIVE,
        relations: Iterable[str] = (),
    ) -> User:
        stmt = with_relations(by_id(user_id, lifecycle), relations)
        return await get_one_or_404(db, stmt, "User not found")

    @staticmethod
    async def list_users(
        db: AsyncSession,
        criteria: UserCriteria,
        page: int = 1,
        per_page: int = 15,
    ) -> Page:
        """Newest users first, with profiles eager-loaded."""
        stmt = latest(with_relations(build_user_query(criteria), ("profile",)))
        result = await paginate(db, stmt, page=page, per_page=per_page)
        user_logger.debug(
            f"Listed {len(result.items)} of {result.total} users", "LIST",
            search=criteria.search, verified=criteria.verified, lifecycle=criteria.lifecycle.value,
        )
        return result
