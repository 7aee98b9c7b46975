"""Helpers shared by the test modules."""

from typing import Dict, Iterable

from app.core.security import create_access_token, get_password_hash
from app.models import Capability, User, UserPermission

API = "/api/v1"


async def make_user(
    session_factory,
    name: str = "Test User",
    email: str = "test@example.com",
    password: str = "password123",
    capabilities: Iterable[Capability] = (),
    verified: bool = False,
    deleted: bool = False,
) -> User:
    """Insert a user row directly and return it."""
    async with session_factory() as session:
        user = User(name=name, email=email, password=get_password_hash(password))
        user.permissions = [UserPermission(permission=c.value) for c in capabilities]
        if verified:
            user.mark_email_as_verified()
        if deleted:
            user.soft_delete()
        session.add(user)
        await session.commit()
        return user


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
