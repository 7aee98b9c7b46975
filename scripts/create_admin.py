#!/usr/bin/env python3
"""
Create (or update) an administrator account holding every users capability.

Usage:
    python scripts/create_admin.py --email admin@example.com [--password ...]
"""

import argparse
import asyncio
import os
import secrets
import string
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sqlalchemy import select  # noqa: E402

from app.core.security import get_password_hash  # noqa: E402
from app.db.async_session import get_async_db_manager, shutdown_async_database  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.models import Capability, User, UserPermission  # noqa: E402


def _generate_password(length: int = 20) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


async def create_admin(email: str, password: str, name: str, update_password: bool) -> bool:
    """Returns True when a new user was created."""
    manager = await get_async_db_manager()
    if manager.is_sqlite:
        async with manager.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with manager.async_session_factory() as db:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        created = user is None
        if created:
            user = User(name=name, email=email, password=get_password_hash(password))
            user.mark_email_as_verified()
            db.add(user)
        elif update_password:
            user.password = get_password_hash(password)
        user.restore()

        held = {p.permission for p in user.permissions}
        for capability in Capability:
            if capability.value not in held:
                user.permissions.append(UserPermission(permission=capability.value))

        await db.commit()
        return created


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an admin user with all users capabilities.")
    parser.add_argument("--email", required=True, help="Admin user email")
    parser.add_argument("--password", default=None, help="Admin user password (generated if omitted)")
    parser.add_argument("--name", default="Admin", help="Display name")
    parser.add_argument(
        "--update-password",
        action="store_true",
        help="If the user exists, overwrite their password",
    )
    args = parser.parse_args(argv)

    password = args.password or _generate_password()
    email = args.email.strip().lower()

    async def run():
        try:
            return await create_admin(email, password, args.name, args.update_password)
        finally:
            await shutdown_async_database()

    created = asyncio.run(run())

    if created:
        print(f"created admin email={email}")
        if args.password is None:
            print(f"generated password: {password}")
    else:
        print(f"admin already exists email={email}; capabilities granted")
        if args.update_password:
            print("password updated")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
