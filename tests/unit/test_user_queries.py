"""
Unit tests for the users query criteria.

The criteria functions only build statements; these tests execute them
against a real SQLite database to check which rows they select.
"""

import pytest
import pytest_asyncio

from app.repositories.users import (
    Lifecycle,
    UserCriteria,
    build_user_query,
    by_email,
    by_id,
    escape_like,
    latest,
)
from tests.utils import make_user


async def emails(session_factory, stmt):
    async with session_factory() as session:
        result = await session.execute(stmt)
        return [user.email for user in result.scalars().all()]


@pytest_asyncio.fixture
async def population(session_factory):
    await make_user(session_factory, name="Alice", email="alice@example.com", verified=True)
    await make_user(session_factory, name="Bob", email="bob@example.com")
    await make_user(session_factory, name="Carol", email="carol@example.com", deleted=True)


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
    assert escape_like("plain") == "plain"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "lifecycle, expected",
    [
        (Lifecycle.ACTIVE, ["bob@example.com", "alice@example.com"]),
        (Lifecycle.DELETED, ["carol@example.com"]),
        (Lifecycle.ALL, ["carol@example.com", "bob@example.com", "alice@example.com"]),
    ],
)
async def test_lifecycle_filter(session_factory, population, lifecycle, expected):
    stmt = latest(build_user_query(UserCriteria(lifecycle=lifecycle)))
    assert await emails(session_factory, stmt) == expected


@pytest.mark.asyncio
async def test_verified_filter(session_factory, population):
    verified = latest(build_user_query(UserCriteria(verified=True)))
    unverified = latest(build_user_query(UserCriteria(verified=False)))

    assert await emails(session_factory, verified) == ["alice@example.com"]
    assert await emails(session_factory, unverified) == ["bob@example.com"]


@pytest.mark.asyncio
async def test_search_combines_with_lifecycle(session_factory, population):
    live = build_user_query(UserCriteria(search="CAR"))
    everyone = build_user_query(UserCriteria(search="CAR", lifecycle=Lifecycle.ALL))

    assert await emails(session_factory, live) == []
    assert await emails(session_factory, everyone) == ["carol@example.com"]


@pytest.mark.asyncio
async def test_blank_search_is_ignored(session_factory, population):
    stmt = build_user_query(UserCriteria(search="   "))
    assert len(await emails(session_factory, stmt)) == 2


@pytest.mark.asyncio
async def test_by_id_hides_deleted_by_default(session_factory):
    user = await make_user(session_factory, email="gone@example.com", deleted=True)

    assert await emails(session_factory, by_id(user.id)) == []
    assert await emails(session_factory, by_id(user.id, Lifecycle.ALL)) == ["gone@example.com"]


@pytest.mark.asyncio
async def test_by_email_sees_deleted_rows(session_factory):
    await make_user(session_factory, email="gone@example.com", deleted=True)

    assert await emails(session_factory, by_email("gone@example.com")) == ["gone@example.com"]
