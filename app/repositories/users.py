"""
Query criteria for the users table.

Every read goes through these functions so the soft-delete filter is always
an explicit choice of the caller (``Lifecycle``) rather than a hidden default
applied to all queries.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import selectinload

from app.models.user import User


class Lifecycle(str, enum.Enum):
    """Which rows a read may see."""
    ACTIVE = "active"
    DELETED = "deleted"
    ALL = "all"


@dataclass(frozen=True)
class UserCriteria:
    search: Optional[str] = None
    verified: Optional[bool] = None
    lifecycle: Lifecycle = Lifecycle.ACTIVE


def with_lifecycle(stmt: Select, lifecycle: Lifecycle) -> Select:
    if lifecycle is Lifecycle.ACTIVE:
        return stmt.where(User.deleted_at.is_(None))
    if lifecycle is Lifecycle.DELETED:
        return stmt.where(User.deleted_at.is_not(None))
    return stmt


def find_verified(stmt: Select) -> Select:
    return stmt.where(User.email_verified_at.is_not(None))


def find_unverified(stmt: Select) -> Select:
    return stmt.where(User.email_verified_at.is_(None))


def search_by_name_or_email(stmt: Select, term: str) -> Select:
    """Case-insensitive substring match on name or email."""
    pattern = f"%{escape_like(term.strip())}%"
    return stmt.where(
        or_(
            User.name.ilike(pattern, escape="\\"),
            User.email.ilike(pattern, escape="\\"),
        )
    )


def latest(stmt: Select) -> Select:
    """Newest first; id breaks ties between rows created in the same instant."""
    return stmt.order_by(User.created_at.desc(), User.id.desc())


def with_relations(stmt: Select, relations: Iterable[str]) -> Select:
    for name in relations:
        stmt = stmt.options(selectinload(getattr(User, name)))
    return stmt


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_user_query(criteria: UserCriteria) -> Select:
    """Translate list filters into a select over users (unordered, unpaginated)."""
    stmt = with_lifecycle(select(User), criteria.lifecycle)

    if criteria.search and criteria.search.strip():
        stmt = search_by_name_or_email(stmt, criteria.search)

    if criteria.verified is True:
        stmt = find_verified(stmt)
    elif criteria.verified is False:
        stmt = find_unverified(stmt)

    return stmt


def by_id(user_id: int, lifecycle: Lifecycle = Lifecycle.ACTIVE) -> Select:
    return with_lifecycle(select(User).where(User.id == user_id), lifecycle)


def by_email(email: str) -> Select:
    """Lookup across all rows; the unique constraint covers tombstones too."""
    return select(User).where(User.email == email)
