"""
Shared query helpers for async services.

Provides offset pagination over an arbitrary select and a not-found-raising
single-row fetch.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError

ModelType = TypeVar("ModelType")


@dataclass
class Page(Generic[ModelType]):
    """One page of results plus the counts needed to build navigation."""

    items: List[ModelType]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_item(self) -> Optional[int]:
        """1-based position of the first item on this page, None when empty."""
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_item(self) -> Optional[int]:
        if not self.items:
            return None
        return self.first_item + len(self.items) - 1


async def paginate(db: AsyncSession, stmt: Select, *, page: int, per_page: int) -> Page:
    """
    Run ``stmt`` for a single page.

    Args:
        db: Async database session
        stmt: Select statement, already filtered and ordered
        page: 1-based page number
        per_page: Page size

    Returns:
        Page with the rows of the requested page and the total row count
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    offset = (page - 1) * per_page
    result = await db.execute(stmt.offset(offset).limit(per_page))
    items = list(result.scalars().unique().all())

    return Page(items=items, total=total, page=page, per_page=per_page)


async def get_one_or_404(db: AsyncSession, stmt: Select, detail: str = "Resource not found"):
    """Execute a single-row select, raising NotFoundError when it returns nothing."""
    result = await db.execute(stmt)
    obj = result.scalar_one_or_none()
    if obj is None:
        raise NotFoundError(detail)
    return obj
