"""Users API endpoints.

CRUD over the users resource plus restore of soft-deleted users. Every
endpoint except registration requires a bearer token and a capability; all
responses use the ``{success, data, message, errors?}`` envelope.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import RequireCapability, authorize, get_current_user
from app.api.responses import api_response
from app.core.config import settings
from app.db.async_session import get_async_db
from app.models.permission import Capability
from app.models.user import User
from app.repositories.users import Lifecycle, UserCriteria
from app.schemas.base import ApiResponse, PaginationLinks, PaginationMeta
from app.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from app.services.base import Page
from app.services.user import UserService

router = APIRouter()


def build_links(request: Request, page: Page) -> PaginationLinks:
    def url_for_page(number: int) -> str:
        return str(request.url.include_query_params(page=number))

    return PaginationLinks(
        first=url_for_page(1),
        last=url_for_page(page.last_page),
        prev=url_for_page(page.page - 1) if page.page > 1 else None,
        next=url_for_page(page.page + 1) if page.page < page.last_page else None,
    )


@router.get("", response_model=ApiResponse[UserListResponse])
async def list_users(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, description="Defaults to DEFAULT_PAGE_SIZE"),
    search: Optional[str] = Query(None, max_length=255, description="Substring of name or email"),
    verified: Optional[bool] = Query(None, description="Filter on email verification"),
    lifecycle: Lifecycle = Query(Lifecycle.ACTIVE, alias="status"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(RequireCapability(Capability.VIEW)),
):
    """List users, newest first, with their profiles."""
    per_page = min(per_page or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    criteria = UserCriteria(search=search, verified=verified, lifecycle=lifecycle)

    result = await UserService.list_users(db, criteria, page=page, per_page=per_page)

    payload = UserListResponse(
        data=[UserResponse.from_user(user) for user in result.items],
        links=build_links(request, result),
        meta=PaginationMeta(
            current_page=result.page,
            from_=result.first_item,
            to=result.last_item,
            last_page=result.last_page,
            per_page=result.per_page,
            total=result.total,
        ),
    )
    return api_response(
        payload.model_dump(mode="json", by_alias=True, exclude_unset=True),
        "Users retrieved successfully",
    )


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_async_db),
    current_user: Optional[User] = Depends(
        RequireCapability(Capability.CREATE, public_setting="ALLOW_PUBLIC_REGISTRATION")
    ),
):
    """Register a new user. A verification email is sent in the background."""
    user = await UserService.create_user(db, user_data, background_tasks)
    return api_response(
        UserResponse.from_user(user).to_payload(),
        "User created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: int,
    include_deleted: bool = Query(False, description="Also find soft-deleted users"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(RequireCapability(Capability.VIEW)),
):
    """Get a user with profile and posts."""
    lifecycle = Lifecycle.ALL if include_deleted else Lifecycle.ACTIVE
    user = await UserService.get_user(db, user_id, lifecycle, relations=("profile", "posts"))
    return api_response(UserResponse.from_user(user).to_payload(), "User retrieved successfully")


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(RequireCapability(Capability.UPDATE)),
):
    """Partially update a user; omitted fields keep their values."""
    user = await UserService.get_user(db, user_id, relations=("profile",))
    user = await UserService.update_user(db, user, user_data)
    return api_response(UserResponse.from_user(user).to_payload(), "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(RequireCapability(Capability.DELETE)),
):
    """Soft delete a user. Deleting an already deleted user returns 404."""
    user = await UserService.get_user(db, user_id)
    await UserService.delete_user(db, user)
    return api_response(None, "User deleted successfully")


@router.post("/{user_id}/restore", response_model=ApiResponse[UserResponse])
async def restore_user(
    user_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    """Restore a soft-deleted user."""
    user = await UserService.get_user(db, user_id, Lifecycle.ALL)
    authorize(current_user, Capability.RESTORE)

    user = await UserService.restore_user(db, user)
    return api_response(UserResponse.from_user(user).to_payload(), "User restored successfully")
