from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import create_access_token, verify_password
from app.db.async_session import get_async_db
from app.repositories.users import by_email
from app.schemas.auth import Token
from app.utils.logger import auth_logger

router = APIRouter()


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_async_db),
) -> Token:
    """
    OAuth2 compatible token login.

    The ``username`` form field carries the user's email. Deleted users
    cannot log in.
    """
    result = await db.execute(by_email(form_data.username.strip().lower()))
    user = result.scalar_one_or_none()

    if user is None or user.is_deleted or not verify_password(form_data.password, user.password):
        auth_logger.warning("Rejected login attempt", "LOGIN", email=form_data.username)
        raise AuthenticationError("Incorrect email or password")

    auth_logger.info("Issued access token", "LOGIN", user_id=user.id)
    return Token(
        access_token=create_access_token(user.id),
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
