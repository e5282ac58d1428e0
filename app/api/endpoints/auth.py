"""Authentication endpoints for the admin area."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_current_active_user, get_db
from app.core.security import create_access_token
from app.crud import crud_user
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import TokenResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with email and password",
)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    OAuth2 compatible login; ``username`` carries the email address.

    Returns:
        TokenResponse: Bearer token and the logged-in user

    Raises:
        HTTPException: 401 if credentials are invalid or the account is inactive
    """
    user = crud_user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        logger.warning(f"[AUTH] Failed login for: {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is inactive",
        )

    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Get current user info",
)
async def get_me(
    current_user: User = Depends(get_current_active_user),
) -> ApiResponse[UserResponse]:
    """Get current authenticated user information."""
    return ApiResponse(data=UserResponse.model_validate(current_user))


__all__ = ["router"]
