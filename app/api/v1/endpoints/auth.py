"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import (
    clear_token,
    get_current_active_user,
    get_db,
    issue_token,
)
from app.config import Settings, get_settings
from app.core.exceptions import (
    AccountInactiveException,
    ConflictException,
    InvalidCredentialsException,
)
from app.core.security import create_access_token
from app.crud import crud_user
from app.models.user import AccountStatus, User
from app.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def signup(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Register a new user with the `user` role.

    Raises:
        HTTPException: 409 if username or email already registered
    """
    if crud_user.exists_with(db, username=user_in.username, email=user_in.email):
        raise ConflictException(detail="User already exists")

    db_user = crud_user.create_user(db, user_in=user_in)
    logger.info(f"New user registered: id={db_user.id}, username={db_user.username}")

    access_token = create_access_token({"sub": str(db_user.id), "email": db_user.email}, settings)
    return AuthResponse(
        user=UserResponse.model_validate(db_user),
        access_token=access_token,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Login with email or username and password.

    The token is returned in the body and also set as an httpOnly cookie.

    Raises:
        HTTPException: 401 if credentials invalid or account deleted,
            403 if the account is suspended
    """
    user = crud_user.authenticate(db, identifier=credentials.identifier, password=credentials.password)
    if not user:
        logger.warning(f"Failed login attempt for identifier={credentials.identifier}")
        raise InvalidCredentialsException()

    if user.status == AccountStatus.SUSPENDED:
        raise AccountInactiveException(detail="User account is suspended")

    access_token = issue_token(response, user, settings)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout user",
)
def logout(response: Response) -> dict:
    """Clear the auth cookie."""
    clear_token(response)
    return {"message": "Logged out successfully"}


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user info",
)
def get_me(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Get current authenticated user information."""
    return current_user


__all__ = ["router"]
