"""User endpoints."""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import (
    clear_token,
    get_current_active_user,
    get_db,
    issue_token,
    require_role,
)
from app.config import Settings, get_settings
from app.core.exceptions import ConflictException, NotFoundException
from app.core.security import verify_password
from app.crud import crud_user
from app.models.user import User, UserRole
from app.schemas.user import (
    AccountDelete,
    UserDetailsResponse,
    UserDetailsUpdate,
    UserProfileResponse,
    UserResponse,
    UserStatusUpdate,
    UserUpdate,
    UserUpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "",
    response_model=List[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="List all users",
)
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> List[User]:
    """Get list of all users, including suspended and deleted ones (admin only)."""
    return crud_user.get_multi(db, skip=skip, limit=limit)


@router.get(
    "/me",
    response_model=UserProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
)
def get_profile(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Get current user with profile details."""
    return current_user


@router.patch(
    "/me",
    response_model=UserUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update email, username or password",
)
def update_me(
    user_update: UserUpdate,
    response: Response,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserUpdateResponse:
    """
    Update email, username or password of the current user.

    Any of these changes requires `current_password`. A fresh token is
    issued afterwards so the session stays valid.

    Raises:
        HTTPException: 400 if current password missing, 401 if wrong,
            409 if email or username already in use
    """
    if not user_update.changes_credentials:
        return UserUpdateResponse(user=UserResponse.model_validate(current_user))

    if not user_update.current_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is required to make these changes",
        )
    if not verify_password(user_update.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    email = user_update.email if user_update.email != current_user.email else None
    username = user_update.username if user_update.username != current_user.username else None

    if email and crud_user.get_by_email(db, email):
        raise ConflictException(detail="Email already in use")
    if username and crud_user.get_by_username(db, username):
        raise ConflictException(detail="Username already taken")

    updated_user = crud_user.update_account(
        db,
        db_obj=current_user,
        email=email,
        username=username,
        new_password=user_update.new_password,
    )
    access_token = issue_token(response, updated_user, settings)
    logger.info(f"User {updated_user.id} updated account credentials")

    return UserUpdateResponse(
        user=UserResponse.model_validate(updated_user),
        access_token=access_token,
    )


@router.patch(
    "/me/details",
    response_model=UserDetailsResponse,
    status_code=status.HTTP_200_OK,
    summary="Create or update profile details",
)
def update_details(
    details_in: UserDetailsUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Create the profile details row on first call, update it afterwards."""
    return crud_user.upsert_details(db, db_obj=current_user, details_in=details_in)


@router.delete(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Delete own account",
)
def delete_me(
    body: AccountDelete,
    response: Response,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    """
    Soft delete the current account after confirming the password.

    The row stays in the database with `status=deleted`; all of the
    user's content becomes invisible.
    """
    if not verify_password(body.password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
        )

    crud_user.soft_delete(db, db_obj=current_user)
    clear_token(response)
    logger.info(f"User {current_user.id} deleted their account")
    return {"message": "Account deleted successfully"}


@router.patch(
    "/{user_id}/status",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Change account status",
)
def update_user_status(
    user_id: UUID,
    status_in: UserStatusUpdate,
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> User:
    """Suspend, reactivate or delete another account (admin only)."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot change their own status",
        )

    db_user = crud_user.get(db, user_id)
    if not db_user:
        raise NotFoundException(detail="User not found")

    updated = crud_user.set_status(db, db_obj=db_user, status=status_in.status)
    logger.info(f"Admin {current_user.id} set status of user {user_id} to {status_in.status.value}")
    return updated
