"""User directory API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from user_directory.api.dependencies import api_key_scheme, get_user_service
from user_directory.schemas.user import (
    MessageResponse,
    PasswordValidate,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from user_directory.services.user_service import UserService

router = APIRouter(prefix="/Users", tags=["users"], dependencies=[Depends(api_key_scheme)])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    request: Request,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Create a new user."""
    user = service.create_user(user_data)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.get("", response_model=list[UserResponse])
def get_users(
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get all users."""
    return service.list_users()


@router.patch("", response_model=UserResponse)
def update_user(
    user_data: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Update the user identified by email. Only supplied fields change."""
    return service.update_user(user_data)


@router.post("/validate", response_model=MessageResponse)
def validate_password(
    credentials: PasswordValidate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Check a user's password."""
    if not service.validate_password(credentials.email, credentials.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password.")
    return MessageResponse(message="Password is valid.")


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a specific user."""
    return service.get_user(user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user."""
    service.delete_user(user_id)
