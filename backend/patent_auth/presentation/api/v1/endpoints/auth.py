"""Login and self-service credential endpoints."""

from fastapi import APIRouter, Depends, status

from patent_auth.application.schemas import (
    LoginRequest,
    PasswordChange,
    TokenResponse,
    UserResponse,
)
from patent_auth.application.services import AuthService
from patent_auth.domain.entities import User
from patent_auth.domain.exceptions import AuthenticationError, EntityNotFoundError, ValidationError
from patent_auth.infrastructure.dependencies import get_auth_service, get_current_user
from patent_auth.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Log in through the USER or ADMIN entry point."""
    try:
        user = await service.authenticate(data.username, data.password, data.role)
    except AuthenticationError as e:
        raise to_http_exception(e)
    return TokenResponse(
        access_token=service.issue_token(user),
        user=UserResponse.model_validate(user, from_attributes=True),
    )


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    """The logged-in account with its live credit balance."""
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    data: PasswordChange,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Change the logged-in account's password."""
    try:
        await service.change_password(user.id, data.new_password, data.confirm_password)
    except (ValidationError, EntityNotFoundError) as e:
        raise to_http_exception(e)
