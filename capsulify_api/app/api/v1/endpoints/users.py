"""
User endpoints for API v1.

Registration, login and a protected profile route that echoes the
claims of the caller's session token.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from capsulify_api.app.api.deps import get_user_service
from capsulify_api.app.core.errors import AuthenticationError, NotFoundError
from capsulify_api.app.core.security import get_current_user
from capsulify_api.app.schemas.user import (
    ProfileResponse,
    RegisterResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
)
from capsulify_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/", response_model=RegisterResponse)
async def register_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> RegisterResponse:
    """Register a new user account.

    The password is stored hashed.  E-mail uniqueness is not checked.
    """
    result = await service.register(user.email, user.password)
    return RegisterResponse(message="New user account", result=result)


@router.post("/login", response_model=TokenResponse)
async def login_user(
    credentials: UserLogin,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Authenticate a user and return a session token valid for one hour."""
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")
    try:
        token = await service.authenticate(credentials.email, credentials.password)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return TokenResponse(accessToken=token)


@router.get("/profile", response_model=ProfileResponse)
async def read_profile(current_user: dict = Depends(get_current_user)) -> ProfileResponse:
    """Return the caller's token claims (requires a valid bearer token)."""
    return ProfileResponse(message="This is a protected route", user=current_user)
