"""Registration, login and session endpoints."""

from fastapi import APIRouter, Depends, Response, status

from src.storefront.api.http.deps import get_user_service, require_user_id
from src.storefront.api.http.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserOut,
)
from src.storefront.core.services import UserService
from src.storefront.core.services.session import clear_session_cookie, set_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    response: Response,
    payload: RegisterRequest | None = None,
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Create an account and start a session for it."""
    payload = payload or RegisterRequest()
    user, token = user_service.register(payload.name, payload.email, payload.password)
    set_session_cookie(response, token)
    return AuthResponse(
        message="User registered successfully",
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    payload: LoginRequest | None = None,
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    payload = payload or LoginRequest()
    user, token = user_service.login(payload.email, payload.password)
    set_session_cookie(response, token)
    return AuthResponse(message="Login successful", user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(
    user_id: str = Depends(require_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserOut:
    """Return the user bound to the session cookie."""
    return UserOut.model_validate(user_service.get_user(user_id))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")
