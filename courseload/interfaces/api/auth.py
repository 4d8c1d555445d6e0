"""Auth API routes — register, login, me."""

from fastapi import APIRouter, Depends, status

from courseload.application.services.auth_service import authenticate_user, register_lecturer
from courseload.application.services.token_service import TokenService
from courseload.config import Settings
from courseload.domain.actor import Actor
from courseload.domain.repositories.user_repository import UserRepository
from courseload.domain.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserEnvelope, UserRead
from courseload.interfaces.api.deps import get_current_user
from courseload.interfaces.deps import get_app_settings, get_token_service, get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    user = register_lecturer(users, body, settings.INSTITUTION_EMAIL_DOMAIN)
    return AuthResponse(
        message="Registration successful.",
        token=tokens.issue(user.id),
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate_user(users, body.email, body.password)
    return AuthResponse(
        message="Login successful.",
        token=tokens.issue(user.id),
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserEnvelope)
def get_me(
    actor: Actor = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    return UserEnvelope(user=UserRead.model_validate(users.get_by_id(actor.id)))
