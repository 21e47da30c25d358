"""Login and registration endpoints."""

from fastapi import APIRouter, status

from tarefas.server.dependencies import UserServiceDep
from tarefas.server.models import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, users: UserServiceDep) -> LoginResponse:
    """Exchange credentials for a bearer token."""
    token, user = await users.login(payload)
    return LoginResponse(token=token, user=PublicUser.model_validate(user.to_public()))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, users: UserServiceDep) -> RegisterResponse:
    """Create an account. 409 when the username already exists."""
    user = await users.register(payload)
    return RegisterResponse(
        message="Usuário cadastrado com sucesso.",
        user=PublicUser.model_validate(user.to_public()),
    )
