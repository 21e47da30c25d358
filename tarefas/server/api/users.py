"""User profile endpoints."""

from fastapi import APIRouter

from tarefas.server.dependencies import CurrentUser, UserServiceDep
from tarefas.server.models import PublicUser, UserUpdateRequest, UserUpdateResponse

router = APIRouter()


@router.put("/{user_id}", response_model=UserUpdateResponse)
async def update_user(
    user_id: int, payload: UserUpdateRequest, users: UserServiceDep, _user: CurrentUser
) -> UserUpdateResponse:
    """Update editable profile fields."""
    user = await users.update_user(user_id, payload)
    return UserUpdateResponse(
        message="Usuário atualizado com sucesso.",
        user=PublicUser.model_validate(user.to_public()),
    )
