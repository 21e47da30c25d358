"""FastAPI dependencies: store, services and the bearer-token guard."""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tarefas.core.config import Settings, get_settings
from tarefas.models.user import UserRecord
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.server.services.task_service import TaskService
from tarefas.server.services.user_service import UserService

_bearer = HTTPBearer(auto_error=False)


def get_store(request: Request) -> KeyValueStoreProvider:
    """Store created by the app lifespan."""
    return request.app.state.store


def get_task_service(
    store: Annotated[KeyValueStoreProvider, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TaskService:
    return TaskService(store, force_reset_counter=settings.FORCE_RESET_COUNTER)


def get_user_service(
    store: Annotated[KeyValueStoreProvider, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    return UserService(store, iterations=settings.PASSWORD_HASH_ITERATIONS)


async def get_current_user(
    users: Annotated[UserService, Depends(get_user_service)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
) -> UserRecord:
    """Resolve ``Authorization: Bearer <token>``; raises AuthenticationError otherwise."""
    token = credentials.credentials if credentials else None
    return await users.authenticate(token)


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CurrentUser = Annotated[UserRecord, Depends(get_current_user)]
