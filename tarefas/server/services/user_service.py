"""User registration, login and session tokens."""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import logging
import secrets
from typing import Any

from tarefas.core.errors import (
    AuthenticationError,
    ConflictError,
    ErrorContext,
    NotFoundError,
    ValidationError,
)
from tarefas.models.user import UserRecord
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.server.models import LoginRequest, RegisterRequest, UserUpdateRequest
from tarefas.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)

USERS_KEY = "users"
COUNTER_KEY = "users:counter"
SESSION_PREFIX = "session:"


def hash_password(password: str, iterations: int, salt: str | None = None) -> str:
    """Return ``salt$hash`` (both hex) using PBKDF2-SHA256.

    CPU-bound; async callers run it through ``asyncio.to_thread``.
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str, iterations: int) -> bool:
    salt, sep, _ = stored.partition("$")
    if not sep:
        return False
    try:
        candidate = hash_password(password, iterations, salt=salt)
    except ValueError:
        return False
    return hmac.compare_digest(candidate, stored)


def _auth_error(message: str, operation: str) -> AuthenticationError:
    return AuthenticationError(
        message,
        ErrorContext.create(
            component="user_service",
            operation=operation,
            error_type="AuthenticationError",
            error_location=operation,
        ),
    )


class UserService:
    """Service for user accounts and bearer sessions stored in a key-value store."""

    def __init__(self, store: KeyValueStoreProvider, iterations: int = 120_000):
        self._store = store
        self._iterations = iterations

    async def _load(self) -> list[UserRecord]:
        raw = await self._store.get(USERS_KEY)
        if not isinstance(raw, list):
            return []
        users: list[UserRecord] = []
        for item in raw:
            try:
                users.append(UserRecord.model_validate(item))
            except ValueError as e:
                logger.warning("Skipping malformed stored user: %s", e)
        return users

    async def _save(self, users: list[UserRecord]) -> None:
        await self._store.set(USERS_KEY, [u.to_storage() for u in users])

    @staticmethod
    def _find_by_username(users: list[UserRecord], username: str) -> UserRecord | None:
        wanted = username.casefold()
        return next((u for u in users if u.username.casefold() == wanted), None)

    async def _next_id(self, users: list[UserRecord]) -> int:
        if not await self._store.exists(COUNTER_KEY):
            await self._store.set(COUNTER_KEY, max((u.id for u in users), default=0))
        return await self._store.incr(COUNTER_KEY)

    async def register(self, payload: RegisterRequest) -> UserRecord:
        """Create a user account.

        Raises:
            ValidationError: If username or password is empty
            ConflictError: If the username is taken (case-insensitive)
        """
        username = payload.username.strip()
        password = payload.password.strip()
        if not username or not password:
            field = "username" if not username else "password"
            raise ValidationError.for_field(
                field, "Usuário e senha são obrigatórios.", component="user_service", operation="register"
            )

        users = await self._load()
        if self._find_by_username(users, username) is not None:
            raise ConflictError.for_resource("Usuário já existe.", "user", username, "register")

        user = UserRecord(
            id=await self._next_id(users),
            username=username,
            password_hash=await asyncio.to_thread(hash_password, password, self._iterations),
            nome_completo=payload.nome_completo.strip(),
            email=payload.email.strip(),
            cpf=payload.cpf.strip(),
            telefone=payload.telefone.strip(),
            created_at=utc_now_iso(),
        )
        users.append(user)
        await self._save(users)
        logger.info("Registered user id=%d", user.id)
        return user

    async def login(self, payload: LoginRequest) -> tuple[str, UserRecord]:
        """Check credentials and open a session.

        Returns:
            The bearer token and the user

        Raises:
            ValidationError: If username or password is missing
            AuthenticationError: If the credentials do not match
        """
        if not payload.username or not payload.password:
            raise ValidationError.for_field(
                "username", "Usuário e senha são obrigatórios.", component="user_service", operation="login"
            )

        user = self._find_by_username(await self._load(), payload.username.strip())
        if user is None or not await asyncio.to_thread(
            verify_password, payload.password, user.password_hash, self._iterations
        ):
            logger.info("Rejected login for '%s'", payload.username)
            raise _auth_error("Credenciais inválidas.", "login")

        token = secrets.token_urlsafe(32)
        await self._store.set(f"{SESSION_PREFIX}{token}", user.id)
        logger.info("User id=%d logged in", user.id)
        return token, user

    async def authenticate(self, token: str | None) -> UserRecord:
        """Resolve a bearer token to its user.

        Raises:
            AuthenticationError: If the token is missing, unknown or stale
        """
        if not token:
            raise _auth_error("Token de acesso ausente.", "authenticate")

        user_id = await self._store.get(f"{SESSION_PREFIX}{token}")
        if user_id is None:
            raise _auth_error("Sessão inválida ou expirada.", "authenticate")

        for user in await self._load():
            if user.id == user_id:
                return user
        raise _auth_error("Sessão inválida ou expirada.", "authenticate")

    async def logout(self, token: str) -> bool:
        return await self._store.delete(f"{SESSION_PREFIX}{token}")

    async def update_user(self, user_id: int, payload: UserUpdateRequest) -> UserRecord:
        """Apply profile changes.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new username belongs to someone else
        """
        users = await self._load()
        for idx, current in enumerate(users):
            if current.id == user_id:
                break
        else:
            raise NotFoundError.for_resource("Usuário não encontrado.", "user", user_id, "update")

        changes: dict[str, Any] = payload.model_dump(exclude_unset=True, exclude_none=True)
        updated = current.model_copy()

        username = (changes.get("username") or "").strip()
        if username and username != current.username:
            other = self._find_by_username(users, username)
            if other is not None and other.id != user_id:
                raise ConflictError.for_resource("Usuário já existe.", "user", username, "update")
            updated.username = username
        for field in ("nome_completo", "email", "telefone"):
            if field in changes:
                setattr(updated, field, changes[field].strip())
        if changes.get("password"):
            updated.password_hash = await asyncio.to_thread(hash_password, changes["password"], self._iterations)

        users[idx] = updated
        await self._save(users)
        logger.info("Updated user id=%d", user_id)
        return updated
