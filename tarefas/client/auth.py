"""Client-side authentication service.

Keeps the session (token, user, display name) in memory for the lifetime of
the service, the way a browser app keeps it in local storage.
"""

import logging
from typing import Any, Optional

import httpx

from tarefas.core.config import get_settings
from tarefas.models.user import EDITABLE_USER_FIELDS

logger = logging.getLogger(__name__)


class AuthService:
    """Login, registration and profile calls against the backend."""

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[httpx.AsyncClient] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)
        self.token: Optional[str] = None
        self.user: Optional[dict[str, Any]] = None
        self.display_name: str = ""

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def auth_headers(self) -> dict[str, str]:
        """``Authorization`` header for the current session, if any."""
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def login(self, credentials: dict[str, Any]) -> dict[str, Any]:
        """POST /login and keep the returned session.

        Raises:
            httpx.HTTPStatusError: On 400/401 from the backend
        """
        response = await self._http.post(f"{self.base_url}/login", json=credentials)
        response.raise_for_status()
        body = response.json()

        self.token = body.get("token")
        self.user = body.get("user") or None
        typed = str(credentials.get("username") or credentials.get("user") or "")
        user = self.user or {}
        self.display_name = user.get("nomeCompleto") or user.get("username") or typed
        logger.info("Logged in as '%s'", self.display_name)
        return body

    async def register(self, user: dict[str, Any]) -> dict[str, Any]:
        """POST /register. A 409 surfaces as ``httpx.HTTPStatusError``."""
        response = await self._http.post(f"{self.base_url}/register", json=user)
        response.raise_for_status()
        return response.json()

    async def update_user(self, user_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        """PUT /users/{id} with only the editable profile fields."""
        body = {k: v for k, v in payload.items() if k in EDITABLE_USER_FIELDS}
        response = await self._http.put(
            f"{self.base_url}/users/{user_id}", json=body, headers=self.auth_headers()
        )
        response.raise_for_status()
        result = response.json()

        updated = result.get("user")
        if updated and self.user and updated.get("id") == self.user.get("id"):
            self.user = updated
            self.display_name = updated.get("nomeCompleto") or updated.get("username") or self.display_name
        return result

    def logout(self) -> None:
        self.token = None
        self.user = None
        self.display_name = ""

    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def welcome_message(self) -> str:
        """``"Olá, <First>"`` from the first word of the stored name."""
        parts = self.display_name.split()
        if not parts:
            return ""
        first = parts[0]
        return f"Olá, {first[0].upper()}{first[1:].lower()}"
