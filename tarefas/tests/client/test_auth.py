"""Tests for the client-side AuthService."""

import json

import httpx
import pytest

from tarefas.client.auth import AuthService

BASE = "http://api.test/api"


def _service(handler) -> AuthService:
    return AuthService(base_url=BASE, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestAuthService:
    """Test login, session and profile calls."""

    @pytest.mark.asyncio
    async def test_login_stores_session(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/login"
            assert json.loads(request.content) == {"username": "ana", "password": "x"}
            return httpx.Response(
                200, json={"ok": True, "token": "t0k", "user": {"id": 1, "username": "ana", "nomeCompleto": "ana souza"}}
            )

        service = _service(handler)
        await service.login({"username": "ana", "password": "x"})

        assert service.is_authenticated()
        assert service.token == "t0k"
        assert service.display_name == "ana souza"
        assert service.welcome_message == "Olá, Ana"
        assert service.auth_headers() == {"Authorization": "Bearer t0k"}

    @pytest.mark.asyncio
    async def test_display_name_falls_back_to_typed_username(self):
        service = _service(lambda request: httpx.Response(200, json={"token": "t"}))

        await service.login({"username": "bruno", "password": "x"})

        assert service.display_name == "bruno"
        assert service.welcome_message == "Olá, Bruno"

    @pytest.mark.asyncio
    async def test_login_failure_raises(self):
        service = _service(lambda request: httpx.Response(401, json={"ok": False, "message": "Credenciais inválidas."}))

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await service.login({"username": "ana", "password": "x"})

        assert exc_info.value.response.status_code == 401
        assert not service.is_authenticated()

    @pytest.mark.asyncio
    async def test_register_conflict(self):
        service = _service(lambda request: httpx.Response(409, json={"ok": False, "message": "Usuário já existe."}))

        with pytest.raises(httpx.HTTPStatusError):
            await service.register({"username": "ana", "password": "x"})

    @pytest.mark.asyncio
    async def test_update_user_sends_editable_fields_with_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/login":
                return httpx.Response(200, json={"token": "t", "user": {"id": 1, "username": "ana"}})
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"message": "ok", "user": {"id": 1, "username": "ana", "nomeCompleto": "Ana Lima"}}
            )

        service = _service(handler)
        await service.login({"username": "ana", "password": "x"})
        await service.update_user(1, {"nomeCompleto": "Ana Lima", "cpf": "123", "id": 1})

        assert seen["auth"] == "Bearer t"
        assert seen["body"] == {"nomeCompleto": "Ana Lima"}
        assert service.display_name == "Ana Lima"

    def test_logout_clears_session(self):
        service = AuthService(base_url=BASE, http_client=httpx.AsyncClient())
        service.token = "t"
        service.display_name = "Ana"

        service.logout()

        assert not service.is_authenticated()
        assert service.welcome_message == ""
