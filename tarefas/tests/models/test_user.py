"""Tests for the stored user record."""

from tarefas.models.user import UserRecord


class TestUserRecord:
    """Test UserRecord serialization."""

    def _user(self, **fields):
        values = {"id": 1, "username": "ana", "password_hash": "aa$bb"}
        values.update(fields)
        return UserRecord(**values)

    def test_storage_keeps_hash(self):
        data = self._user().to_storage()

        assert data["passwordHash"] == "aa$bb"

    def test_public_drops_hash(self):
        data = self._user(nome_completo="Ana Souza").to_public()

        assert "passwordHash" not in data
        assert data["nomeCompleto"] == "Ana Souza"

    def test_display_name(self):
        assert self._user().display_name == "ana"
        assert self._user(nome_completo="Ana Souza").display_name == "Ana Souza"

    def test_round_trip_from_storage(self):
        user = self._user(email="a@x.com")

        assert UserRecord.model_validate(user.to_storage()) == user
