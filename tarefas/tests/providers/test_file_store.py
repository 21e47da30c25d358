"""Tests for the JSON file store."""

import json

import pytest

from tarefas.core.errors import ProviderError
from tarefas.providers.file.provider import FileStoreProvider, FileStoreSettings


@pytest.fixture
def file_store(tmp_path):
    return FileStoreProvider(name="test-file", settings=FileStoreSettings(data_dir=str(tmp_path / "data")))


class TestFileStoreProvider:
    """Test FileStoreProvider on a temporary directory."""

    @pytest.mark.asyncio
    async def test_initialize_creates_directory(self, file_store):
        await file_store.initialize()

        assert file_store.root.is_dir()
        assert await file_store.check_connection()

    def test_path_for_maps_colons(self, file_store):
        path = file_store.path_for("tasks:counter")

        assert path.name == "tasks__counter.json"
        assert file_store.path_for("../etc/passwd").parent == file_store.root

    @pytest.mark.asyncio
    async def test_set_writes_json_file(self, file_store):
        await file_store.initialize()
        await file_store.set("tasks", [{"id": 1, "titulo": "Ação"}])

        path = file_store.path_for("tasks")
        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 1, "titulo": "Ação"}]
        assert not path.with_suffix(".json.tmp").exists()
        assert await file_store.get("tasks") == [{"id": 1, "titulo": "Ação"}]

    @pytest.mark.asyncio
    async def test_missing_and_invalid_files_read_as_none(self, file_store):
        await file_store.initialize()

        assert await file_store.get("tasks") is None

        file_store.path_for("tasks").write_text("{not json", encoding="utf-8")
        assert await file_store.get("tasks") is None

    @pytest.mark.asyncio
    async def test_delete(self, file_store):
        await file_store.initialize()
        await file_store.set("users", [])

        assert await file_store.exists("users")
        assert await file_store.delete("users")
        assert not await file_store.exists("users")
        assert not await file_store.delete("users")

    @pytest.mark.asyncio
    async def test_incr_persists(self, file_store):
        await file_store.initialize()

        assert await file_store.incr("tasks:counter") == 1
        assert await file_store.incr("tasks:counter") == 2
        assert await file_store.get("tasks:counter") == 2

    @pytest.mark.asyncio
    async def test_unserializable_value_raises_provider_error(self, file_store):
        await file_store.initialize()

        with pytest.raises(ProviderError):
            await file_store.set("tasks", {"bad": object()})
