import asyncio

import orjson
import pytest
import redis

from app.database import StoreError, create_store
from app.database.file_store import FileStore
from app.database.memory_store import MemoryStore
from app.database.postgres_store import PostgresStore
from app.database.redis_store import RedisStore
from tests.helpers import make_entry


class FakeRedis:
    """In-process stand-in for the handful of redis.asyncio calls the store makes"""

    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail

    async def ping(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return True

    async def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.data[key] = value
        return True


def test_memory_store_overwrites():
    async def scenario():
        store = MemoryStore()
        assert await store.load() == []
        await store.save([make_entry("A", 1), make_entry("B", 2)])
        await store.save([make_entry("C", 3)])
        return await store.load()

    loaded = asyncio.run(scenario())
    assert [e.name for e in loaded] == ["C"]


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "board.json"
    entries = [make_entry("A", 10, time_used=5, allFlipped=True), make_entry("B", 3)]

    async def scenario():
        store = FileStore(path)
        await store.initialize()
        assert await store.load() == []
        await store.save(entries)
        return await store.load()

    loaded = asyncio.run(scenario())
    assert loaded == entries
    assert orjson.loads(path.read_bytes())[0] == {
        "name": "A", "score": 10, "timeUsed": 5, "allFlipped": True, "date": "2024-01-01",
    }
    assert not (tmp_path / "nested" / "board.json.tmp").exists()


def test_file_store_save_replaces_contents(tmp_path):
    path = tmp_path / "board.json"

    async def scenario():
        store = FileStore(path)
        await store.save([make_entry(f"p{i}", i) for i in range(5)])
        await store.save([make_entry("only", 1)])
        return await store.load()

    assert [e.name for e in asyncio.run(scenario())] == ["only"]


def test_file_store_empty_file_loads_empty(tmp_path):
    path = tmp_path / "board.json"
    path.write_bytes(b"")
    assert asyncio.run(FileStore(path).load()) == []


@pytest.mark.parametrize("content", [b"{not json", b'{"name": "A"}', b'[{"name": "A", "score": "x"}]'])
def test_file_store_corrupt_data_raises(tmp_path, content):
    path = tmp_path / "board.json"
    path.write_bytes(content)
    with pytest.raises(StoreError):
        asyncio.run(FileStore(path).load())


def test_redis_store_round_trip():
    client = FakeRedis()
    entries = [make_entry("A", 10), make_entry("B", 3, time_used=12)]

    async def scenario():
        store = RedisStore(client=client, key="board")
        await store.initialize()
        assert await store.load() == []
        await store.save(entries)
        loaded = await store.load()
        await store.close()
        return loaded

    assert asyncio.run(scenario()) == entries
    assert orjson.loads(client.data["board"])[1]["timeUsed"] == 12


def test_redis_store_wraps_connection_errors():
    store = RedisStore(client=FakeRedis(fail=True), key="board")
    with pytest.raises(StoreError):
        asyncio.run(store.initialize())
    with pytest.raises(StoreError):
        asyncio.run(store.save([make_entry("A", 1)]))


def test_create_store_selects_backend():
    assert isinstance(create_store("memory"), MemoryStore)
    assert isinstance(create_store("file"), FileStore)
    assert isinstance(create_store("REDIS"), RedisStore)
    assert isinstance(create_store("postgres"), PostgresStore)
    with pytest.raises(ValueError):
        create_store("sqlite")
