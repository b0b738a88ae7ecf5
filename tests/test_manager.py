import asyncio

import pytest

from app.database import LeaderboardManager, PersistenceError, StoreError
from app.database.memory_store import MemoryStore
from app.ranking import InvalidInput, RankingPolicy
from tests.helpers import make_entry


class FlakyStore(MemoryStore):
    """Memory store whose writes can be switched off"""
    name = "flaky"

    def __init__(self, entries=None):
        super().__init__(entries)
        self.failing = False
        self.save_calls = 0
        self.load_calls = 0

    async def load(self):
        self.load_calls += 1
        return await super().load()

    async def save(self, entries):
        self.save_calls += 1
        if self.failing:
            raise StoreError("disk full")
        await super().save(entries)


def make_manager(store, policy=RankingPolicy.APPEND, capacity=10):
    manager = LeaderboardManager(store=store, policy=policy, capacity=capacity)
    manager.retry_delay = 0
    return manager


def test_singleton_instance():
    async def scenario():
        first = await LeaderboardManager.get_instance()
        second = await LeaderboardManager.get_instance()
        return first, second

    first, second = asyncio.run(scenario())
    assert first is second


def test_initialize_normalizes_loaded_entries():
    loaded = [make_entry("A", 1), make_entry("B", 7), make_entry("A", 5)]
    loaded += [make_entry(f"x{i}", 0) for i in range(10)]
    manager = make_manager(MemoryStore(loaded), policy=RankingPolicy.DEDUP)

    async def scenario():
        await manager.initialize()
        return await manager.top()

    top = asyncio.run(scenario())
    assert len(top) == 10
    assert [(e.name, e.score) for e in top[:2]] == [("B", 7), ("A", 5)]
    assert [e.name for e in top].count("A") == 1


def test_submit_persists_every_outcome():
    store = FlakyStore()
    manager = make_manager(store, policy=RankingPolicy.DEDUP)

    async def scenario():
        accepted = await manager.submit({"name": "A", "score": 10, "date": "2024-01-01"})
        rejected = await manager.submit({"name": "A", "score": 5, "date": "2024-01-02"})
        return accepted, rejected

    accepted, rejected = asyncio.run(scenario())
    assert accepted.accepted and accepted.rank == 1
    assert not rejected.accepted
    assert store.save_calls == 2
    assert [e.score for e in asyncio.run(store.load())] == [10]


def test_invalid_submission_leaves_state_untouched():
    store = FlakyStore([make_entry("A", 1)])
    manager = make_manager(store)

    async def scenario():
        await manager.initialize()
        with pytest.raises(InvalidInput):
            await manager.submit({"name": "", "score": 3})
        return await manager.top()

    assert [e.name for e in asyncio.run(scenario())] == ["A"]
    assert store.save_calls == 0


def test_failed_write_keeps_previous_ranking_and_reloads():
    store = FlakyStore([make_entry("A", 1)])
    manager = make_manager(store)

    async def scenario():
        await manager.initialize()
        store.failing = True
        with pytest.raises(PersistenceError):
            await manager.submit({"name": "B", "score": 9, "date": "2024-01-01"})
        before = [e.name for e in await manager.top()]
        store.failing = False
        # the store changed behind the manager's back while it was stale
        await MemoryStore.save(store, [make_entry("C", 4)])
        await manager.submit({"name": "D", "score": 2, "date": "2024-01-01"})
        return before, [e.name for e in await manager.top()]

    before, after = asyncio.run(scenario())
    assert before == ["A"]
    assert after == ["C", "D"]
    assert store.save_calls == manager.max_retries + 1
    assert store.load_calls == 2


def test_clear_persists_empty_ranking():
    store = FlakyStore([make_entry("A", 1), make_entry("B", 2)])
    manager = make_manager(store)

    async def scenario():
        await manager.clear()
        return await manager.top()

    assert asyncio.run(scenario()) == []
    assert asyncio.run(store.load()) == []


def test_concurrent_submissions_are_not_lost():
    store = FlakyStore()
    manager = make_manager(store, capacity=50)

    async def scenario():
        await manager.initialize()
        await asyncio.gather(*(
            manager.submit({"name": f"p{i}", "score": i, "date": "2024-01-01"})
            for i in range(20)
        ))
        return await store.load()

    stored = asyncio.run(scenario())
    assert sorted(e.score for e in stored) == list(range(20))


def test_close_drops_singleton():
    manager = make_manager(MemoryStore())

    async def scenario():
        await manager.initialize()
        await manager.close()

    asyncio.run(scenario())
    assert LeaderboardManager._instance is None


def test_concurrent_first_requests_initialize_once():
    class CountingStore(MemoryStore):
        def __init__(self):
            super().__init__()
            self.initialize_calls = 0

        async def initialize(self):
            self.initialize_calls += 1
            await asyncio.sleep(0)

    store = CountingStore()
    manager = make_manager(store)

    async def scenario():
        await asyncio.gather(
            manager.top(),
            manager.submit({"name": "a", "score": 1, "date": "2024-01-01"}),
            manager.top(),
        )

    asyncio.run(scenario())
    assert store.initialize_calls == 1
