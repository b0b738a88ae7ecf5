from ..config import leaderboard
from .store import LeaderboardStore

BACKENDS = ('memory', 'file', 'redis', 'postgres')


def create_store(backend: str = None) -> LeaderboardStore:
    """Build the store named by ``backend`` (defaults to LEADERBOARD_BACKEND)"""
    backend = (backend or leaderboard.backend).lower()
    if backend == 'memory':
        from .memory_store import MemoryStore
        return MemoryStore()
    if backend == 'file':
        from .file_store import FileStore
        return FileStore(leaderboard.file_path)
    if backend == 'redis':
        from .redis_store import RedisStore
        return RedisStore()
    if backend == 'postgres':
        from .postgres_store import PostgresStore
        return PostgresStore()
    raise ValueError(f"Unknown leaderboard backend {backend!r}, expected one of {', '.join(BACKENDS)}")
