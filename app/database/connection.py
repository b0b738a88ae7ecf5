import asyncpg
import asyncio
from ..config import database
from ..logger import get_logger

logger = get_logger()

class DatabaseConnection:
    def __init__(self, table: str = database.TABLE):
        if not table.replace('_', '').isalnum():
            raise ValueError(f"Invalid table name: {table!r}")
        self.table = table
        self.pool = None
        self._connection_semaphore = None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self):
        """Create the connection pool and the leaderboard table"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            try:
                self.pool = await asyncpg.create_pool(
                    host=database.HOST,
                    port=database.PORT,
                    database=database.DATABASE,
                    user=database.USER,
                    password=database.PASSWORD,
                    min_size=1,
                    max_size=10,
                    command_timeout=10,
                    max_inactive_connection_lifetime=300.0,
                    setup=self._setup_connection
                )

                self._connection_semaphore = asyncio.Semaphore(10)

                async with self.pool.acquire() as conn:
                    await conn.execute(f'''
                        CREATE TABLE IF NOT EXISTS {self.table} (
                            position INTEGER PRIMARY KEY,
                            name TEXT NOT NULL,
                            score DOUBLE PRECISION NOT NULL,
                            payload JSONB NOT NULL
                        )
                    ''')

                self._initialized = True
                logger.info(f"Database connection initialized, using table {self.table}")
            except Exception as e:
                logger.error(f"Failed to initialize database connection: {e}")
                await self.close()
                raise

    async def _setup_connection(self, connection):
        """Setup connection with proper settings"""
        await connection.execute('SET statement_timeout = 30000')
        await connection.execute('SET idle_in_transaction_session_timeout = 30000')
        await connection.execute('SET lock_timeout = 10000')

    async def close(self):
        """Close database connections"""
        if self.pool:
            await self.pool.close()
            self.pool = None
        self._initialized = False

    async def acquire_connection_semaphore(self):
        """Acquire the connection semaphore"""
        return await self._connection_semaphore.acquire()

    def release_connection_semaphore(self):
        """Release the connection semaphore"""
        self._connection_semaphore.release()
