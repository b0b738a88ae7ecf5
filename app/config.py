from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os

class DatabaseConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='POSTGRES_')

    HOST: str = os.getenv('POSTGRES_HOST', 'localhost')
    PORT: int = int(os.getenv('POSTGRES_PORT', 5432))
    DATABASE: str = os.getenv('POSTGRES_DB', 'leaderboard')
    USER: str = os.getenv('POSTGRES_USER', 'postgres')
    PASSWORD: str = os.getenv('POSTGRES_PASSWORD', 'postgres')
    TABLE: str = os.getenv('POSTGRES_TABLE', 'leaderboard_entries')

database = DatabaseConfig()

class RedisConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='REDIS_')

    HOST: str = os.getenv('REDIS_HOST', 'localhost')
    PORT: int = int(os.getenv('REDIS_PORT', 6379))
    DB: int = int(os.getenv('REDIS_DB', 0))
    KEY: str = os.getenv('REDIS_KEY', 'leaderboard:top')

redis_config = RedisConfig()

class LeaderboardConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LEADERBOARD_')

    backend: str = os.getenv('LEADERBOARD_BACKEND', 'memory')
    file_path: str = os.getenv('LEADERBOARD_FILE', 'data/leaderboard.json')
    capacity: int = int(os.getenv('LEADERBOARD_CAPACITY', 10))
    policy: str = os.getenv('LEADERBOARD_POLICY', 'append')
    cors_origins: List[str] = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', '*').split(',')
        if origin.strip()
    ]
    max_retries: int = 3
    retry_delay: float = 1.0

leaderboard = LeaderboardConfig()

class ServerConfig(BaseSettings):
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', 3000))
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'info')

server = ServerConfig()
