from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://localhost:5432/spark_stats"

    # Connection pool; max size should track the service concurrency limit
    # and stay under the connection limit of the PG server
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 90
    DB_POOL_RECYCLE_SECONDS: int = 60

    # HTTP server
    HOST: str = "127.0.0.1"
    PORT: int = 8080
    REQUEST_LOGGING: bool = True

    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # App
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
