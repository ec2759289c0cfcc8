import os
from typing import Any

DEFAULT_DATABASE_URL = "sqlite:///./games.db"


def database_url() -> str:
    database_url = os.environ.get("DATABASE_URL")
    if database_url is None:
        database_url = os.environ.get("TEST_DATABASE_URL")
    if database_url is None:
        database_url = DEFAULT_DATABASE_URL
    return database_url


def cors_origins() -> list[str]:
    origins = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def sentry_options() -> dict[str, Any] | None:
    """
    Sentry is only turned on when both the DSN and the environment are set.
    """
    sentry_dsn = os.environ.get("SENTRY_DSN")
    sentry_environment = os.environ.get("SENTRY_ENVIRONMENT")
    if sentry_dsn is None or sentry_environment is None:
        return None
    return {
        "dsn": sentry_dsn,
        "environment": sentry_environment,
        "traces_sample_rate": float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "1.0")),
    }
