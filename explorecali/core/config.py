from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    DATABASE_URL: str = "sqlite+aiosqlite:///./explorecali.db"
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    model_config = SettingsConfigDict(
        env_file=".env", validate_assignment=True, extra="allow"
    )


def get_settings():
    return Settings()


def safe_database_url(database_url: str) -> str:
    """Database URL with any user/password part removed, for logging."""
    scheme, sep, rest = database_url.partition("://")
    if not sep:
        return database_url
    return f"{scheme}://{rest.rsplit('@', 1)[-1]}"
