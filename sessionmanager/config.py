"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    session_provider: str = "memory"
    session_cookie_name: str = "session_id"
    session_max_lifetime: int = 3600  # seconds
    session_missing_policy: str = "renew"  # "renew", "recreate" or "reject"
    session_secret: str = ""  # empty: unsigned cookies
    session_https_only: bool = False
    session_same_site: str = "lax"
    session_gc_enabled: bool = True

    model_config = {"env_prefix": "", "case_sensitive": False}


settings: Settings | None = None


def get_settings() -> Settings:
    global settings
    if settings is None:
        settings = Settings()
    return settings


def override_settings(s: Settings) -> None:
    """For testing: inject a Settings instance."""
    global settings
    settings = s
