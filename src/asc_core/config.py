"""Settings loaded from environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

REQUEST_TIMEOUT_DEFAULT = 30.0

KEY_ID_ENV = "APP_STORE_CONNECT_KEY_ID"
ISSUER_ID_ENV = "APP_STORE_CONNECT_ISSUER_ID"
P8_PATH_ENV = "APP_STORE_CONNECT_P8_PATH"


class Settings(BaseSettings):
    """App Store Connect API key settings.

    Credential fields default to empty so that settings can always be built;
    presence is checked when credentials are loaded.
    """

    model_config = SettingsConfigDict(env_prefix="APP_STORE_CONNECT_")

    key_id: str = ""
    issuer_id: str = ""
    p8_path: str = ""
    request_timeout: float = REQUEST_TIMEOUT_DEFAULT


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
