import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from typing import Optional


def _env_or_dotenv(key: str, dotenv_path: str = ".env") -> Optional[str]:
    """Get a value from env var (if non-empty) or from .env file.

    Pydantic-settings prefers env vars over .env files. If the env var
    is set to an empty string, pydantic treats it as the actual value and
    ignores the .env file. This helper makes empty env vars fall through
    to the .env file value.
    """
    val = os.environ.get(key)
    if val:
        return val
    try:
        from dotenv import dotenv_values
        vals = dotenv_values(dotenv_path)
        return vals.get(key) or None
    except ImportError:
        return None


# Apps whose request timings are reported to analytics (production + QA builds)
ANALYTICS_PACKAGES: list[str] = [
    "in.janis.delivery",
    "in.janis.picking",
    "in.janis.wms",
    "in.janis.delivery.qa",
    "in.janis.wms.qa",
    "in.janis.picking.qa",
]


class Settings(BaseSettings):
    # Janis environment, e.g. "janisdev" -> https://{service}.janisdev.in/api
    env: str = ""

    # Transport
    request_timeout: float = 60.0

    # Pagination defaults applied by Request.list()
    default_page: int = 1
    default_page_size: int = 60

    # Request measurement
    analytics_packages: list[str] = ANALYTICS_PACKAGES

    model_config = SettingsConfigDict(
        env_prefix="JANIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _resolve_empty_env_vars(self) -> "Settings":
        """Fix empty env vars overriding .env file values."""
        if not self.env:
            val = _env_or_dotenv("JANIS_ENV")
            if val:
                object.__setattr__(self, "env", val)
        return self


settings = Settings()
