"""Application configuration using pydantic-settings."""

import warnings
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file: check backend dir first, then project root
_BACKEND_DIR = Path(__file__).parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _BACKEND_DIR / ".env" if (_BACKEND_DIR / ".env").exists() else _PROJECT_ROOT / ".env"

DEFAULT_DATA_FILE = _PROJECT_ROOT / "fixtures" / "blood_test_data.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Descriptions are generated only when OPENAI_API_KEY is set; without it
    the description endpoint returns a fixed "disabled" message.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data set
    data_file: Path = DEFAULT_DATA_FILE
    general_ref_ranges_file: Path | None = None

    # OpenAI (parameter descriptions)
    openai_api_key: str = ""
    description_model: str = "gpt-4o-mini"

    # Application
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    debug: bool = False
    log_level: str = "INFO"

    def model_post_init(self, __context) -> None:
        """Warn about unconfigured credentials."""
        if not self.openai_api_key:
            warnings.warn(
                "OPENAI_API_KEY not configured! Parameter descriptions are disabled.",
                UserWarning,
                stacklevel=2,
            )


settings = Settings()
