"""Configuration management for the matching engine."""

from typing import Optional
from pydantic import ValidationError
from pydantic_settings import BaseSettings


REQUIRED_VARS = [
    "SUPABASE_URL",
    "SUPABASE_KEY",
]


class Config(BaseSettings):
    """Application configuration from environment variables."""

    # Required
    supabase_url: str
    supabase_key: str

    # Optional
    openai_api_key: Optional[str] = None
    environment: str = "production"
    embedding_model: str = "text-embedding-ada-002"
    scoring_config_path: Optional[str] = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore"}


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with descriptive message listing ALL missing
    required variables (not just the first one).
    """
    try:
        return Config()  # type: ignore[call-arg]
    except ValidationError as exc:
        missing = [
            var for var in REQUIRED_VARS
            if any(
                err["type"] == "missing" and var.lower() in map(str, err["loc"])
                for err in exc.errors()
            )
        ]
        if missing:
            names = ", ".join(missing)
            raise ValueError(
                f"Missing required environment variable(s): {names}. "
                "Please set them in your .env file or environment."
            ) from exc
        raise


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()
