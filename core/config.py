"""Predictor configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class PredictorConfig(BaseSettings):
    """Predictor configuration loaded from environment variables.

    Variables use the ``PREDICTOR_`` prefix, e.g. ``PREDICTOR_FUTURE_SESSIONS=12``.
    A ``.env`` file in the project root is read when present.
    """

    # Projection
    future_sessions: int = Field(
        default=10,
        ge=0,
        description="Assumed number of remaining classes added to conducted hours",
    )
    max_search_steps: int = Field(
        default=100_000,
        ge=1,
        description="Upper bound for the classes-needed search",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "PREDICTOR_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: PredictorConfig | None = None


def get_config() -> PredictorConfig:
    """Get the predictor configuration singleton.

    Returns:
        PredictorConfig: Predictor configuration instance
    """
    global _config
    if _config is None:
        _config = PredictorConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the env."""
    global _config
    _config = None
