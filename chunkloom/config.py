"""Configuration loaded from the environment (and a .env file when present)."""

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

DEFAULT_EXTENSION_NAME = "chunkloom"
DEFAULT_SETTINGS_PATH = "settings.json"
DEFAULT_COLLECTION_PREFIX = "chunkloom_char_"
DEFAULT_OUTPUT_DIR = "outputs"


class WeightConfig(BaseModel):
    """Keyword weight scale used by the resolver.

    The scale feeds a downstream ranker whose semantics are not fixed here,
    so the constants are configuration rather than hard-coded invariants.
    """

    min_weight: int = Field(default=1, description="Lowest storable weight")
    max_weight: int = Field(default=200, description="Highest storable weight")
    custom_keyword_weight: int = Field(default=100, description="Weight of a user-added keyword with no override")
    default_weight: int = Field(default=20, description="Weight of an extracted keyword with no override")

    @model_validator(mode="after")
    def _check_scale(self) -> "WeightConfig":
        if self.min_weight < 1:
            raise ValueError("min_weight must be at least 1")
        if self.min_weight > self.max_weight:
            raise ValueError("min_weight must not exceed max_weight")
        for name in ("custom_keyword_weight", "default_weight"):
            value = getattr(self, name)
            if not self.min_weight <= value <= self.max_weight:
                raise ValueError(f"{name}={value} is outside [{self.min_weight}, {self.max_weight}]")
        return self

    def clamp(self, value: int) -> int:
        """Clamp a requested weight into [min_weight, max_weight]."""
        return max(self.min_weight, min(self.max_weight, int(value)))


class AppConfig(BaseModel):
    """Process-wide settings for the CLI and the settings store."""

    weights: WeightConfig = Field(default_factory=WeightConfig)
    extension_name: str = Field(default=DEFAULT_EXTENSION_NAME, description="Scope key in the settings store")
    settings_path: str = Field(default=DEFAULT_SETTINGS_PATH, description="JSON file backing the settings store")
    collection_prefix: str = Field(default=DEFAULT_COLLECTION_PREFIX, description="Prefix for vector collection ids")
    keyword_preview_limit: int = Field(default=5, description="Keywords shown in a collapsed chunk preview")
    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, description="Where the directory vectorizer writes documents")
    log_level: str = Field(default="INFO", description="loguru level for console output")


DEFAULT_WEIGHTS = WeightConfig()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Build the application config from environment variables.

    Args:
        env_file: Optional path to a .env file. If None, python-dotenv searches upwards from the cwd.

    Returns:
        AppConfig populated from CHUNKLOOM_* variables, defaults elsewhere.

    Raises:
        ValueError: If a numeric variable is malformed or the weight scale is inconsistent.
    """
    load_dotenv(env_file)

    weights = WeightConfig(
        min_weight=_env_int("CHUNKLOOM_MIN_WEIGHT", 1),
        max_weight=_env_int("CHUNKLOOM_MAX_WEIGHT", 200),
        custom_keyword_weight=_env_int("CHUNKLOOM_CUSTOM_WEIGHT", 100),
        default_weight=_env_int("CHUNKLOOM_DEFAULT_WEIGHT", 20),
    )
    return AppConfig(
        weights=weights,
        extension_name=os.getenv("CHUNKLOOM_EXTENSION", DEFAULT_EXTENSION_NAME),
        settings_path=os.getenv("CHUNKLOOM_SETTINGS_PATH", DEFAULT_SETTINGS_PATH),
        collection_prefix=os.getenv("CHUNKLOOM_COLLECTION_PREFIX", DEFAULT_COLLECTION_PREFIX),
        keyword_preview_limit=_env_int("CHUNKLOOM_PREVIEW_LIMIT", 5),
        output_dir=os.getenv("CHUNKLOOM_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
        log_level=os.getenv("CHUNKLOOM_LOG_LEVEL", "INFO"),
    )
