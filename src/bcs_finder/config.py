"""Runtime configuration read from environment variables and ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

PLACEHOLDER_API_KEYS = frozenset({"", "your_api_key_here"})


class BCSSettings(BaseSettings):
    anthropic_api_key: str = ""
    bcs_remote_model: str = "claude-3-haiku-20240307"
    bcs_max_tokens: int = 1024
    bcs_request_timeout: float = 60.0

    bcs_classifier_model: str = "yolov8n-cls.pt"
    bcs_classifier_device: str = "cpu"

    # Images are downscaled so the long edge stays under this before edge detection.
    bcs_max_image_edge: int = 1024

    bcs_log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def has_api_key(self) -> bool:
        return self.anthropic_api_key.strip() not in PLACEHOLDER_API_KEYS


@lru_cache(maxsize=1)
def get_settings() -> BCSSettings:
    """Return cached settings instance."""

    return BCSSettings()
