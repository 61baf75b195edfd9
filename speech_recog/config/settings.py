from functools import lru_cache

from .settings_base import AppSettings


class Settings(AppSettings):
    """Settings resolved for the running process."""


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Read settings from the environment once and cache them."""
    return Settings()
