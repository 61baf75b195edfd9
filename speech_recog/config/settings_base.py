from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://www.google.com/speech-api/v1/recognize"
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux) AppleWebKit/537.1 (KHTML, like Gecko)"


class AppSettings(BaseSettings):
    """Environment-driven settings shared by every invocation."""

    model_config = SettingsConfigDict(env_prefix="SPEECH_RECOG_")

    api_url: str = DEFAULT_API_URL
    timeout_sec: float = 20
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    flac_binary: str = "flac"
    tmp_dir: Optional[str] = None
    log_level: str = "INFO"
