"""Shared pytest fixtures and configuration."""

import io
import math
import struct
import wave
from typing import Any, Dict, List

import pytest
import requests

from speech_recog.config.settings import Settings, get_settings
from speech_recog.models.schemas import RecognitionConfig


SAMPLE_BODY = (
    b'{"status":0,"id":"e3a5c1f0b2d4-1","hypotheses":'
    b'[{"utterance":"hello world","confidence":0.9012},{"utterance":"hello word"}]}'
)
FAILED_BODY = b'{"status":5,"id":"","hypotheses":[]}'
UTF8_BODY = '{"status":0,"id":"g-1","hypotheses":[{"utterance":"καλημέρα κόσμε","confidence":0.87}]}'.encode("utf-8")


class FakeResponse:
    """Just enough of requests.Response for the recognition service."""

    def __init__(self, content: bytes = SAMPLE_BODY, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400


def text_plain_response(content: bytes, status_code: int = 200) -> requests.Response:
    """A real Response with no charset, so requests falls back to ISO-8859-1 for .text."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.headers["Content-Type"] = "text/plain"
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    return response


class FakeSession:
    """Records posts and replays queued responses or errors."""

    def __init__(self, *replies: Any):
        self.headers: Dict[str, str] = {}
        self.verify = True
        self.calls: List[Dict[str, Any]] = []
        self.replies = list(replies) or [FakeResponse()]
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path):
    return Settings(tmp_dir=str(tmp_path))


@pytest.fixture
def config():
    return RecognitionConfig()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def sample_body():
    return SAMPLE_BODY


@pytest.fixture
def sample_wav_bytes():
    """Generate a sample WAV file as bytes."""
    def make_tone_wav(freq=440.0, duration=0.2, rate=8000):
        frames = int(duration * rate)
        buf = io.BytesIO()
        with wave.open(buf, "wb") as w:
            w.setnchannels(1)
            w.setsampwidth(2)
            w.setframerate(rate)
            for n in range(frames):
                val = int(32767.0 * math.sin(2 * math.pi * freq * n / rate))
                w.writeframesraw(struct.pack("<h", val))
        return buf.getvalue()

    return make_tone_wav()


@pytest.fixture
def sample_wav_file(tmp_path, sample_wav_bytes):
    audio_file = tmp_path / "tone.wav"
    audio_file.write_bytes(sample_wav_bytes)
    return audio_file


@pytest.fixture
def sample_flac_file(tmp_path):
    audio_file = tmp_path / "speech.flac"
    audio_file.write_bytes(b"fLaC\x00\x00\x00\x22audio")
    return audio_file


@pytest.fixture
def sample_spx_file(tmp_path):
    audio_file = tmp_path / "speech.spx"
    audio_file.write_bytes(b"Speex   audio")
    return audio_file


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Provide mock environment variables."""
    def set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, str(value))
    return set_env


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
