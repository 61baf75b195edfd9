"""
Recognition Service - posts audio to the recognition endpoint and decodes the reply.
"""

from pathlib import Path
from typing import Dict, Optional, Union

import requests
from pydantic import ValidationError

from speech_recog.config.logging import get_logger
from speech_recog.config.settings_base import AppSettings
from speech_recog.models.schemas import RecognitionConfig, RecognitionResponse, RecognitionResult
from speech_recog.services.audio_service import classify_audio, prepared_audio, read_audio
from speech_recog.services.errors import RecognitionRequestError

logger = get_logger("service.recognition")


def build_params(config: RecognitionConfig) -> Dict[str, Union[str, int]]:
    """Query parameters for one request; requests percent-encodes them."""
    return {
        "xjerr": 1,
        "client": "chromium",
        "lang": config.language,
        "pfilter": config.pfilter,
        "maxresults": config.max_results,
    }


def content_type(subtype: str, sample_rate: int) -> str:
    return f"audio/{subtype}; rate={sample_rate}"


def _decode(candidate: bytes) -> Optional[RecognitionResponse]:
    try:
        return RecognitionResponse.model_validate_json(candidate)
    except (ValidationError, UnicodeDecodeError):
        return None


def parse_response(body: bytes) -> RecognitionResult:
    """
    Decode a UTF-8 response body into a result record.

    The whole body is tried first, then each non-blank line, and the first
    object matching the response schema wins. Anything else yields an empty
    result rather than an error.
    """
    candidates = [body] + [line for line in body.splitlines() if line.strip()]
    for candidate in candidates:
        response = _decode(candidate)
        if response is not None:
            return RecognitionResult.from_response(response, raw_body=body)

    logger.debug("Response body did not match the expected schema: %r", body[:200])
    return RecognitionResult(raw_body=body)


class RecognitionService:
    """Runs the per-file pipeline against one HTTP session."""

    def __init__(
        self,
        config: RecognitionConfig,
        settings: AppSettings,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = settings.user_agent
        self.session.verify = settings.verify_ssl

    def __enter__(self) -> "RecognitionService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def post_audio(self, audio: bytes, subtype: str, label: str = "") -> bytes:
        """
        Send one audio payload and return the response body, undecoded.

        Raises:
            RecognitionRequestError: On transport failure or a non-success status
        """
        headers = {"Content-Type": content_type(subtype, self.config.sample_rate)}
        try:
            response = self.session.post(
                self.settings.api_url,
                params=build_params(self.config),
                data=audio,
                headers=headers,
                timeout=self.settings.timeout_sec,
            )
        except requests.RequestException as exc:
            raise RecognitionRequestError(f"Failed to get data for file: {label} ({exc})") from exc

        if not response.ok:
            raise RecognitionRequestError(
                f"Failed to get data for file: {label} (HTTP {response.status_code})"
            )
        logger.debug("Received %d bytes for %s", len(response.content), label)
        return response.content

    def recognize_file(self, path: str) -> RecognitionResult:
        """Classify, transcode if needed, upload and decode one file."""
        subtype = classify_audio(path)
        with prepared_audio(path, binary=self.settings.flac_binary, tmp_dir=self.settings.tmp_dir) as upload_path:
            logger.info("Opening %s", Path(path).name)
            audio = read_audio(upload_path)
        body = self.post_audio(audio, subtype, label=path)
        return parse_response(body)
