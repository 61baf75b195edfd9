from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LANGUAGE_PATTERN = r"^[a-z]{2}(-[a-zA-Z]{2,6})?$"


class OutputMode(str, Enum):
    DETAILED = "detailed"
    COMPACT = "compact"
    RAW = "raw"


class RecognitionConfig(BaseModel):
    """Per-invocation options, built once from the command line."""

    model_config = ConfigDict(frozen=True)

    language: str = Field(default="en-US", pattern=LANGUAGE_PATTERN)
    output: OutputMode = OutputMode.DETAILED
    sample_rate: int = Field(default=8000, gt=0)
    max_results: int = Field(default=1, gt=0)
    profanity_filter: bool = False
    quiet: bool = False

    @property
    def pfilter(self) -> int:
        """Wire value of the profanity filter flag."""
        return 2 if self.profanity_filter else 0


class Hypothesis(BaseModel):
    utterance: Optional[str] = None
    confidence: Optional[float] = None

    @field_validator("confidence")
    @classmethod
    def clamp_confidence(cls, value: Optional[float]) -> Optional[float]:
        # out-of-range values are clamped, not rejected
        if value is None:
            return None
        return min(max(value, 0.0), 1.0)


class RecognitionResponse(BaseModel):
    """Body returned by the recognition endpoint."""

    status: int
    id: str = ""
    hypotheses: List[Hypothesis] = Field(default_factory=list)


class RecognitionResult(BaseModel):
    status: Optional[int] = None
    id: Optional[str] = None
    utterances: List[str] = Field(default_factory=list)
    confidence: Optional[float] = None
    raw_body: bytes = b""

    @property
    def is_empty(self) -> bool:
        return self.status is None

    @property
    def failed(self) -> bool:
        return self.status is not None and self.status != 0

    @classmethod
    def from_response(cls, response: RecognitionResponse, raw_body: bytes = b"") -> "RecognitionResult":
        """Flatten the hypotheses; the top-ranked confidence wins."""
        confidences = [h.confidence for h in response.hypotheses if h.confidence is not None]
        return cls(
            status=response.status,
            id=response.id,
            utterances=[h.utterance for h in response.hypotheses if h.utterance is not None],
            confidence=confidences[0] if confidences else None,
            raw_body=raw_body,
        )
