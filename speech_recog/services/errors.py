"""
Per-file errors. Each one stops processing of the current file only.
"""


class RecognitionError(Exception):
    """Base class for recoverable per-file failures."""


class UnsupportedAudioFormat(RecognitionError):
    pass


class TranscodeError(RecognitionError):
    pass


class AudioReadError(RecognitionError):
    pass


class RecognitionRequestError(RecognitionError):
    pass


class RecognitionStatusError(RecognitionError):
    """The endpoint answered but reported a non-zero status."""

    def __init__(self, status: int):
        super().__init__(f"Error reading audio file (status {status})")
        self.status = status
