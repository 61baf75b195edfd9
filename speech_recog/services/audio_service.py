"""
Audio Service - file classification and WAV to FLAC transcoding.
"""

import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from speech_recog.config.logging import get_logger
from speech_recog.services.errors import AudioReadError, TranscodeError, UnsupportedAudioFormat

logger = get_logger("service.audio")

CONTENT_SUBTYPES = {
    ".flac": "x-flac",
    ".spx": "x-speex-with-header-byte",
    # WAV is uploaded after transcoding
    ".wav": "x-flac",
}
TRANSCODED_EXTENSIONS = {".wav"}


def _extension(path: str) -> str:
    return Path(path).suffix.lower()


def classify_audio(path: str) -> str:
    """Return the content subtype the endpoint expects for ``path``."""
    ext = _extension(path)
    subtype = CONTENT_SUBTYPES.get(ext)
    if subtype is None:
        raise UnsupportedAudioFormat(f"Unsupported filetype: {ext or '(none)'}")
    return subtype


def needs_transcoding(path: str) -> bool:
    return _extension(path) in TRANSCODED_EXTENSIONS


def ensure_flac(binary: str = "flac") -> str:
    flac = shutil.which(binary)
    if flac is None:
        raise TranscodeError("flac encoder is missing. Aborting.")
    return flac


@contextmanager
def encode_flac(in_path: str, binary: str = "flac", tmp_dir: Optional[str] = None) -> Iterator[str]:
    """Encode ``in_path`` to a temporary FLAC file and yield its path.

    The temporary file is removed when the block exits, whether or not the
    encoder or the caller fails.
    """
    flac = ensure_flac(binary)
    try:
        out_fd, out_path = tempfile.mkstemp(prefix="recg_", suffix=".flac", dir=tmp_dir)
    except OSError as exc:
        raise TranscodeError(f"Cannot create temporary file for {in_path}: {exc}") from exc
    os.close(out_fd)
    try:
        cmd = [flac, "-8", "-f", "--totally-silent", "-o", out_path, in_path]
        logger.debug("Encoding %s to %s", in_path, out_path)
        try:
            subprocess.run(cmd, check=True)
        except (subprocess.CalledProcessError, OSError) as exc:
            raise TranscodeError(f"{flac} failed to encode file {in_path}: {exc}") from exc
        yield out_path
    finally:
        _cleanup_temp_file(out_path)


@contextmanager
def prepared_audio(path: str, binary: str = "flac", tmp_dir: Optional[str] = None) -> Iterator[str]:
    """Yield the path to upload for ``path``, transcoding WAV input."""
    if needs_transcoding(path):
        with encode_flac(path, binary=binary, tmp_dir=tmp_dir) as encoded:
            yield encoded
    else:
        yield path


def read_audio(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise AudioReadError(f"Cant read file {path}: {exc}") from exc


def _cleanup_temp_file(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", path, exc)
