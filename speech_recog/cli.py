"""
Command-line entry point: submit audio files for recognition and print the results.
"""

import argparse
import sys
from typing import BinaryIO, List, Optional

from pydantic import ValidationError

from speech_recog.config.logging import configure_logging, get_logger
from speech_recog.config.settings import get_settings
from speech_recog.models.schemas import RecognitionConfig
from speech_recog.services.errors import RecognitionError, RecognitionStatusError
from speech_recog.services.output_service import format_result
from speech_recog.services.recognition_service import RecognitionService

logger = get_logger("cli")

HELP_TEXT = """Speech recognition using a remote speech API.

Usage: {prog} [options] [file(s)]

Supported options:
 -l <lang>      specify the language to use (default 'en-US')
 -o <type>      specify the type of output formatting
    detailed    print detailed info like confidence and return status (default)
    compact     print only the recognized utterance
    raw         raw JSON output
 -r <rate>      specify the audio sample rate in Hz (default 8000)
 -n <number>    specify the maximum number of results (default 1)
 -f             filter out profanities
 -q             don't print any error messages or warnings
 -h             this help message

"""

# Options checked against RecognitionConfig; a bad value keeps the default.
_INVALID_OPTION_MESSAGES = {
    "language": "Invalid language setting. Using default.",
    "output": "Invalid output formatting setting. Using default.",
    "sample_rate": "Invalid sample rate setting. Using default.",
    "max_results": "Invalid number of results setting. Using default.",
}


class UsageArgumentParser(argparse.ArgumentParser):
    """Parser that shows the usage text and exits with status 1 on any error."""

    def format_help(self) -> str:
        return HELP_TEXT.format(prog=self.prog)

    def error(self, message: str):
        sys.stderr.write(f"{self.prog}: {message}\n\n")
        self.print_help(sys.stderr)
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(prog="speech-recog", add_help=False)
    parser.add_argument("-l", dest="language")
    parser.add_argument("-o", dest="output")
    parser.add_argument("-r", dest="sample_rate")
    parser.add_argument("-n", dest="max_results")
    parser.add_argument("-f", dest="profanity_filter", action="store_true")
    parser.add_argument("-q", dest="quiet", action="store_true")
    parser.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("files", nargs="*")
    return parser


def build_config(args: argparse.Namespace) -> RecognitionConfig:
    values = {"profanity_filter": args.profanity_filter, "quiet": args.quiet}
    for field, message in _INVALID_OPTION_MESSAGES.items():
        raw = getattr(args, field)
        if raw is None:
            continue
        try:
            RecognitionConfig(**{field: raw})
        except ValidationError:
            logger.warning("%s (got %r)", message, raw)
            continue
        values[field] = raw
    return RecognitionConfig(**values)


def process_files(service: RecognitionService, files: List[str], out: Optional[BinaryIO] = None) -> int:
    """Recognize each file in order and return the number of failures."""
    out = out or sys.stdout.buffer
    errors = 0
    for path in files:
        try:
            result = service.recognize_file(path)
            out.write(format_result(result, service.config.output))
            out.flush()
            if result.failed:
                raise RecognitionStatusError(result.status)
        except RecognitionError as exc:
            logger.error("%s: %s", path, exc)
            errors += 1
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help or not args.files:
        parser.print_help()
        return 1

    settings = get_settings()
    configure_logging(settings.log_level, quiet=args.quiet)
    config = build_config(args)
    logger.debug("Using %s", config)

    with RecognitionService(config, settings) as service:
        errors = process_files(service, args.files)

    if errors:
        logger.info("%d of %d file(s) failed", errors, len(args.files))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
