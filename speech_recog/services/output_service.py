from typing import List, Tuple

from speech_recog.models.schemas import OutputMode, RecognitionResult


def _detailed_fields(result: RecognitionResult) -> List[Tuple[str, object]]:
    fields: List[Tuple[str, object]] = []
    if result.status is not None:
        fields.append(("status", result.status))
    if result.id is not None:
        fields.append(("id", result.id))
    fields.extend(("utterance", utterance) for utterance in result.utterances)
    if result.confidence is not None:
        fields.append(("confidence", result.confidence))
    return fields


def format_result(result: RecognitionResult, mode: OutputMode) -> bytes:
    """Render one result as UTF-8; raw mode returns the body byte for byte."""
    if mode is OutputMode.RAW:
        return result.raw_body
    if mode is OutputMode.COMPACT:
        text = "".join(f"{utterance}\n" for utterance in result.utterances)
    else:
        text = "".join(f"{key:<10} : {value}\n" for key, value in _detailed_fields(result))
    return text.encode("utf-8")
