"""
Two-stage decoding of chat completion responses.

Stage 1 reads the API envelope and pulls out choices[0].message.content.
Stage 2 decodes that content string, which the model was told to emit as
pure JSON of the form {"corrections": [{original, corrected, explanation,
type}, ...]}.

The stages fail independently: a broken envelope is InvalidResponseError or
EmptyResponseError, while content wrapped in prose or code fences is
InvalidJSONError. Entries are mapped 1:1 and in order; nothing is
reordered, deduplicated or capped here.
"""

from __future__ import annotations

import json
import logging
from typing import Union

from kodiary.errors import EmptyResponseError, InvalidJSONError, InvalidResponseError
from kodiary.models import CorrectionItem

logger = logging.getLogger("kodiary.parser")

CORRECTION_FIELDS = ("original", "corrected", "explanation", "type")


def parse_envelope(body: Union[bytes, str]) -> str:
    """Extract the first choice's message content from a completion body."""
    try:
        envelope = json.loads(body)
    except (TypeError, ValueError, RecursionError) as e:
        raise InvalidResponseError(f"Completion envelope is not JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise InvalidResponseError("Completion envelope is not a JSON object")

    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        raise EmptyResponseError("Completion response has no choices")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise EmptyResponseError("Completion choice has no message content")

    return content


def _to_item(entry: object, position: int) -> CorrectionItem:
    if not isinstance(entry, dict):
        raise InvalidJSONError(f"Correction #{position} is not an object")

    values = {}
    for name in CORRECTION_FIELDS:
        value = entry.get(name)
        if not isinstance(value, str):
            raise InvalidJSONError(f"Correction #{position} is missing string field '{name}'")
        values[name] = value

    if not values["original"].strip():
        raise InvalidJSONError(f"Correction #{position} has an empty 'original'")

    return CorrectionItem(**values)


def parse_corrections(content: str) -> list[CorrectionItem]:
    """Decode the model's content string into correction items."""
    try:
        payload = json.loads(content.strip())
    except (ValueError, RecursionError) as e:
        logger.debug("Model content is not pure JSON: %.200r", content)
        raise InvalidJSONError(f"Model content is not valid JSON: {e}") from e

    if not isinstance(payload, dict) or "corrections" not in payload:
        raise InvalidJSONError("Model content has no 'corrections' key")

    corrections = payload["corrections"]
    if not isinstance(corrections, list):
        raise InvalidJSONError("'corrections' is not a list")

    return [_to_item(entry, i) for i, entry in enumerate(corrections)]


def parse_response(body: Union[bytes, str]) -> list[CorrectionItem]:
    """Decode a full completion body into correction items."""
    items = parse_corrections(parse_envelope(body))
    logger.debug("Parsed %d correction(s)", len(items))
    return items
