"""Placeholder corrections returned when no usable API key is configured."""

from __future__ import annotations

from kodiary.models import CorrectionItem
from kodiary.prompts.catalog import DEFAULT_EXPLANATION_LANGUAGE, get_language_pack


def fallback_corrections(
    explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
) -> list[CorrectionItem]:
    """Return a single localized item explaining that no key is set.

    The item's type is the first taxonomy label of the language. Only the
    client's credential gate uses this; failed requests never do.
    """
    pack = get_language_pack(explanation_language)
    return [
        CorrectionItem(
            original=pack.fallback.original,
            corrected=pack.fallback.corrected,
            explanation=pack.fallback.explanation,
            type=pack.type_labels[0],
        )
    ]
