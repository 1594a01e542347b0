"""
Chat prompt construction for diary correction.

Produces exactly two messages for the completion API:
1. system: the correcting-tutor persona in the explanation language
2. user: instructions naming the learning language, the quoted diary text,
   and a JSON format block the model must follow

The JSON keys are fixed (corrections/original/corrected/explanation/type)
so the parser can read any language; only the sample values are localized.
Output depends only on the inputs, which makes golden tests possible.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from kodiary.prompts.catalog import (
    DEFAULT_CORRECTION_LANGUAGE,
    DEFAULT_EXPLANATION_LANGUAGE,
    MAX_CORRECTIONS,
    correction_instructions,
    get_language_pack,
    system_persona,
)


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message sent to the completion API."""
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


def build_format_block(explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE) -> str:
    """Build the JSON example the model is asked to reproduce."""
    pack = get_language_pack(explanation_language)
    example = {
        "corrections": [
            {
                "original": pack.field_labels.original,
                "corrected": pack.field_labels.corrected,
                "explanation": pack.field_labels.explanation,
                "type": pack.or_separator.join(pack.type_labels),
            }
        ]
    }
    return json.dumps(example, ensure_ascii=False, indent=4)


def build_user_prompt(
    text: str,
    correction_language: str = DEFAULT_CORRECTION_LANGUAGE,
    explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
) -> str:
    pack = get_language_pack(explanation_language)
    parts = [
        correction_instructions(correction_language, explanation_language, MAX_CORRECTIONS),
        "",
        pack.text_label,
        f'"{text}"',
        "",
        pack.format_intro,
        build_format_block(explanation_language),
    ]
    return "\n".join(parts)


def build_messages(
    text: str,
    correction_language: str = DEFAULT_CORRECTION_LANGUAGE,
    explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
) -> list[ChatMessage]:
    """Build the [system, user] message pair for one correction request.

    Args:
        text: Raw diary text, inserted verbatim between double quotes
        correction_language: Code of the language the diary is written in
        explanation_language: Code of the language explanations should use

    Returns:
        Two ChatMessage objects, system first
    """
    return [
        ChatMessage(role="system", content=system_persona(explanation_language)),
        ChatMessage(
            role="user",
            content=build_user_prompt(text, correction_language, explanation_language),
        ),
    ]
