"""
Core data models for Kodiary corrections.

CorrectionItem is the unit handed back to callers: one proposed edit to a
span of the user's diary text. Items are created only by the response
parser (real results) or the fallback provider (placeholder), never
mutated afterwards, and serialize to/from JSON so the embedding app can
store them.

Design Philosophy:
- Immutable: frozen dataclasses, new ids only at construction
- Faithful: `type` keeps the label exactly as the model wrote it
- Serializable: every model round-trips through to_dict()/from_dict()
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from kodiary.prompts.catalog import LANGUAGE_PACKS


class CorrectionType(Enum):
    """Language-independent correction category."""
    GRAMMAR = auto()
    SPELLING = auto()
    EXPRESSION = auto()
    UNKNOWN = auto()


# Taxonomy order in every language pack
_TAXONOMY_ORDER = (CorrectionType.GRAMMAR, CorrectionType.SPELLING, CorrectionType.EXPRESSION)


def _build_label_index() -> dict[str, CorrectionType]:
    index = {}
    for pack in LANGUAGE_PACKS.values():
        for category, label in zip(_TAXONOMY_ORDER, pack.type_labels):
            index[label.casefold()] = category
    return index


_LABEL_INDEX = _build_label_index()


def classify_type_label(label: Optional[str]) -> CorrectionType:
    """Map a localized taxonomy label (e.g. 'Grammar', '문법') to its category."""
    if not label:
        return CorrectionType.UNKNOWN
    return _LABEL_INDEX.get(label.strip().casefold(), CorrectionType.UNKNOWN)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class CorrectionItem:
    """A single proposed correction.

    Attributes:
        original: Span of the user's text the model flagged (not guaranteed
            to occur verbatim in the text)
        corrected: Proposed replacement
        explanation: Rationale in the requested explanation language
        type: Taxonomy label exactly as returned by the model
        id: Unique identifier assigned at construction
    """
    original: str
    corrected: str
    explanation: str
    type: str
    id: str = field(default_factory=_new_id)

    @property
    def category(self) -> CorrectionType:
        return classify_type_label(self.type)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "original": self.original,
            "corrected": self.corrected,
            "explanation": self.explanation,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, d: dict) -> CorrectionItem:
        return cls(
            id=d.get("id") or _new_id(),
            original=d["original"],
            corrected=d["corrected"],
            explanation=d["explanation"],
            type=d["type"],
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> CorrectionItem:
        return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True)
class CorrectionData:
    """A diary text together with the corrections made to it."""
    original_text: str
    corrections: tuple[CorrectionItem, ...] = ()

    def __post_init__(self):
        # Accept any iterable but store a tuple to stay hashable
        object.__setattr__(self, "corrections", tuple(self.corrections))

    def to_dict(self) -> dict:
        return {
            "original_text": self.original_text,
            "corrections": [c.to_dict() for c in self.corrections],
        }

    @classmethod
    def from_dict(cls, d: dict) -> CorrectionData:
        return cls(
            original_text=d["original_text"],
            corrections=tuple(CorrectionItem.from_dict(c) for c in d.get("corrections", [])),
        )

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> CorrectionData:
        return cls.from_dict(json.loads(json_str))


def corrections_to_json(items: Iterable[CorrectionItem], indent: Optional[int] = None) -> str:
    """Serialize a correction list for storage."""
    return json.dumps([c.to_dict() for c in items], indent=indent, ensure_ascii=False)


def corrections_from_json(json_str: str) -> list[CorrectionItem]:
    """Restore a correction list written by corrections_to_json()."""
    return [CorrectionItem.from_dict(d) for d in json.loads(json_str)]


def sort_by_occurrence(text: str, items: Iterable[CorrectionItem]) -> list[CorrectionItem]:
    """Order corrections by where their `original` first appears in text.

    Matching is case-insensitive. Items whose span cannot be found keep
    their relative order and go after the located ones.
    """
    haystack = text.casefold()
    located = []
    missing = []
    for index, item in enumerate(items):
        position = haystack.find(item.original.casefold()) if item.original else -1
        if position < 0:
            missing.append(item)
        else:
            located.append((position, index, item))
    located.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _, _, item in located] + missing
