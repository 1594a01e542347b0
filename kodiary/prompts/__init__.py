"""Localized prompt catalog and chat prompt builder."""

from kodiary.prompts.catalog import (
    SUPPORTED_LANGUAGES,
    MAX_CORRECTIONS,
    LanguagePack,
    get_language_pack,
    language_name,
)
from kodiary.prompts.builder import ChatMessage, build_messages, build_format_block

__all__ = [
    "SUPPORTED_LANGUAGES",
    "MAX_CORRECTIONS",
    "LanguagePack",
    "get_language_pack",
    "language_name",
    "ChatMessage",
    "build_messages",
    "build_format_block",
]
