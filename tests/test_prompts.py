"""
Tests for the prompt catalog and prompt builder.

Tests cover:
- Every supported language has a complete, non-empty pack
- Unknown codes fall back to English without raising
- The 12x12 language name table
- Deterministic message construction

Run with: pytest tests/test_prompts.py -v
"""

import json

import pytest

from kodiary.prompts.catalog import (
    LANGUAGE_PACKS,
    MAX_CORRECTIONS,
    SUPPORTED_LANGUAGES,
    correction_instructions,
    error_message,
    fallback_message,
    field_labels,
    get_language_pack,
    language_name,
    normalize_language_code,
    or_separator,
    system_persona,
    type_labels,
)
from kodiary.prompts.builder import build_format_block, build_messages, build_user_prompt


class TestLanguagePacks:
    """Tests for catalog lookups."""

    def test_twelve_languages(self):
        assert len(SUPPORTED_LANGUAGES) == 12
        assert set(LANGUAGE_PACKS) == set(SUPPORTED_LANGUAGES)

    @pytest.mark.parametrize("code", SUPPORTED_LANGUAGES)
    def test_lookups_non_empty(self, code):
        """Every lookup returns non-empty text for supported languages."""
        assert system_persona(code)
        assert correction_instructions("en", code)
        assert or_separator(code).strip()
        labels = field_labels(code)
        assert labels.original and labels.corrected and labels.explanation
        taxonomy = type_labels(code)
        assert len(taxonomy) == 3 and all(taxonomy)
        fallback = fallback_message(code)
        assert fallback.original and fallback.corrected and fallback.explanation

    @pytest.mark.parametrize("code", SUPPORTED_LANGUAGES)
    def test_error_messages_complete(self, code):
        pack = get_language_pack(code)
        assert set(pack.error_messages) == {
            "empty_text", "invalid_credential", "invalid_response",
            "http_error", "empty_response", "invalid_json",
        }
        assert "{code}" in pack.error_messages["http_error"]

    @pytest.mark.parametrize("code", ["xx", "", None, "klingon"])
    def test_unknown_code_falls_back_to_english(self, code):
        english = LANGUAGE_PACKS["en"]
        assert get_language_pack(code) is english
        assert system_persona(code) == english.persona
        assert type_labels(code) == ("Grammar", "Spelling", "Expression")
        assert fallback_message(code) == english.fallback

    def test_region_codes_normalized(self):
        assert normalize_language_code("pt-BR") == "pt"
        assert normalize_language_code(" zh_Hans ") == "zh"
        assert get_language_pack("JA").code == "ja"

    def test_language_name_table_is_full(self):
        """All 144 (learning, explanation) pairs have a name."""
        for explanation in SUPPORTED_LANGUAGES:
            for learning in SUPPORTED_LANGUAGES:
                assert language_name(learning, explanation)

    def test_language_name_examples(self):
        assert language_name("ko", "en") == "Korean"
        assert language_name("en", "ko") == "영어"
        assert language_name("ja", "fr") == "japonais"
        assert language_name("de", "de") == "Deutsch"

    def test_language_name_unknown_learning_code(self):
        """Unrecognized learning languages are returned unchanged."""
        assert language_name("eo", "en") == "eo"
        assert language_name("eo", "xx") == "eo"

    def test_language_name_unknown_explanation_uses_english(self):
        assert language_name("ko", "xx") == "Korean"

    def test_instructions_name_language_and_cap(self):
        text = correction_instructions("ko", "en")
        assert "Korean" in text
        assert str(MAX_CORRECTIONS) in text

    def test_error_message_formatting(self):
        assert error_message("http_error", "en", code=500) == "Server error (code: 500)"
        assert error_message("empty_text", "ko") == "일기 내용을 입력해주세요."
        assert error_message("empty_text", "xx") == LANGUAGE_PACKS["en"].error_messages["empty_text"]

    def test_error_message_missing_placeholder(self):
        """A template slot with no matching keyword renders blank."""
        assert error_message("http_error", "en") == "Server error (code: )"
        assert error_message("http_error", "ko") == "서버 오류 (코드: )"


class TestPromptBuilder:
    """Tests for chat message construction."""

    def test_two_messages(self):
        messages = build_messages("오늘 학교에 갔다", "ko", "en")

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == system_persona("en")

    def test_user_prompt_contains_quoted_text(self):
        text = "Yesterday I go to the park."
        prompt = build_user_prompt(text, "en", "ja")

        assert f'"{text}"' in prompt
        assert "英語" in prompt

    def test_deterministic(self):
        """Identical inputs give byte-identical messages."""
        first = build_messages("Hola, me llamo Ana.", "es", "de")
        second = build_messages("Hola, me llamo Ana.", "es", "de")

        assert first == second
        assert first[1].content.encode("utf-8") == second[1].content.encode("utf-8")

    def test_format_block_is_valid_json_with_fixed_keys(self):
        block = json.loads(build_format_block("ko"))
        entry = block["corrections"][0]

        assert set(entry) == {"original", "corrected", "explanation", "type"}
        assert entry["original"] == "틀린 표현"
        assert entry["type"] == "문법 또는 맞춤법 또는 표현"

    def test_format_block_english(self):
        entry = json.loads(build_format_block("en"))["corrections"][0]
        assert entry["type"] == "Grammar or Spelling or Expression"

    def test_format_block_in_user_prompt(self):
        prompt = build_user_prompt("text", "ko", "fr")
        assert prompt.endswith(build_format_block("fr"))

    def test_unknown_languages_use_english(self):
        messages = build_messages("text", "xx", "yy")
        assert messages[0].content == LANGUAGE_PACKS["en"].persona
        assert "xx" in messages[1].content

    def test_message_to_dict(self):
        message = build_messages("text", "ko", "en")[0]
        assert message.to_dict() == {"role": "system", "content": message.content}
