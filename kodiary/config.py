"""
Client configuration for the correction API.

The five wire values (endpoint, model, temperature, max tokens, key) are
exposed here instead of being buried in the client. Defaults match the
production app; the embedding application can override any of them,
either directly or through environment variables:

    OPENAI_API_KEY        credential (also read from keyring / ~/.kodiary)
    KODIARY_ENDPOINT      chat completion URL
    KODIARY_MODEL         model identifier
    KODIARY_TEMPERATURE   sampling temperature
    KODIARY_MAX_TOKENS    completion token ceiling
    KODIARY_TIMEOUT       request timeout in seconds (unset = transport default)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

APP_NAME = "Kodiary"

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 1000

# Placeholder shipped in development builds; never a usable key
DEVELOPMENT_API_KEY = "TEMP_API_KEY_FOR_DEVELOPMENT"
API_KEY_PREFIX = "sk-"
MIN_API_KEY_LENGTH = 21


def has_valid_api_key(api_key: Optional[str]) -> bool:
    """Cheap shape check on a key; says nothing about whether the API accepts it."""
    return (
        isinstance(api_key, str)
        and api_key != DEVELOPMENT_API_KEY
        and api_key.startswith(API_KEY_PREFIX)
        and len(api_key) >= MIN_API_KEY_LENGTH
    )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for CorrectionClient."""
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_key: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def has_valid_api_key(self) -> bool:
        return has_valid_api_key(self.api_key)

    def with_api_key(self, api_key: Optional[str]) -> ClientConfig:
        return replace(self, api_key=api_key)

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> ClientConfig:
        """Build a config from environment variables and stored keys."""
        if api_key is None:
            from kodiary.keys import get_key

            api_key = get_key("openai")

        timeout = os.getenv("KODIARY_TIMEOUT")
        return cls(
            endpoint=os.getenv("KODIARY_ENDPOINT", DEFAULT_ENDPOINT),
            model=os.getenv("KODIARY_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("KODIARY_TEMPERATURE", DEFAULT_TEMPERATURE)),
            max_tokens=int(os.getenv("KODIARY_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
            api_key=api_key,
            timeout=float(timeout) if timeout else None,
        )

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging (key omitted)."""
        return {
            "endpoint": self.endpoint,
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "api_key_set": self.api_key is not None,
        }
