"""
Kodiary: AI correction for foreign-language diaries

Takes a short diary entry, asks a chat completion model to correct it in
one of twelve languages, and returns a typed list of corrections with
explanations in the writer's own language.

License: MIT
"""

__version__ = "0.1.0"

from kodiary.models import CorrectionItem, CorrectionData, CorrectionType
from kodiary.config import ClientConfig
from kodiary.client import CorrectionClient, CallState
from kodiary.errors import (
    CorrectionError,
    EmptyTextError,
    InvalidCredentialError,
    InvalidResponseError,
    HttpError,
    EmptyResponseError,
    InvalidJSONError,
)

__all__ = [
    "CorrectionItem",
    "CorrectionData",
    "CorrectionType",
    "ClientConfig",
    "CorrectionClient",
    "CallState",
    "CorrectionError",
    "EmptyTextError",
    "InvalidCredentialError",
    "InvalidResponseError",
    "HttpError",
    "EmptyResponseError",
    "InvalidJSONError",
]
