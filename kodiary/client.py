"""
Correction client: the single entry point for diary correction.

Usage:
    client = CorrectionClient(ClientConfig.from_env())
    items = client.analyze("Yesterday I go to school.", "en", "ko")

Flow of analyze():
1. Reject blank text (EmptyTextError), no I/O
2. Credential gate: a key that fails the shape check returns the
   localized fallback list, no I/O
3. Mark the call in flight, POST the typed CompletionRequest
4. Map the HTTP status (200 -> parse, 401 -> InvalidCredentialError,
   other -> HttpError, transport failure -> InvalidResponseError)
5. Clear the in-flight flag on every exit path and record the error
   message, localized to the explanation language, if any

Call state is owned by each client instance. Observers register a
callback; writes are routed through `dispatch` so that a UI can marshal
them onto its own thread. Exactly one network attempt is made per call.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import requests

from kodiary.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, ClientConfig
from kodiary.errors import (
    CorrectionError,
    EmptyTextError,
    HttpError,
    InvalidCredentialError,
    InvalidResponseError,
)
from kodiary.fallback import fallback_corrections
from kodiary.models import CorrectionItem
from kodiary.parser import parse_response
from kodiary.prompts.builder import ChatMessage, build_messages
from kodiary.prompts.catalog import (
    DEFAULT_CORRECTION_LANGUAGE,
    DEFAULT_EXPLANATION_LANGUAGE,
)

logger = logging.getLogger("kodiary.client")


@dataclass(frozen=True)
class CallState:
    """Observable state of a client's most recent call."""
    in_flight: bool = False
    last_error: Optional[str] = None


# Type aliases for observers
StateCallback = Callable[[CallState], None]
Dispatcher = Callable[[Callable[[], None]], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


@dataclass
class CompletionRequest:
    """Body of a chat completion request."""
    model: str
    messages: list[ChatMessage] = field(default_factory=list)
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    def to_payload(self) -> dict:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


class CorrectionClient:
    """Client for AI diary correction.

    Args:
        config: Wire configuration; read from the environment if omitted
        session: requests.Session to send through (created lazily otherwise)
        on_state_change: Called with a new CallState on every transition
        dispatch: Runs state updates on the caller's context; defaults to
            calling them immediately
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        on_state_change: Optional[StateCallback] = None,
        dispatch: Optional[Dispatcher] = None,
    ):
        self.config = config or ClientConfig.from_env()
        self._session = session
        self._owns_session = session is None
        self.on_state_change = on_state_change
        self.dispatch = dispatch or _call_now
        self._state = CallState()

    @property
    def state(self) -> CallState:
        return self._state

    @property
    def session(self) -> requests.Session:
        """Lazy initialization of the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> CorrectionClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _set_state(self, state: CallState) -> None:
        def apply():
            self._state = state
            if self.on_state_change:
                self.on_state_change(state)

        self.dispatch(apply)

    def build_request(
        self,
        text: str,
        correction_language: str = DEFAULT_CORRECTION_LANGUAGE,
        explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
    ) -> CompletionRequest:
        return CompletionRequest(
            model=self.config.model,
            messages=build_messages(text, correction_language, explanation_language),
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

    def _preflight(
        self,
        text: str,
        explanation_language: str,
    ) -> Optional[list[CorrectionItem]]:
        """Validate input; return fallback data if no usable key is set."""
        if not text or not text.strip():
            raise EmptyTextError()

        if not self.config.has_valid_api_key:
            logger.warning(
                "No valid API key configured; returning placeholder corrections. "
                "Set OPENAI_API_KEY or run: kodiary keys set"
            )
            return fallback_corrections(explanation_language)

        return None

    def _send(self, request: CompletionRequest) -> list[CorrectionItem]:
        """Perform the HTTP round trip and decode the result."""
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("Requesting corrections from %s (model=%s)", self.config.endpoint, request.model)
        try:
            response = self.session.post(
                self.config.endpoint,
                headers=headers,
                json=request.to_payload(),
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise InvalidResponseError(f"Request failed: {e}") from e

        status = response.status_code
        if status == 401:
            raise InvalidCredentialError()
        if status != 200:
            raise HttpError(status)

        return parse_response(response.content)

    def _failure_state(self, error: Exception, explanation_language: str) -> CallState:
        if isinstance(error, CorrectionError):
            logger.error("Correction request failed: %s", error)
            return CallState(last_error=error.localized_message(explanation_language))
        logger.exception("Unexpected failure during correction request")
        return CallState(last_error=str(error) or type(error).__name__)

    def analyze(
        self,
        text: str,
        correction_language: str = DEFAULT_CORRECTION_LANGUAGE,
        explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
    ) -> list[CorrectionItem]:
        """Request corrections for a diary entry.

        Args:
            text: Raw diary text
            correction_language: Language the diary is written in
            explanation_language: Language explanations should be written in

        Returns:
            Corrections in the order the model returned them

        Raises:
            CorrectionError: One of the subclasses in kodiary.errors
        """
        fallback = self._preflight(text, explanation_language)
        if fallback is not None:
            return fallback

        request = self.build_request(text, correction_language, explanation_language)
        self._set_state(CallState(in_flight=True))
        outcome = CallState()
        try:
            items = self._send(request)
        except Exception as e:
            outcome = self._failure_state(e, explanation_language)
            raise
        finally:
            self._set_state(outcome)

        logger.info("Received %d correction(s)", len(items))
        return items

    async def analyze_async(
        self,
        text: str,
        correction_language: str = DEFAULT_CORRECTION_LANGUAGE,
        explanation_language: str = DEFAULT_EXPLANATION_LANGUAGE,
    ) -> list[CorrectionItem]:
        """Coroutine form of analyze().

        The blocking request runs in a worker thread; state updates happen
        on the event loop's thread, before and after the await.
        """
        fallback = self._preflight(text, explanation_language)
        if fallback is not None:
            return fallback

        request = self.build_request(text, correction_language, explanation_language)
        self._set_state(CallState(in_flight=True))
        outcome = CallState()
        try:
            items = await asyncio.to_thread(self._send, request)
        except Exception as e:
            outcome = self._failure_state(e, explanation_language)
            raise
        finally:
            # also runs on cancellation, which leaves last_error unset
            self._set_state(outcome)

        logger.info("Received %d correction(s)", len(items))
        return items
