"""
Tests for CorrectionClient.

Network I/O is replaced by a Mock session, so each test can count calls
and inspect the request that would have been sent.

Run with: pytest tests/test_client.py -v
"""

import asyncio
import json
import threading
from unittest.mock import Mock

import pytest
import requests

from kodiary.client import CallState, CompletionRequest, CorrectionClient
from kodiary.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEVELOPMENT_API_KEY,
    ClientConfig,
    has_valid_api_key,
)
from kodiary.errors import (
    EmptyTextError,
    HttpError,
    InvalidCredentialError,
    InvalidJSONError,
    InvalidResponseError,
)
from kodiary.prompts.catalog import get_language_pack

VALID_KEY = "sk-test-0123456789abcdefghij"


def completion_body(content):
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]}).encode("utf-8")


def make_session(status=200, content='{"corrections":[]}', error=None):
    session = Mock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
    else:
        response = Mock()
        response.status_code = status
        response.content = completion_body(content)
        session.post.return_value = response
    return session


@pytest.fixture
def config():
    return ClientConfig(api_key=VALID_KEY)


class TestCredentialCheck:
    """Tests for the API key shape check."""

    @pytest.mark.parametrize("key", [None, "", DEVELOPMENT_API_KEY, "pk-0123456789abcdefghijkl", "sk-short"])
    def test_invalid_keys(self, key):
        assert not has_valid_api_key(key)

    def test_valid_key(self):
        assert has_valid_api_key(VALID_KEY)

    def test_length_boundary(self):
        assert not has_valid_api_key("sk-" + "a" * 17)  # 20 chars
        assert has_valid_api_key("sk-" + "a" * 18)  # 21 chars


class TestAnalyze:
    """Tests for the synchronous entry point."""

    @pytest.mark.parametrize("text", ["", "   \n\t"])
    def test_empty_text_makes_no_call(self, config, text):
        session = make_session()
        client = CorrectionClient(config, session=session)

        with pytest.raises(EmptyTextError):
            client.analyze(text)

        assert session.post.call_count == 0
        assert client.state == CallState()

    @pytest.mark.parametrize("explanation", ["en", "ko", "ja", "xx"])
    def test_invalid_key_returns_fallback(self, explanation):
        session = make_session()
        client = CorrectionClient(ClientConfig(api_key=""), session=session)

        items = client.analyze("hello", "en", explanation)

        assert session.post.call_count == 0
        assert len(items) == 1
        assert items[0].type == get_language_pack(explanation).type_labels[0]
        assert items[0].original == get_language_pack(explanation).fallback.original

    def test_success(self, config):
        content = '{"corrections":[{"original":"I go","corrected":"I went","explanation":"past tense","type":"Grammar"}]}'
        session = make_session(content=content)
        client = CorrectionClient(config, session=session)

        items = client.analyze("Yesterday I go to school.", "en", "en")

        assert session.post.call_count == 1
        assert [(i.original, i.corrected, i.explanation, i.type) for i in items] == [
            ("I go", "I went", "past tense", "Grammar")
        ]

    def test_request_shape(self, config):
        session = make_session()
        client = CorrectionClient(config, session=session)

        client.analyze("어제 학교에 갔다", "ko", "en")

        args, kwargs = session.post.call_args
        assert args[0] == "https://api.openai.com/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == f"Bearer {VALID_KEY}"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] is None

        payload = kwargs["json"]
        assert payload["model"] == "gpt-4o-mini"
        assert payload["temperature"] == 0.3
        assert payload["max_tokens"] == 1000
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]
        assert '"어제 학교에 갔다"' in payload["messages"][1]["content"]

    def test_custom_config_values_sent(self):
        config = ClientConfig(
            endpoint="https://proxy.example.com/v1/chat",
            model="gpt-4o",
            temperature=0.1,
            max_tokens=500,
            api_key=VALID_KEY,
            timeout=15.0,
        )
        session = make_session()
        CorrectionClient(config, session=session).analyze("text")

        args, kwargs = session.post.call_args
        assert args[0] == "https://proxy.example.com/v1/chat"
        assert kwargs["timeout"] == 15.0
        assert kwargs["json"]["model"] == "gpt-4o"
        assert kwargs["json"]["max_tokens"] == 500

    def test_401_is_invalid_credential(self, config):
        client = CorrectionClient(config, session=make_session(status=401))

        with pytest.raises(InvalidCredentialError):
            client.analyze("hello")

    @pytest.mark.parametrize("status", [500, 429, 404, 503])
    def test_other_status_is_http_error(self, config, status):
        session = make_session(status=status)
        client = CorrectionClient(config, session=session)

        with pytest.raises(HttpError) as exc_info:
            client.analyze("hello")

        assert exc_info.value.status_code == status
        assert session.post.call_count == 1  # no retry

    def test_transport_failure(self, config):
        error = requests.exceptions.ConnectionError("connection refused")
        client = CorrectionClient(config, session=make_session(error=error))

        with pytest.raises(InvalidResponseError) as exc_info:
            client.analyze("hello")

        assert exc_info.value.__cause__ is error

    def test_bad_model_output_is_not_replaced_by_fallback(self, config):
        client = CorrectionClient(config, session=make_session(content="not json"))

        with pytest.raises(InvalidJSONError):
            client.analyze("hello")

    def test_empty_corrections(self, config):
        client = CorrectionClient(config, session=make_session(content='{"corrections":[]}'))
        assert client.analyze("Perfect sentence.") == []


class TestCallState:
    """Tests for observable in-flight / error state."""

    def test_transitions_on_success(self, config):
        states = []
        client = CorrectionClient(config, session=make_session(), on_state_change=states.append)

        client.analyze("hello")

        assert states == [CallState(in_flight=True), CallState(in_flight=False)]
        assert client.state == CallState()

    def test_in_flight_during_request(self, config):
        session = make_session()
        client = CorrectionClient(config, session=session)
        seen = []

        def post(*args, **kwargs):
            seen.append(client.state.in_flight)
            response = Mock()
            response.status_code = 200
            response.content = completion_body('{"corrections":[]}')
            return response

        session.post.side_effect = post
        client.analyze("hello")

        assert seen == [True]

    def test_error_recorded(self, config):
        states = []
        client = CorrectionClient(config, session=make_session(status=500), on_state_change=states.append)

        with pytest.raises(HttpError):
            client.analyze("hello")

        assert states[-1].in_flight is False
        assert "500" in states[-1].last_error
        assert client.state.last_error == states[-1].last_error

    def test_error_cleared_on_next_call(self, config):
        session = make_session(status=500)
        client = CorrectionClient(config, session=session)
        with pytest.raises(HttpError):
            client.analyze("hello")

        session.post.return_value.status_code = 200
        client.analyze("hello")

        assert client.state.last_error is None

    def test_fallback_does_not_touch_state(self):
        states = []
        client = CorrectionClient(ClientConfig(api_key=None), session=make_session(), on_state_change=states.append)

        client.analyze("hello")

        assert states == []

    def test_dispatch_receives_every_update(self, config):
        dispatched = []

        def dispatch(fn):
            dispatched.append(fn)
            fn()

        client = CorrectionClient(config, session=make_session(), dispatch=dispatch)
        client.analyze("hello")

        assert len(dispatched) == 2

    def test_error_localized_to_explanation_language(self, config):
        """The recorded message is what a learner reading Korean would see."""
        error = requests.exceptions.ConnectionError("connection refused")
        client = CorrectionClient(config, session=make_session(error=error))

        with pytest.raises(InvalidResponseError):
            client.analyze("안녕", "ko", "ko")

        assert client.state.last_error == "서버 응답 오류입니다."

    def test_unexpected_exception_clears_in_flight(self, config):
        states = []
        client = CorrectionClient(
            config,
            session=make_session(error=RuntimeError("boom")),
            on_state_change=states.append,
        )

        with pytest.raises(RuntimeError):
            client.analyze("hello")

        assert states[-1] == CallState(last_error="boom")
        assert client.state.in_flight is False

    def test_deeply_nested_body_is_invalid_response(self, config):
        session = make_session()
        session.post.return_value.content = b"[" * 100000 + b"]" * 100000
        client = CorrectionClient(config, session=session)

        with pytest.raises(InvalidResponseError):
            client.analyze("hello")

        assert client.state.in_flight is False
        assert client.state.last_error

    def test_instances_do_not_share_state(self, config):
        failing = CorrectionClient(config, session=make_session(status=500))
        healthy = CorrectionClient(config, session=make_session())

        with pytest.raises(HttpError):
            failing.analyze("hello")

        assert healthy.state.last_error is None


class TestAnalyzeAsync:
    """Tests for the coroutine entry point."""

    def test_success(self, config):
        content = '{"corrections":[{"original":"a","corrected":"b","explanation":"c","type":"Spelling"}]}'
        states = []
        client = CorrectionClient(config, session=make_session(content=content), on_state_change=states.append)

        items = asyncio.run(client.analyze_async("hello"))

        assert [i.corrected for i in items] == ["b"]
        assert states == [CallState(in_flight=True), CallState(in_flight=False)]

    def test_empty_text(self, config):
        session = make_session()
        client = CorrectionClient(config, session=session)

        with pytest.raises(EmptyTextError):
            asyncio.run(client.analyze_async(""))

        assert session.post.call_count == 0

    def test_failure(self, config):
        client = CorrectionClient(config, session=make_session(status=401))

        with pytest.raises(InvalidCredentialError):
            asyncio.run(client.analyze_async("hello"))

        assert client.state.in_flight is False
        assert client.state.last_error

    def test_cancel_clears_in_flight(self, config):
        """Cancelling the awaiting task still ends the in-flight state."""
        release = threading.Event()
        session = make_session()
        response = session.post.return_value

        def post(*args, **kwargs):
            release.wait(5)
            return response

        session.post.side_effect = post
        client = CorrectionClient(config, session=session)

        async def cancel_mid_request():
            task = asyncio.create_task(client.analyze_async("hello"))
            while not client.state.in_flight:
                await asyncio.sleep(0.01)
            task.cancel()
            try:
                with pytest.raises(asyncio.CancelledError):
                    await task
            finally:
                release.set()

        asyncio.run(cancel_mid_request())

        assert client.state == CallState()


class TestCompletionRequest:
    def test_payload(self, config):
        request = CorrectionClient(config, session=make_session()).build_request("hi", "en", "en")

        assert isinstance(request, CompletionRequest)
        payload = request.to_payload()
        assert set(payload) == {"model", "messages", "temperature", "max_tokens"}
        assert payload["messages"][0] == {"role": "system", "content": get_language_pack("en").persona}

    def test_defaults_follow_config_constants(self):
        request = CompletionRequest(model="m")
        assert request.temperature == DEFAULT_TEMPERATURE
        assert request.max_tokens == DEFAULT_MAX_TOKENS


class TestSessionLifecycle:
    def test_injected_session_not_closed(self, config):
        session = make_session()
        with CorrectionClient(config, session=session):
            pass
        session.close.assert_not_called()

    def test_owned_session_closed(self, config, monkeypatch):
        created = Mock(spec=requests.Session)
        monkeypatch.setattr(requests, "Session", lambda: created)

        client = CorrectionClient(config)
        assert client.session is created
        client.close()

        created.close.assert_called_once()
