"""Unit tests for the streaming HTTP client."""
import json

import httpx
import pytest

from hambur.llm import (
    ChatClient,
    ChatMessage,
    ChatTransportError,
    MissingCredentialError,
    Role,
    TransportErrorKind,
    UnknownModelError,
)
from hambur.registry import DEFAULT_MODEL_ID

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
BODY = b'data: {"choices":[{"delta":{"content":"hi"}}]}\n\ndata: [DONE]\n\n'


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response=None, error=None):
        self.requests = []
        self.response = response if response is not None else httpx.Response(200, content=BODY)
        self.error = error

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class FailingBody(httpx.AsyncByteStream):
    """Response body that breaks after its first chunk."""

    async def __aiter__(self):
        yield b'data: {"choices":[{"delta":{"content":"par"}}]}\n'
        raise httpx.ReadError("connection reset")


def make_client(handler, environ=None):
    env = {"OPENROUTER_API_KEY": "or-key", "OPENAI_API_KEY": "ds-key"} if environ is None else environ
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatClient(http_client=http, environ=env)


async def read_body(client, model_id=DEFAULT_MODEL_ID, messages=None):
    messages = messages or [ChatMessage(role=Role.USER, content="hello")]
    async with client.stream_chat(model_id, messages) as chunks:
        return b"".join([chunk async for chunk in chunks])


class TestRequest:
    """Tests for the outgoing request."""

    @pytest.mark.asyncio
    async def test_posts_to_provider_endpoint(self):
        """Test URL, method and headers."""
        handler = Recorder()
        async with make_client(handler) as client:
            await read_body(client)

        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == OPENROUTER_URL
        assert request.headers["authorization"] == "Bearer or-key"
        assert request.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_body_carries_model_history_and_stream_flag(self):
        """Test the JSON body shape."""
        handler = Recorder()
        messages = [
            ChatMessage(role=Role.USER, content="hi"),
            ChatMessage(role=Role.ASSISTANT, content="hello"),
            ChatMessage(role=Role.USER, content="again"),
        ]
        async with make_client(handler) as client:
            await read_body(client, messages=messages)

        assert json.loads(handler.requests[0].content) == {
            "model": DEFAULT_MODEL_ID,
            "messages": [
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "hello"},
                {"role": "user", "content": "again"},
            ],
            "stream": True,
        }

    @pytest.mark.asyncio
    async def test_uses_credential_of_model_provider(self):
        """Test that a deepseek model uses the deepseek key and endpoint."""
        handler = Recorder()
        async with make_client(handler) as client:
            await read_body(client, model_id="deepseek-r1-250120")

        request = handler.requests[0]
        assert request.url.host == "ark.cn-beijing.volces.com"
        assert request.headers["authorization"] == "Bearer ds-key"

    @pytest.mark.asyncio
    async def test_yields_raw_body(self):
        """Test that the body is passed through untouched."""
        async with make_client(Recorder()) as client:
            assert await read_body(client) == BODY


class TestConfigurationErrors:
    """Tests for failures detected before any request is sent."""

    @pytest.mark.asyncio
    async def test_unknown_model(self):
        """Test that a model no provider serves is rejected."""
        handler = Recorder()
        async with make_client(handler) as client:
            with pytest.raises(UnknownModelError, match="No provider found for model nope"):
                await read_body(client, model_id="nope")

        assert handler.requests == []

    @pytest.mark.parametrize("environ", [{}, {"OPENROUTER_API_KEY": ""}])
    @pytest.mark.asyncio
    async def test_missing_or_empty_credential(self, environ):
        """Test that an unset or empty key is reported by variable name."""
        handler = Recorder()
        async with make_client(handler, environ=environ) as client:
            with pytest.raises(MissingCredentialError) as exc_info:
                await read_body(client)

        assert exc_info.value.env_var == "OPENROUTER_API_KEY"
        assert "OPENROUTER_API_KEY" in str(exc_info.value)
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_credential_is_read_per_request(self):
        """Test that a key exported after startup is picked up."""
        environ = {}
        async with make_client(Recorder(), environ=environ) as client:
            with pytest.raises(MissingCredentialError):
                await read_body(client)

            environ["OPENROUTER_API_KEY"] = "late-key"
            assert await read_body(client) == BODY


class TestTransportErrors:
    """Tests for failed responses and connections."""

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        """Test that 401 points at the credential variable."""
        handler = Recorder(httpx.Response(401, text='{"error":"bad key"}'))
        async with make_client(handler) as client:
            with pytest.raises(ChatTransportError) as exc_info:
                await read_body(client)

        error = exc_info.value
        assert error.kind == TransportErrorKind.UNAUTHORIZED
        assert error.status_code == 401
        assert "OPENROUTER_API_KEY" in str(error)
        assert 'Raw response: {"error":"bad key"}' in str(error)

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        """Test that 429 is reported as a rate limit."""
        handler = Recorder(httpx.Response(429, text="slow down"))
        async with make_client(handler) as client:
            with pytest.raises(ChatTransportError) as exc_info:
                await read_body(client)

        assert exc_info.value.kind == TransportErrorKind.RATE_LIMITED
        assert "rate limit" in str(exc_info.value)
        assert "slow down" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_other_status_shows_reason(self):
        """Test that other statuses include code and reason phrase."""
        handler = Recorder(httpx.Response(500, text="boom"))
        async with make_client(handler) as client:
            with pytest.raises(ChatTransportError) as exc_info:
                await read_body(client)

        error = exc_info.value
        assert error.kind == TransportErrorKind.HTTP_ERROR
        assert "(500): Internal Server Error" in str(error)
        assert error.body == "boom"

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        """Test that connection errors become network errors."""
        handler = Recorder(error=httpx.ConnectError("connection refused"))
        async with make_client(handler) as client:
            with pytest.raises(ChatTransportError) as exc_info:
                await read_body(client)

        error = exc_info.value
        assert error.kind == TransportErrorKind.NETWORK
        assert "connection refused" in str(error)
        assert "Check your network connection" in str(error)

    @pytest.mark.asyncio
    async def test_failure_while_reading_body(self):
        """Test that a broken body surfaces as a network error after the first chunk."""
        received = []
        async with make_client(Recorder(httpx.Response(200, stream=FailingBody()))) as client:
            with pytest.raises(ChatTransportError) as exc_info:
                async with client.stream_chat(DEFAULT_MODEL_ID, []) as chunks:
                    async for chunk in chunks:
                        received.append(chunk)

        assert exc_info.value.kind == TransportErrorKind.NETWORK
        assert received and received[0].startswith(b"data: ")


class TestDebugCallback:
    """Tests for debug reporting."""

    @pytest.mark.asyncio
    async def test_reports_response_status(self):
        """Test that a successful response is traced."""
        messages = []
        async with make_client(Recorder()) as client:
            client.set_debug_callback(lambda *args: messages.append(args))
            await read_body(client)

        assert ("debug", "Client", "openrouter responded 200") in messages
