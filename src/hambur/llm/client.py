"""HTTP transport for streaming chat requests.

Hides the details of talking to an OpenAI-compatible endpoint:
- Provider and credential resolution at request time
- Request headers and body format
- Classification of failed responses and connection errors

A failed request never reaches the stream decoder; it surfaces as a
``ChatTransportError`` whose message is ready to show the user.
"""

import os
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..registry import ProviderDescriptor, lookup_provider_for_model
from .errors import ChatTransportError, MissingCredentialError, UnknownModelError
from .models import ChatMessage, ChatRequest


class ChatClient:
    """Sends chat turns and exposes the streaming response body.

    Supports async context manager protocol for proper resource cleanup:
        async with ChatClient() as client:
            async with client.stream_chat(model_id, messages) as chunks:
                async for chunk in chunks:
                    ...
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize the client.

        Args:
            http_client: Preconfigured httpx client (one without timeouts is created by default)
            environ: Where credentials are read from (default: os.environ)
        """
        self._http = http_client or httpx.AsyncClient(timeout=None)
        self._environ = environ if environ is not None else os.environ
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def resolve(self, model_id: str) -> tuple[ProviderDescriptor, str]:
        """Find the provider for a model and read its API key.

        The environment is read on every call so a key exported mid-session
        is picked up by the next turn.

        Raises:
            UnknownModelError: No provider serves the model
            MissingCredentialError: The provider's key variable is unset or empty
        """
        provider = lookup_provider_for_model(model_id)
        if provider is None:
            raise UnknownModelError(model_id)

        api_key = self._environ.get(provider.api_key_env)
        if not api_key:
            raise MissingCredentialError(provider.api_key_env)

        return provider, api_key

    @staticmethod
    def build_request(model_id: str, messages: Sequence[ChatMessage]) -> ChatRequest:
        """Build the JSON body for a streaming request."""
        return ChatRequest(model=model_id, messages=list(messages), stream=True)

    @asynccontextmanager
    async def stream_chat(
        self,
        model_id: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        """Open a streaming chat request.

        Args:
            model_id: Model to ask
            messages: Full conversation history, including the new user message

        Yields:
            Async iterator over raw response body chunks

        Raises:
            ConfigurationError: Unknown model or missing credential
            ChatTransportError: Connection failure or non-success status
        """
        provider, api_key = self.resolve(model_id)
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        body = self.build_request(model_id, messages).model_dump(mode="json")

        try:
            async with self._http.stream(
                "POST", provider.api_base, headers=headers, json=body
            ) as response:
                if not response.is_success:
                    raw = (await response.aread()).decode("utf-8", errors="replace")
                    raise ChatTransportError.from_status(
                        response.status_code,
                        response.reason_phrase,
                        raw,
                        api_key_env=provider.api_key_env,
                    )
                self._debug("debug", "Client", f"{provider.name} responded {response.status_code}")
                yield self._iter_body(response)
        except httpx.HTTPError as e:
            raise ChatTransportError.from_network(e) from e

    async def _iter_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise ChatTransportError.from_network(e) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "ChatClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
