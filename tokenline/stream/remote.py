# stream/remote.py

import json
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional, Sequence

import httpx

from ..conversation.messages import Message
from ..errors import AuthenticationError, TransportError
from .provider import CompletionOptions, FinishReason, UpdateEvent, UsageStats

DEFAULT_API_VERSION = "2024-12-01-preview"


def parse_usage(data: Optional[Dict[str, Any]]) -> Optional[UsageStats]:
    """Build UsageStats from an OpenAI-style usage object."""
    if not data:
        return None
    prompt_details = data.get("prompt_tokens_details") or {}
    completion_details = data.get("completion_tokens_details") or {}
    return UsageStats(
        total_tokens=data.get("total_tokens") or 0,
        input_tokens=data.get("prompt_tokens") or 0,
        output_tokens=data.get("completion_tokens") or 0,
        cached_input_tokens=prompt_details.get("cached_tokens") or 0,
        accepted_prediction_tokens=completion_details.get("accepted_prediction_tokens") or 0,
        rejected_prediction_tokens=completion_details.get("rejected_prediction_tokens") or 0,
        reasoning_tokens=completion_details.get("reasoning_tokens") or 0,
    )


def parse_chunk(data: Dict[str, Any]) -> UpdateEvent:
    """Map one decoded chat.completion.chunk onto an UpdateEvent."""
    fragments = []
    finish_reason = None
    for choice in data.get("choices") or []:
        content = (choice.get("delta") or {}).get("content")
        if content:
            fragments.append(content)
        if choice.get("finish_reason"):
            finish_reason = FinishReason.parse(choice["finish_reason"])

    created = data.get("created")
    timestamp = (
        datetime.fromtimestamp(created, tz=timezone.utc).isoformat()
        if created else None
    )
    return UpdateEvent(
        text_fragments=tuple(fragments),
        finish_reason=finish_reason,
        usage=parse_usage(data.get("usage")),
        timestamp=timestamp,
    )


def _error_message(response: httpx.Response) -> str:
    """Pull the provider's own message out of an error response."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(body.get("message"), str):
            return body["message"]
    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


def stream_error(chunk: Dict[str, Any]):
    """Return the ProviderFailure carried by an in-stream `error` chunk, if any."""
    error = chunk.get("error") if isinstance(chunk, dict) else None
    if not error:
        return None
    if not isinstance(error, dict):
        return TransportError(str(error))
    message = error.get("message") or str(error)
    code = str(error.get("code") or error.get("status") or "")
    if code in ("401", "403") or code.lower() in ("unauthorized", "forbidden", "invalid_api_key"):
        status = 403 if code.lower() in ("403", "forbidden") else 401
        return AuthenticationError(message, status)
    return TransportError(message)


class AzureOpenAIStream:
    """Streams chat completions from an Azure OpenAI deployment."""

    def __init__(self, endpoint: str, api_key: str, deployment_name: str,
                 api_version: str = DEFAULT_API_VERSION, logger=None,
                 client: Optional[httpx.AsyncClient] = None):
        self.logger = logger
        self.endpoint = endpoint.rstrip('/')
        self.deployment_name = deployment_name
        self.api_version = api_version
        self._api_key = api_key
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(30.0, read=300.0))
        if self.logger:
            self.logger.debug(f"Initialized Azure OpenAI stream: {self.endpoint} ({deployment_name})")

    @property
    def url(self) -> str:
        return f"{self.endpoint}/openai/deployments/{self.deployment_name}/chat/completions"

    def build_payload(self, messages: Sequence[Message], options: CompletionOptions) -> dict:
        payload = {
            'messages': [m.to_dict() for m in messages],
            'stream': True,
            'stream_options': {'include_usage': True},
        }
        if options.max_output_tokens is not None:
            payload['max_completion_tokens'] = options.max_output_tokens
        if options.temperature is not None:
            payload['temperature'] = options.temperature
        if options.reasoning_effort is not None:
            payload['reasoning_effort'] = options.reasoning_effort.value
        return payload

    async def stream_completion(self, messages: Sequence[Message],
                                options: CompletionOptions) -> AsyncGenerator[UpdateEvent, None]:
        """
        Issue one streaming request and yield an UpdateEvent per SSE chunk.

        Raises:
            AuthenticationError: on 401/403 responses or error chunks.
            TransportError: on any other HTTP, timeout or connection failure,
                or an error chunk sent partway through the stream.
        """
        if self.logger:
            self.logger.debug(f"Starting stream request with {len(messages)} messages")

        try:
            async with self.client.stream(
                'POST',
                self.url,
                params={'api-version': self.api_version},
                headers={'api-key': self._api_key},
                json=self.build_payload(messages, options),
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    message = _error_message(response)
                    if self.logger:
                        self.logger.error(f"HTTP {response.status_code}: {message}")
                    if response.status_code in (401, 403):
                        raise AuthenticationError(message, response.status_code)
                    raise TransportError(message, response.status_code)

                async for line in response.aiter_lines():
                    line = line.strip()
                    if not line.startswith('data:'):
                        continue
                    data = line[5:].strip()
                    if data == '[DONE]':
                        break
                    try:
                        chunk = json.loads(data)
                    except json.JSONDecodeError:
                        if self.logger:
                            self.logger.warning(f"Skipping malformed chunk: {data[:50]}...")
                        continue
                    error = stream_error(chunk)
                    if error is not None:
                        if self.logger:
                            self.logger.error(f"Error chunk mid-stream: {error}")
                        raise error
                    yield parse_chunk(chunk)

        except httpx.TimeoutException as e:
            if self.logger:
                self.logger.error(f"Stream timeout: {str(e)}")
            raise TransportError(f"Request timed out: {e}") from e

        except httpx.RequestError as e:
            if self.logger:
                self.logger.error(f"Connection error: {str(e)}")
            raise TransportError(f"Failed to connect: {e}") from e

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self.client:
            await self.client.aclose()
