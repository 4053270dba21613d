# session.py

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .conversation.messages import Message, Role
from .errors import AuthenticationError, ProviderFailure, TransportError
from .stream.provider import (
    CompletionOptions,
    CompletionProvider,
    FinishReason,
    ReasoningEffort,
    UpdateEvent,
    UsageStats,
)

DEFAULT_OPTIONS = CompletionOptions(
    temperature=1.0,
    max_output_tokens=16384,
    reasoning_effort=ReasoningEffort.HIGH,
)

HEALTH_CHECK_MESSAGES = (
    Message(Role.SYSTEM, "Health check: verify API key"),
    Message(Role.USER, "Ping. Don't respond."),
)
HEALTH_CHECK_OPTIONS = CompletionOptions(max_output_tokens=1)


@dataclass(frozen=True)
class StreamingTurnResult:
    """Outcome of one streamed turn."""
    text: str = ""
    finish_reason: Optional[FinishReason] = None
    finish_timestamp: Optional[str] = None
    usage: Optional[UsageStats] = None


@dataclass
class TurnAccumulator:
    """Mutable state threaded through the event loop of a single turn."""
    fragments: List[str] = field(default_factory=list)
    finish_reason: Optional[FinishReason] = None
    finish_timestamp: Optional[str] = None
    usage: Optional[UsageStats] = None
    has_content: bool = False

    def record(self, event: UpdateEvent) -> None:
        """Capture the metadata carried by an event; last value wins."""
        if event.finish_reason is not None:
            self.finish_reason = event.finish_reason
        if event.usage is not None:
            self.usage = event.usage

    def freeze(self) -> StreamingTurnResult:
        return StreamingTurnResult(
            text="".join(self.fragments),
            finish_reason=self.finish_reason,
            finish_timestamp=self.finish_timestamp,
            usage=self.usage,
        )


class StreamingChatSession:
    """
    Runs one request/response turn against a completion provider.

    The session owns the consumption loop; the renderer owns every write to
    the terminal. Cancellation flows one way only: the session stops the
    renderer's spinner, never the other way round.
    """

    def __init__(self, provider: CompletionProvider, renderer, logger=None):
        self.provider = provider
        self.renderer = renderer
        self.logger = logger

    async def run(self, snapshot: Sequence[Message],
                  options: Optional[CompletionOptions] = None) -> StreamingTurnResult:
        """
        Stream a reply to `snapshot` and return the accumulated result.

        Raises:
            AuthenticationError: provider rejected the credentials.
            TransportError: any other provider failure; the renderer has
                already been finalized when this propagates.
        """
        options = options or DEFAULT_OPTIONS
        acc = TurnAccumulator()
        if self.logger:
            self.logger.debug(f"Starting turn with {len(snapshot)} messages")

        updates = self.provider.stream_completion(snapshot, options)
        self.renderer.begin()
        try:
            async for event in updates:
                await self._consume(event, acc)
        except ProviderFailure as e:
            if self.logger:
                self.logger.error(f"Provider failure mid-stream: {e}")
            raise
        except Exception as e:
            if self.logger:
                self.logger.error(f"Unexpected stream error: {e}")
            raise TransportError(str(e)) from e
        finally:
            await self.renderer.end()
            aclose = getattr(updates, "aclose", None)
            if aclose is not None:
                await aclose()

        result = acc.freeze()
        if self.logger:
            self.logger.debug(
                f"Turn finished: {len(result.text)} chars, reason={result.finish_reason}"
            )
        return result

    async def _consume(self, event: UpdateEvent, acc: TurnAccumulator) -> None:
        acc.record(event)
        for fragment in event.text_fragments:
            if not fragment:
                continue
            if not acc.has_content:
                acc.has_content = True
                await self.renderer.on_first_content()
            acc.fragments.append(fragment)
            self.renderer.on_text_delta(fragment)
        if event.timestamp is not None:
            acc.finish_timestamp = event.timestamp


async def validate_credentials(provider: CompletionProvider, timeout: float = 8.0,
                               logger=None) -> bool:
    """
    Pre-flight check: True once the provider yields any update.

    Zero updates, an authentication failure, any other error, or running out
    of time all count as a negative result.
    """
    updates = provider.stream_completion(HEALTH_CHECK_MESSAGES, HEALTH_CHECK_OPTIONS)
    try:
        async with asyncio.timeout(timeout):
            async for _ in updates:
                return True
        return False
    except AuthenticationError as e:
        if logger:
            logger.error(f"Health check rejected credentials: {e}")
        return False
    except TimeoutError:
        if logger:
            logger.error(f"Health check timed out after {timeout}s")
        return False
    except Exception as e:
        if logger:
            logger.error(f"Health check failed: {e}")
        return False
    finally:
        aclose = getattr(updates, "aclose", None)
        if aclose is not None:
            await aclose()
