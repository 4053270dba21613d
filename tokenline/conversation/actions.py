# conversation/actions.py

from enum import Enum
from typing import Optional

from ..errors import ProviderFailure
from ..session import StreamingChatSession, StreamingTurnResult
from .history import Conversation


class Command(Enum):
    EXIT = "/exit"
    RESET = "/reset"


def parse_command(line: Optional[str]) -> Optional[Command]:
    """Recognise a command only when it is the whole (trimmed) input line."""
    if line is None:
        return None
    text = line.strip().lower()
    for command in Command:
        if text == command.value:
            return command
    return None


class ConversationActions:
    """Manages conversation flow and actions."""

    USER_PROMPT = "[You]: "
    AI_PREFIX = "[AI]: "

    def __init__(self, display, provider, system_prompt: str, logger=None):
        self.display = display
        self.terminal = display.terminal
        self.style = display.style
        self.provider = provider
        self.logger = logger
        self.system_prompt = system_prompt
        self.conversation = Conversation.create(system_prompt)
        self.renderer = display.animations.create_stream_renderer(prefix=self.AI_PREFIX)
        self.session = StreamingChatSession(provider, self.renderer, logger=logger)

    def reset_conversation(self) -> None:
        self.conversation = self.conversation.reset(self.system_prompt)
        if self.logger:
            self.logger.debug("Conversation history reset")
        self.display.write_colored("\n✓ Conversation history has been reset.\n", 'YELLOW')

    def _write_footer(self, result: StreamingTurnResult) -> None:
        if result.usage is not None:
            self.display.write_colored("\n\n" + self.style.format_usage(result.usage), 'GREEN', newline=False)
        self.display.write_colored(
            "\n" + self.style.format_general(result.finish_timestamp, result.finish_reason),
            'YELLOW',
        )

    async def process_message(self, text: str) -> Optional[StreamingTurnResult]:
        """
        Run one turn. The user message is committed before the request; the
        assistant message only when the stream completes.
        """
        self.conversation.append_user(text)
        try:
            result = await self.session.run(self.conversation.snapshot())
        except ProviderFailure as e:
            if self.logger:
                self.logger.error(f"Turn failed: {e}")
            self.display.write_colored(f"\n✗ Error while getting AI model response: {e.message}", 'RED')
            return None
        except Exception as e:
            if self.logger:
                self.logger.error(f"Unexpected turn error: {e}", exc_info=True)
            self.display.write_colored(f"\n✗ Error while getting AI model response: {e}", 'RED')
            return None

        self._write_footer(result)
        self.conversation.append_assistant(result.text)
        return result

    async def _read_input(self) -> Optional[str]:
        """Return the next input line, or None when input is closed."""
        try:
            return await self.terminal.get_user_input(self.USER_PROMPT, style="ansiblue")
        except (EOFError, KeyboardInterrupt):
            return None

    async def run_conversation(self) -> None:
        """Read, dispatch and answer input lines until /exit or end of input."""
        while True:
            line = await self._read_input()
            if line is None:
                break

            command = parse_command(line)
            if command is Command.EXIT:
                break
            if not line.strip():
                continue
            if command is Command.RESET:
                self.reset_conversation()
                continue

            await self.process_message(line)

        self.display.write_colored("\nGoodbye! 👋", 'CYAN')
