# interface.py

import asyncio
from typing import Optional

from .config import AppConfig
from .conversation.actions import ConversationActions
from .display import Display
from .logger import Logger
from .session import validate_credentials
from .stream.remote import AzureOpenAIStream

EXIT_OK = 0
EXIT_PREFLIGHT_FAILED = 3


class Interface:
    """
    Main entry point that assembles our Display, provider and conversation.
    """

    def __init__(self, config: AppConfig,
                 logging_enabled: bool = False,
                 log_file: Optional[str] = None,
                 provider=None):
        """
        Initialize components from an already validated configuration.

        Args:
            config: Validated AppConfig.
            logging_enabled: Enable detailed logging.
            log_file: Path to log file. Use "-" for stdout.
            provider: Completion provider override; defaults to Azure OpenAI.
        """
        self.config = config
        self.logger = Logger(__name__, logging_enabled, log_file)
        try:
            self.display = Display(logger=self.logger)
            self.provider = provider or AzureOpenAIStream(
                endpoint=config.endpoint,
                api_key=config.api_key,
                deployment_name=config.deployment_name,
                api_version=config.api_version,
                logger=self.logger,
            )
            self.actions = ConversationActions(
                display=self.display,
                provider=self.provider,
                system_prompt=config.system_prompt,
                logger=self.logger,
            )
            self.logger.debug(f"Initialized with {config!r}")
        except Exception as e:
            self.logger.error(f"Init error: {e}")
            raise

    def welcome(self) -> None:
        """Print the banner, deployment details and command help."""
        terminal = self.display.terminal
        terminal.write_line(self.display.style.format_banner(
            "Azure AI Streamer - Interactive Chat with Token Output"
        ))
        terminal.write_line(f"\nDeployment name: {self.config.deployment_name}")
        terminal.write_line(f"Endpoint: {self.config.endpoint}")
        terminal.write_line("\nCommands:")
        terminal.write_line("  /exit  - Exit the application")
        terminal.write_line("  /reset - Reset conversation history\n")

    async def run(self, preflight: bool = True) -> int:
        try:
            if preflight and not await validate_credentials(self.provider, logger=self.logger):
                self.display.write_colored(
                    "Invalid or missing Azure OpenAI API key. "
                    "Please check your environment or configuration.",
                    'RED',
                )
                return EXIT_PREFLIGHT_FAILED
            self.welcome()
            await self.actions.run_conversation()
            return EXIT_OK
        finally:
            aclose = getattr(self.provider, "aclose", None)
            if aclose is not None:
                await aclose()

    def start(self, preflight: bool = True) -> int:
        """Run the interactive chat until the user leaves; returns an exit code."""
        with self.display.terminal:
            try:
                return asyncio.run(self.run(preflight=preflight))
            except KeyboardInterrupt:
                self.display.terminal.write_line("\nExiting...")
                return EXIT_OK
