# display/styles.py

from typing import Dict, Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel

from ..stream.provider import UsageStats


class DisplayStyle:
    """
    Color definitions and formatting of the fixed pieces of chat output:
    the welcome banner, notices and the per-turn metadata footer.
    """

    # ANSI format utility
    FMT = staticmethod(lambda x: f'\033[{x}m')

    def __init__(self, terminal, colors: Optional[Dict[str, str]] = None):
        self.terminal = terminal
        self.colors = colors if colors is not None else {
            'CYAN': self.FMT('36'),
            'BLUE': self.FMT('34'),
            'GREEN': self.FMT('32'),
            'YELLOW': self.FMT('33'),
            'RED': self.FMT('31'),
        }
        self.reset = self.FMT('0')
        self.console = Console(force_terminal=True, color_system="truecolor", highlight=False)

    def colorize(self, text: str, color: str) -> str:
        """Wrap text in a named color, or return it untouched if unknown."""
        code = self.colors.get(color)
        return f"{code}{text}{self.reset}" if code else text

    def format_banner(self, title: str, width: int = 79) -> str:
        """Render the welcome banner as a captured Rich panel."""
        with self.console.capture() as capture:
            self.console.print(
                Panel(
                    Align.center(title),
                    border_style="cyan",
                    style="bold cyan",
                    expand=True,
                    width=min(width, self.terminal.width),
                )
            )
        return capture.get().rstrip("\n")

    def format_usage(self, usage: UsageStats) -> str:
        return (
            f"[AI Tokens: Total {usage.total_tokens} | Input {usage.input_tokens} | "
            f"Output {usage.output_tokens} | Input cached {usage.cached_input_tokens}]\n"
            f"[AI Token Details: Output accepted {usage.accepted_prediction_tokens} | "
            f"Output rejected {usage.rejected_prediction_tokens} | "
            f"Output reasoning {usage.reasoning_tokens}]"
        )

    def format_general(self, finish_timestamp: Optional[str], finish_reason) -> str:
        reason = finish_reason.value if finish_reason is not None else ""
        return f"[AI General: At {finish_timestamp or ''} | Finish reason {reason} ]"
