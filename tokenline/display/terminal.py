# display/terminal.py
import sys
import shutil
from dataclasses import dataclass
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText


@dataclass
class TerminalSize:
    """Terminal dimensions."""

    columns: int
    lines: int


@dataclass(frozen=True)
class CursorAnchor:
    """Handle for a saved output cursor position."""

    active: bool


class DisplayTerminal:
    """Low-level terminal operations and I/O."""

    # DEC save/restore cursor; supported by every VT100-compatible terminal
    SAVE_CURSOR = "\0337"
    RESTORE_CURSOR = "\0338"

    def __init__(self):
        self._cursor_visible = True
        self._reset_style = "\033[0m"
        self._prompt_session: Optional[PromptSession] = None

    @property
    def width(self) -> int:
        """Return terminal width."""
        return self.get_size().columns

    def get_size(self) -> TerminalSize:
        """Get terminal dimensions."""
        size = shutil.get_terminal_size()
        return TerminalSize(columns=size.columns, lines=size.lines)

    def is_terminal(self) -> bool:
        """Return True if stdout is a terminal."""
        return sys.stdout.isatty()

    def _manage_cursor(self, show: bool) -> None:
        """Toggle cursor visibility based on 'show' flag."""
        if self._cursor_visible != show and self.is_terminal():
            self._cursor_visible = show
            self.write("\033[?25h" if show else "\033[?25l")

    def show_cursor(self) -> None:
        self._manage_cursor(True)

    def hide_cursor(self) -> None:
        self._manage_cursor(False)

    def write(self, text: str = "", newline: bool = False) -> None:
        """Write text to stdout; append newline if requested."""
        try:
            sys.stdout.write(text)
            if newline:
                sys.stdout.write("\n")
            sys.stdout.flush()
        except IOError:
            pass  # Ignore pipe errors

    def write_line(self, text: str = "") -> None:
        """Write text with newline."""
        self.write(text, newline=True)

    def capture_anchor(self) -> CursorAnchor:
        """Remember the current cursor position so it can be revisited."""
        if not self.is_terminal():
            return CursorAnchor(active=False)
        self.write(self.SAVE_CURSOR)
        return CursorAnchor(active=True)

    def move_to(self, anchor: CursorAnchor) -> None:
        """Move the cursor back to a previously captured anchor."""
        if anchor.active:
            self.write(self.RESTORE_CURSOR)

    async def get_user_input(self, prompt: str, style: str = "") -> str:
        """
        Read one line of input with prompt_toolkit.

        Raises EOFError on Ctrl-D and KeyboardInterrupt on Ctrl-C, leaving the
        decision of what to do with them to the caller.
        """
        if self._prompt_session is None:
            self._prompt_session = PromptSession(complete_while_typing=False)
        self.show_cursor()
        return await self._prompt_session.prompt_async(
            FormattedText([(style, prompt)])
        )

    def reset(self) -> None:
        """Reset styling and show the cursor."""
        self.write(self._reset_style)
        self.show_cursor()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: restore cursor and styling."""
        self.reset()
        return False  # Don't suppress exceptions
