# display/__init__.py

from .terminal import DisplayTerminal
from .styles import DisplayStyle
from .animations import DisplayAnimations

class Display:
    """
    Coordinates terminal display components in a hierarchical structure.

    Component Hierarchy:
    DisplayTerminal (base) → DisplayStyle → DisplayAnimations
    """
    def __init__(self, logger=None):
        """Initialize components in dependency order."""
        self.terminal = DisplayTerminal()
        self.style = DisplayStyle(terminal=self.terminal)
        self.animations = DisplayAnimations(terminal=self.terminal, logger=logger)

    def write_colored(self, text: str, color: str, newline: bool = True) -> None:
        """Write text in one of the style's named colors."""
        self.terminal.write(self.style.colorize(text, color), newline=newline)

__all__ = ['Display']
