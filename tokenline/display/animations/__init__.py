# display/animations/__init__.py

from .spinner import StreamRenderer

class DisplayAnimations:
    """Coordinates terminal animation components."""
    def __init__(self, terminal, logger=None):
        self.terminal = terminal
        self.logger = logger

    def create_stream_renderer(self, prefix="", no_animation=False):
        """Create a renderer for one streamed reply."""
        return StreamRenderer(
            self.terminal,
            prefix=prefix,
            no_animation=no_animation,
            logger=self.logger,
        )

__all__ = ['DisplayAnimations', 'StreamRenderer']
