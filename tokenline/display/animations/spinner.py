# display/animations/spinner.py

import asyncio
from typing import Optional, Sequence

from ..terminal import CursorAnchor


class StreamRenderer:
    """
    Spinner-to-content handoff for one streamed reply.

    A spinner redraws at a saved cursor anchor until the first piece of
    content arrives. The spinner task is cancelled and awaited before the
    anchor is cleared, so its last frame can never land after real text.
    All cursor movement for a turn goes through this class.
    """
    FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

    def __init__(self, terminal, prefix: str = "", interval: float = 0.1,
                 frames: Sequence[str] = FRAMES, no_animation: bool = False,
                 logger=None):
        self.terminal = terminal
        self.prefix = prefix
        self.interval = interval
        self.frames = tuple(frames)
        self.no_anim = no_animation
        self.logger = logger

        # Render state, rebuilt by begin()
        self.has_received_content = False
        self.frame_index = 0
        self.anchor: Optional[CursorAnchor] = None
        self.animation_task: Optional[asyncio.Task] = None
        self._finalized = False

    @property
    def animating(self) -> bool:
        return self.animation_task is not None and not self.animation_task.done()

    def begin(self) -> None:
        """Capture the anchor and start the spinner."""
        self.has_received_content = False
        self.frame_index = 0
        self._finalized = False
        if self.prefix:
            self.terminal.write(self.prefix)
        self.anchor = self.terminal.capture_anchor()
        if self.no_anim or not self.anchor.active:
            self.animation_task = None
            return
        self.terminal.hide_cursor()
        self.animation_task = asyncio.create_task(self._animate())

    async def _animate(self) -> None:
        """Redraw frames until cancelled."""
        try:
            while True:
                self.terminal.move_to(self.anchor)
                self.terminal.write(self.frames[self.frame_index])
                self.frame_index = (self.frame_index + 1) % len(self.frames)
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Spinner stopped: {e}")

    async def _stop_animation(self) -> None:
        """Cancel the spinner, wait for it, then blank its glyph."""
        task, self.animation_task = self.animation_task, None
        if task is None:
            return
        task.cancel()
        # wait() never re-raises the task's own exception or cancellation
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None and self.logger:
            self.logger.debug(f"Spinner task failed: {task.exception()}")
        try:
            self.terminal.move_to(self.anchor)
            self.terminal.write(" ")
            self.terminal.move_to(self.anchor)
            self.terminal.show_cursor()
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Spinner clear failed: {e}")

    async def on_first_content(self) -> None:
        """Stop the spinner before the first character of the reply."""
        if self.has_received_content:
            return
        self.has_received_content = True
        await self._stop_animation()

    def on_text_delta(self, text: str) -> None:
        self.terminal.write(text)

    async def end(self) -> None:
        """Finish the turn; clears a spinner that never saw content."""
        if self._finalized:
            return
        self._finalized = True
        if not self.has_received_content:
            await self._stop_animation()
