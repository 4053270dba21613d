# test_renderer.py

import asyncio
from unittest.mock import Mock

import pytest

from tokenline.display.animations import DisplayAnimations, StreamRenderer

from .doubles import RecordingTerminal

CLEAR_SEQUENCE = [("move_to",), ("write", " "), ("move_to",), ("show",)]


class FlakyTerminal(RecordingTerminal):
    """Fails every spinner frame write."""

    def write(self, text: str = "", newline: bool = False) -> None:
        if text in StreamRenderer.FRAMES:
            raise RuntimeError("terminal went away")
        super().write(text, newline)


class TestStreamRenderer:
    """Spinner lifecycle and the stop-before-content handoff."""

    def setup_method(self):
        self.terminal = RecordingTerminal()
        self.logger = Mock()
        self.renderer = StreamRenderer(self.terminal, interval=0.001, logger=self.logger)

    @pytest.mark.asyncio
    async def test_begin_captures_anchor_and_draws_frames(self):
        self.renderer.begin()
        await asyncio.sleep(0.02)
        await self.renderer.end()

        assert self.terminal.calls[0] == ("anchor",)
        frames = [w for w in self.terminal.writes if w in StreamRenderer.FRAMES]
        assert frames
        assert frames[0] == StreamRenderer.FRAMES[0]

    @pytest.mark.asyncio
    async def test_frames_wrap_around(self):
        renderer = StreamRenderer(self.terminal, interval=0, frames=("a", "b", "c"))
        renderer.begin()
        for _ in range(10):
            await asyncio.sleep(0)
        await renderer.end()

        frames = [w for w in self.terminal.writes if w in ("a", "b", "c")]
        assert len(frames) > 3
        assert frames == [("a", "b", "c")[i % 3] for i in range(len(frames))]

    @pytest.mark.asyncio
    async def test_first_content_stops_and_clears(self):
        self.renderer.begin()
        await asyncio.sleep(0.01)
        task = self.renderer.animation_task

        await self.renderer.on_first_content()

        assert task.done()
        assert not self.renderer.animating
        assert self.terminal.calls[-4:] == CLEAR_SEQUENCE

        # nothing else is drawn once the spinner has been stopped
        count = len(self.terminal.calls)
        await asyncio.sleep(0.02)
        assert len(self.terminal.calls) == count

    @pytest.mark.asyncio
    async def test_first_content_only_acts_once(self):
        self.renderer.begin()
        await self.renderer.on_first_content()
        await self.renderer.on_first_content()
        await self.renderer.end()
        assert self.terminal.writes.count(" ") == 1

    @pytest.mark.asyncio
    async def test_text_delta_written_raw(self):
        self.renderer.begin()
        await self.renderer.on_first_content()
        self.renderer.on_text_delta("Hel")
        self.renderer.on_text_delta("lo")
        assert self.terminal.writes[-2:] == ["Hel", "lo"]

    @pytest.mark.asyncio
    async def test_end_without_content_clears_exactly_once(self):
        self.renderer.begin()
        await asyncio.sleep(0.01)

        await self.renderer.end()
        await self.renderer.end()

        assert self.terminal.calls[-4:] == CLEAR_SEQUENCE
        assert self.terminal.writes.count(" ") == 1
        assert not self.renderer.animating

    @pytest.mark.asyncio
    async def test_end_after_content_does_not_clear_again(self):
        self.renderer.begin()
        await self.renderer.on_first_content()
        self.renderer.on_text_delta("done")
        await self.renderer.end()
        assert self.terminal.writes[-1] == "done"

    @pytest.mark.asyncio
    async def test_begin_resets_render_state(self):
        self.renderer.begin()
        await self.renderer.on_first_content()
        await self.renderer.end()

        self.renderer.begin()
        assert self.renderer.has_received_content is False
        assert self.renderer.frame_index == 0
        await self.renderer.end()
        assert self.terminal.writes.count(" ") == 2

    @pytest.mark.asyncio
    async def test_prefix_written_before_anchor(self):
        renderer = StreamRenderer(self.terminal, prefix="[AI]: ", interval=0.001)
        renderer.begin()
        await renderer.end()
        assert self.terminal.calls[:2] == [("write", "[AI]: "), ("anchor",)]

    @pytest.mark.asyncio
    async def test_no_spinner_when_not_a_terminal(self):
        terminal = RecordingTerminal(tty=False)
        renderer = StreamRenderer(terminal, interval=0.001)

        renderer.begin()
        await asyncio.sleep(0.01)
        await renderer.on_first_content()
        renderer.on_text_delta("plain")
        await renderer.end()

        assert renderer.animation_task is None
        assert terminal.writes == ["plain"]

    @pytest.mark.asyncio
    async def test_no_animation_flag(self):
        renderer = StreamRenderer(self.terminal, interval=0.001, no_animation=True)
        renderer.begin()
        await asyncio.sleep(0.01)
        await renderer.end()
        assert self.terminal.writes == []

    @pytest.mark.asyncio
    async def test_animation_failure_is_swallowed(self):
        terminal = FlakyTerminal()
        renderer = StreamRenderer(terminal, interval=0.001, logger=self.logger)

        renderer.begin()
        await asyncio.sleep(0.01)
        await renderer.on_first_content()
        renderer.on_text_delta("still here")
        await renderer.end()

        assert terminal.writes[-1] == "still here"
        assert self.logger.debug.called


class TestDisplayAnimations:

    def test_creates_renderer_bound_to_terminal(self):
        terminal = RecordingTerminal()
        animations = DisplayAnimations(terminal)
        renderer = animations.create_stream_renderer(prefix="> ", no_animation=True)
        assert isinstance(renderer, StreamRenderer)
        assert renderer.terminal is terminal
        assert renderer.prefix == "> "
        assert renderer.no_anim is True
