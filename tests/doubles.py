# doubles.py

import asyncio

from tokenline.display.terminal import CursorAnchor


class RecordingTerminal:
    """Terminal stand-in that records every write and cursor move."""

    def __init__(self, tty: bool = True):
        self.tty = tty
        self.calls = []

    def write(self, text: str = "", newline: bool = False) -> None:
        self.calls.append(("write", text + ("\n" if newline else "")))

    def write_line(self, text: str = "") -> None:
        self.write(text, newline=True)

    def capture_anchor(self) -> CursorAnchor:
        self.calls.append(("anchor",))
        return CursorAnchor(active=self.tty)

    def move_to(self, anchor: CursorAnchor) -> None:
        if anchor.active:
            self.calls.append(("move_to",))

    def hide_cursor(self) -> None:
        self.calls.append(("hide",))

    def show_cursor(self) -> None:
        self.calls.append(("show",))

    @property
    def writes(self):
        return [c[1] for c in self.calls if c[0] == "write"]


class RecordingRenderer:
    """Renderer stand-in that records the order of calls made on it."""

    def __init__(self):
        self.calls = []

    def begin(self) -> None:
        self.calls.append(("begin",))

    async def on_first_content(self) -> None:
        self.calls.append(("first_content",))

    def on_text_delta(self, text: str) -> None:
        self.calls.append(("delta", text))

    async def end(self) -> None:
        self.calls.append(("end",))


class ScriptedProvider:
    """Completion provider that replays a fixed list of UpdateEvents."""

    def __init__(self, events=(), error=None, delay: float = 0):
        self.events = list(events)
        self.error = error
        self.delay = delay
        self.requests = []

    async def stream_completion(self, messages, options):
        self.requests.append((tuple(messages), options))
        for event in self.events:
            await asyncio.sleep(self.delay)
            yield event
        if self.error is not None:
            raise self.error


class HangingProvider:
    """Provider whose stream never produces anything."""

    def __init__(self):
        self.closed = False

    async def stream_completion(self, messages, options):
        try:
            await asyncio.sleep(3600)
            yield None
        finally:
            self.closed = True
