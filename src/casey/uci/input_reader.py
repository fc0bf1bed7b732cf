"""Thread that turns GUI input lines into handler messages."""

from __future__ import annotations

import logging
import queue
import threading
from typing import TextIO

from casey.uci.commands import parse_gui_command
from casey.uci.messages import GuiMessage, HandlerMessage, InputClosed

_LOGGER = logging.getLogger(__name__)


class InputReader:
    """Reads *stream* line by line and forwards recognised commands.

    Unknown lines are logged and skipped.  End of input is reported as
    :class:`InputClosed`, after which the thread exits.
    """

    __slots__ = ("_stream", "_outbox", "_thread")

    def __init__(self, stream: TextIO, outbox: queue.Queue[HandlerMessage]) -> None:
        self._stream = stream
        self._outbox = outbox
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        # Daemon: a blocking readline() cannot be interrupted on shutdown.
        self._thread = threading.Thread(
            target=self.run, name="uci-input", daemon=True
        )
        self._thread.start()

    def run(self) -> None:
        for raw in iter(self._stream.readline, ""):
            line = raw.strip()
            if not line:
                continue
            _LOGGER.debug("Received input: %s", line)
            command = parse_gui_command(line)
            if command is None:
                _LOGGER.warning("Ignoring unknown command: %s", line)
                continue
            self._outbox.put(GuiMessage(command))
        _LOGGER.debug("Input closed")
        self._outbox.put(InputClosed())
