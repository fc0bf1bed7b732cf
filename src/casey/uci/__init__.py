"""UCI front-end: protocol parsing, coordinator and worker threads.

Quick start::

    from casey.engine import GreedyEngine
    from casey.uci import UciHandler

    UciHandler(GreedyEngine(), name="Casey").run()  # stdin/stdout
"""

from casey.uci.commands import (
    EngineReply,
    GuiCommand,
    GuiCommandKind,
    ReplyKind,
    parse_gui_command,
)
from casey.uci.handler import HandlerState, UciHandler
from casey.uci.input_reader import InputReader
from casey.uci.worker import EngineWorker

__all__ = [
    "EngineReply",
    "EngineWorker",
    "GuiCommand",
    "GuiCommandKind",
    "HandlerState",
    "InputReader",
    "ReplyKind",
    "UciHandler",
    "parse_gui_command",
]
