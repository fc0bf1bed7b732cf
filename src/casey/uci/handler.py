"""UCI coordinator: a state machine between the GUI and the engine worker."""

from __future__ import annotations

import logging
import queue
import sys
from enum import IntEnum, auto
from typing import TextIO

from casey.core.move import NULL_MOVE
from casey.engine.search import IEngine
from casey.uci.commands import EngineReply, GuiCommand, GuiCommandKind
from casey.uci.input_reader import InputReader
from casey.uci.messages import (
    CurrentBestMove,
    FinalBestMove,
    GuiMessage,
    HandlerMessage,
    InputClosed,
    MakeMove,
    NewFen,
    PositionSet,
    Shutdown,
    StartingPosition,
    StartSearch,
    StopSearch,
    WorkerCommand,
)
from casey.uci.worker import EngineWorker

_LOGGER = logging.getLogger(__name__)

_SHUTDOWN_TIMEOUT_S = 2.0


class HandlerState(IntEnum):
    """Protocol states of the coordinator."""

    NEW = auto()  # nothing received yet
    READY = auto()  # "uci" answered, waiting for a position
    IDLE = auto()  # position set
    THINKING = auto()  # search running
    WAIT_MSG = auto()  # waiting for the worker to confirm a position


class UciHandler:
    """Owns the protocol state and the only writer to the GUI stream.

    Input lines arrive from an :class:`InputReader` thread, engine results
    from an :class:`EngineWorker` thread; both are funnelled through one
    inbox queue, so all state changes happen on the thread calling
    :meth:`run`.  Commands that are not valid in the current state are
    ignored.

    Args:
        engine: Search engine driven by the worker.
        name: Sent as ``id name``.
        author: Sent as ``id author``.
        input_stream: GUI input (defaults to ``sys.stdin``).
        output_stream: GUI output (defaults to ``sys.stdout``).
    """

    __slots__ = (
        "name",
        "author",
        "_state",
        "_output",
        "_inbox",
        "_worker_queue",
        "_reader",
        "_worker",
        "_current_best_move",
    )

    def __init__(
        self,
        engine: IEngine,
        *,
        name: str = "Casey",
        author: str = "",
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ) -> None:
        self.name = name
        self.author = author
        self._state = HandlerState.NEW
        self._output = output_stream if output_stream is not None else sys.stdout
        self._inbox: queue.Queue[HandlerMessage] = queue.Queue()
        self._worker_queue: queue.Queue[WorkerCommand] = queue.Queue()
        self._reader = InputReader(
            input_stream if input_stream is not None else sys.stdin, self._inbox
        )
        self._worker = EngineWorker(engine, self._worker_queue, self._inbox)
        self._current_best_move: str | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> HandlerState:
        return self._state

    @property
    def worker_queue(self) -> queue.Queue[WorkerCommand]:
        """Commands sent to the worker (exposed for inspection)."""
        return self._worker_queue

    # ── Main loop ────────────────────────────────────────────────────────

    def run(self) -> None:
        """Start both threads and process messages until ``quit`` or EOF."""
        self._worker.start()
        self._reader.start()
        try:
            while self.handle(self._inbox.get()):
                pass
        finally:
            self._worker.cancel()
            self._worker_queue.put(Shutdown())
            self._worker.join(_SHUTDOWN_TIMEOUT_S)

    def handle(self, message: HandlerMessage) -> bool:
        """Process one message; ``False`` once the session should end."""
        _LOGGER.debug("Handler state %s received: %s", self._state.name, message)
        if isinstance(message, InputClosed):
            return False
        if isinstance(message, GuiMessage):
            return self._handle_command(message.command)
        self._handle_engine_message(message)
        return True

    # ── Engine messages ──────────────────────────────────────────────────

    def _handle_engine_message(
        self, message: PositionSet | CurrentBestMove | FinalBestMove
    ) -> None:
        if isinstance(message, PositionSet):
            if self._state == HandlerState.WAIT_MSG:
                self._state = HandlerState.IDLE
        elif isinstance(message, CurrentBestMove):
            if self._state == HandlerState.THINKING:
                self._current_best_move = message.move
                self._send(
                    EngineReply.info(f"score cp {message.score_cp} pv {message.move}")
                )
        elif isinstance(message, FinalBestMove):
            if self._state != HandlerState.THINKING:
                _LOGGER.debug("Dropping late best move %s", message.move)
                return
            self._current_best_move = None
            self._send(EngineReply.best_move(message.move))
            self._state = HandlerState.IDLE

    # ── GUI commands ─────────────────────────────────────────────────────

    def _handle_command(self, command: GuiCommand) -> bool:
        kind = command.kind
        if kind == GuiCommandKind.UCI:
            self._command_uci()
        elif kind == GuiCommandKind.ISREADY:
            self._send(EngineReply.ready_ok())
        elif kind == GuiCommandKind.UCINEWGAME:
            if self._state == HandlerState.IDLE:
                self._state = HandlerState.READY
        elif kind == GuiCommandKind.POSITION:
            self._command_position(command.tokens)
        elif kind == GuiCommandKind.GO:
            self._command_go(command.tokens)
        elif kind == GuiCommandKind.STOP:
            self._command_stop()
        elif kind == GuiCommandKind.QUIT:
            return False
        else:
            _LOGGER.debug("Ignoring %s %s", kind.value, command.args)
        return True

    def _command_uci(self) -> None:
        if self._state != HandlerState.NEW:
            return
        self._send(EngineReply.id_name(self.name))
        self._send(EngineReply.id_author(self.author))
        self._send(EngineReply.uci_ok())
        self._state = HandlerState.READY

    def _command_position(self, tokens: list[str]) -> None:
        if self._state == HandlerState.READY:
            command = _position_command(tokens)
            if command is None:
                _LOGGER.warning("Malformed position command: %s", " ".join(tokens))
                return
            self._worker_queue.put(command)
            self._state = HandlerState.WAIT_MSG
        elif self._state == HandlerState.IDLE:
            # The worker already holds every earlier move (its own included).
            if "moves" not in tokens or tokens[-1] == "moves":
                _LOGGER.warning("No move to append in: %s", " ".join(tokens))
                return
            self._worker_queue.put(MakeMove(tokens[-1]))

    def _command_go(self, tokens: list[str]) -> None:
        if self._state != HandlerState.IDLE:
            return
        self._current_best_move = None
        self._worker_queue.put(StartSearch(time_limit_ms=_movetime(tokens)))
        self._state = HandlerState.THINKING

    def _command_stop(self) -> None:
        if self._state != HandlerState.THINKING:
            return
        move = self._current_best_move or NULL_MOVE
        self._current_best_move = None
        self._send(EngineReply.best_move(move))
        self._worker.cancel()
        self._worker_queue.put(StopSearch(move))
        self._state = HandlerState.IDLE

    def _send(self, reply: EngineReply) -> None:
        _LOGGER.debug("Sending: %s", reply)
        print(reply, file=self._output, flush=True)


def _position_command(tokens: list[str]) -> StartingPosition | NewFen | None:
    """Translate ``position`` arguments into a worker command."""
    if not tokens:
        return None
    if "moves" in tokens:
        split = tokens.index("moves")
        head, moves = tokens[:split], tuple(tokens[split + 1 :])
    else:
        head, moves = tokens, ()
    if head == ["startpos"]:
        return StartingPosition(moves)
    if len(head) > 1 and head[0] == "fen":
        return NewFen(" ".join(head[1:]), moves)
    return None


def _movetime(tokens: list[str]) -> int | None:
    """``go movetime N`` → N milliseconds; anything else → no limit."""
    if "movetime" in tokens:
        idx = tokens.index("movetime")
        if idx + 1 < len(tokens) and tokens[idx + 1].isdigit():
            return int(tokens[idx + 1])
    return None
