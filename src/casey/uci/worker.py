"""Engine worker thread: owns the game and runs searches."""

from __future__ import annotations

import logging
import queue
import threading

from casey.core.errors import ChessError
from casey.core.move import NULL_MOVE, Move
from casey.core.notation.algebraic import parse_long_algebraic
from casey.engine.search import IEngine, SearchLimits
from casey.game.game import Game
from casey.uci.messages import (
    CurrentBestMove,
    FinalBestMove,
    HandlerMessage,
    MakeMove,
    NewFen,
    PositionSet,
    Shutdown,
    StartingPosition,
    StartSearch,
    StopSearch,
    WorkerCommand,
)

_LOGGER = logging.getLogger(__name__)


class EngineWorker:
    """Processes :data:`WorkerCommand` messages one at a time.

    The worker plays the engine's own moves into its game, so the GUI only
    has to send the opponent's replies.  A search that was stopped plays
    nothing until the matching :class:`StopSearch` says which move the GUI
    was told about.

    Bad FENs and moves are logged and skipped; the worker keeps running
    until it receives :class:`Shutdown`.
    """

    __slots__ = (
        "_engine",
        "_inbox",
        "_outbox",
        "_cancel_event",
        "_awaiting_stop",
        "_thread",
        "game",
    )

    def __init__(
        self,
        engine: IEngine,
        inbox: queue.Queue[WorkerCommand],
        outbox: queue.Queue[HandlerMessage],
    ) -> None:
        self._engine = engine
        self._inbox = inbox
        self._outbox = outbox
        self._cancel_event = threading.Event()
        self._awaiting_stop = False
        self._thread: threading.Thread | None = None
        self.game = Game()

    # ── Thread control ───────────────────────────────────────────────────

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self.run, name="uci-engine", daemon=True
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def cancel(self) -> None:
        """Request cancellation of the current search (thread-safe)."""
        self._cancel_event.set()

    def run(self) -> None:
        while True:
            command = self._inbox.get()
            if isinstance(command, Shutdown):
                _LOGGER.debug("Engine worker shutting down")
                return
            self.handle(command)

    # ── Command handling ─────────────────────────────────────────────────

    def handle(self, command: WorkerCommand) -> None:
        _LOGGER.debug("Worker received: %s", command)
        try:
            if isinstance(command, StartingPosition):
                self._set_position(None, command.moves)
            elif isinstance(command, NewFen):
                self._set_position(command.fen, command.moves)
            elif isinstance(command, MakeMove):
                self._play(command.move)
            elif isinstance(command, StartSearch):
                self._search(command)
            elif isinstance(command, StopSearch):
                self._stopped(command.reported)
        except ChessError as exc:
            _LOGGER.error("Engine worker rejected %s: %s", command, exc)
        except Exception:
            _LOGGER.exception("Engine worker failed on %s", command)
            if isinstance(command, StartSearch):
                self._outbox.put(FinalBestMove(NULL_MOVE))

    def _set_position(self, fen: str | None, moves: tuple[str, ...]) -> None:
        self._awaiting_stop = False
        try:
            self.game = Game.from_fen(fen) if fen is not None else Game()
            for text in moves:
                self._play(text)
        except ChessError as exc:
            _LOGGER.error("Position setup failed: %s", exc)
        finally:
            self._outbox.put(PositionSet())

    def _play(self, text: str) -> Move:
        move = parse_long_algebraic(text, self.game.position)
        self.game.make_move(move)
        return move

    def _search(self, command: StartSearch) -> None:
        self._cancel_event.clear()
        self._awaiting_stop = False

        def report(move: Move, score: int) -> None:
            self._outbox.put(CurrentBestMove(move.uci, score))

        result = self._engine.search(
            self.game.position,
            SearchLimits(time_limit_ms=command.time_limit_ms),
            is_cancelled=self._cancel_event.is_set,
            on_progress=report,
        )
        if self._cancel_event.is_set():
            self._awaiting_stop = True
            return
        if result.best_move is None:
            self._outbox.put(FinalBestMove(NULL_MOVE))
            return
        self.game.make_move(result.best_move)
        self._outbox.put(FinalBestMove(result.best_move.uci))

    def _stopped(self, reported: str) -> None:
        if not self._awaiting_stop:
            return
        self._awaiting_stop = False
        if reported != NULL_MOVE:
            self._play(reported)
