"""Messages exchanged between the UCI coordinator and its two threads.

``WorkerCommand`` values flow from the handler to the engine worker;
``HandlerMessage`` values flow into the handler from both the input
reader and the worker.  Each direction has its own queue.
"""

from __future__ import annotations

from dataclasses import dataclass

from casey.uci.commands import GuiCommand

# ── Handler → worker ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class StartingPosition:
    moves: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class NewFen:
    fen: str
    moves: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MakeMove:
    move: str


@dataclass(frozen=True, slots=True)
class StartSearch:
    time_limit_ms: int | None = None


@dataclass(frozen=True, slots=True)
class StopSearch:
    """The search was stopped and *reported* was sent as the best move."""

    reported: str


@dataclass(frozen=True, slots=True)
class Shutdown:
    pass


WorkerCommand = (
    StartingPosition | NewFen | MakeMove | StartSearch | StopSearch | Shutdown
)

# ── Worker / input → handler ─────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PositionSet:
    pass


@dataclass(frozen=True, slots=True)
class CurrentBestMove:
    move: str
    score_cp: int = 0


@dataclass(frozen=True, slots=True)
class FinalBestMove:
    move: str


@dataclass(frozen=True, slots=True)
class GuiMessage:
    command: GuiCommand


@dataclass(frozen=True, slots=True)
class InputClosed:
    pass


EngineMessage = PositionSet | CurrentBestMove | FinalBestMove
HandlerMessage = EngineMessage | GuiMessage | InputClosed
