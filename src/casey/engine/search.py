"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from casey.core.move import Move
    from casey.core.position import Position

CancelCheck = Callable[[], bool]
# Called with (best move so far, its score) whenever the best move changes.
ProgressCallback = Callable[["Move", int], None]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    time_limit_ms: int | None = None


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game, console and UCI layers."""

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult: ...


def never_cancelled() -> bool:
    return False
