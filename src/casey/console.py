"""Text-mode board rendering and a human-vs-engine console game."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from casey.core.enums import Color, GameResult
from casey.core.errors import ChessError
from casey.core.notation.algebraic import parse_algebraic
from casey.core.notation.san import move_to_san
from casey.core.position import Position
from casey.core.types import FILES, make_square
from casey.engine.search import IEngine
from casey.game.game import Game

_LOGGER = logging.getLogger(__name__)

_RULE = "  +---+---+---+---+---+---+---+---+"

_RESULT_TEXT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "Checkmate. White wins!",
    GameResult.BLACK_WINS: "Checkmate. Black wins!",
    GameResult.DRAW: "Stalemate. The game is drawn.",
}


def render_board(position: Position, perspective: Color = Color.WHITE) -> str:
    """Framed ASCII board as seen by *perspective* (its pieces at the bottom)."""
    if perspective == Color.WHITE:
        ranks = range(7, -1, -1)
        files = range(8)
    else:
        ranks = range(8)
        files = range(7, -1, -1)
    labels = "    " + "   ".join(FILES[f] for f in files)

    lines = [labels]
    for rank in ranks:
        lines.append(_RULE)
        cells = []
        for file in files:
            piece = position.board[make_square(file, rank)]
            cells.append(str(piece) if piece is not None else " ")
        lines.append(f"{rank + 1} | " + " | ".join(cells) + f" | {rank + 1}")
    lines.append(_RULE)
    lines.append(labels)
    return "\n".join(lines)


class ConsoleGame:
    """Human plays *human* against *engine* over a pair of text streams.

    Invalid input is reported and the human is asked again.  The game ends
    when the side to move has no legal moves, or when the human types
    ``quit`` or closes the input.
    """

    __slots__ = ("game", "_engine", "_input", "_output", "_human")

    def __init__(
        self,
        engine: IEngine,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        *,
        human: Color = Color.WHITE,
        game: Game | None = None,
    ) -> None:
        self.game = game if game is not None else Game()
        self._engine = engine
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._human = human

    def run(self) -> GameResult:
        """Play until the game ends or the human leaves; return the result."""
        self._print(render_board(self.game.position, self._human))
        while True:
            result = self.game.result
            if result != GameResult.IN_PROGRESS:
                self._print(_RESULT_TEXT[result])
                return result
            if self.game.side_to_move == self._human:
                if not self._human_turn():
                    self._print("Goodbye.")
                    return GameResult.IN_PROGRESS
            else:
                self._engine_turn()
            self._print(render_board(self.game.position, self._human))

    def _human_turn(self) -> bool:
        while True:
            self._output.write("Enter move: ")
            self._output.flush()
            line = self._input.readline()
            if not line:
                return False
            text = line.strip()
            if text == "quit":
                return False
            if not text:
                continue
            try:
                before = self.game.position.copy()
                move = parse_algebraic(text, before)
                self.game.make_move(move)
            except ChessError as exc:
                _LOGGER.info("Rejected input %r: %s", text, exc)
                self._print(f"Invalid move: {exc}")
                continue
            _LOGGER.info("%s played %s", self._human, move_to_san(before, move))
            return True

    def _engine_turn(self) -> None:
        position = self.game.position.copy()
        move = self.game.engine_move(self._engine)
        if move is None:
            return
        mover = "White" if position.side_to_move == Color.WHITE else "Black"
        self._print(f"{mover} plays {move_to_san(position, move)}")

    def _print(self, text: str) -> None:
        print(text, file=self._output, flush=True)
