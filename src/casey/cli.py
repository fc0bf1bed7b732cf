"""Command-line entry point.

Usage:
    casey [--log-level LEVEL] uci
    casey [--log-level LEVEL] perft [--fen FEN] [--depth N] [--divide]
    casey [--log-level LEVEL] play [--engine greedy|random] [--seed N]

Defaults come from :class:`casey.config.Settings` (``CASEY_*`` variables).
"""

from __future__ import annotations

import argparse
import logging
import sys

from casey.config import Settings
from casey.console import ConsoleGame
from casey.core.errors import ChessError
from casey.core.notation.fen import STARTING_FEN, position_from_fen
from casey.core.perft import divide, timed_perft
from casey.engine import ENGINES, create_engine
from casey.uci.handler import UciHandler

_LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout is reserved for the UCI protocol."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="casey", description="Casey chess engine")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging threshold for stderr output (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("uci", help="Speak UCI on stdin/stdout")

    perft_p = sub.add_parser("perft", help="Count legal-move tree leaves")
    perft_p.add_argument("--fen", default=STARTING_FEN, help="Root position")
    perft_p.add_argument(
        "--depth", type=int, default=settings.perft_depth, help="Plies to search"
    )
    perft_p.add_argument(
        "--divide", action="store_true", help="Print counts per root move"
    )

    play_p = sub.add_parser("play", help="Play against the engine in the terminal")
    play_p.add_argument(
        "--engine", choices=sorted(ENGINES), default=settings.engine, help="Opponent"
    )
    play_p.add_argument(
        "--seed", type=int, default=settings.seed, help="Seed for the random engine"
    )
    return parser


def _run_perft(args: argparse.Namespace) -> int:
    position = position_from_fen(args.fen)
    if args.divide:
        counts = divide(position, args.depth)
        for move, nodes in counts.items():
            print(f"{move}: {nodes}")
        print(f"\nNodes searched: {sum(counts.values())}")
        return 0
    for depth, nodes, elapsed in timed_perft(position, args.depth):
        print(f"depth {depth}: {nodes} nodes ({elapsed * 1000:.0f} ms)")
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "uci":
            engine = create_engine(settings.engine, settings.seed)
            UciHandler(
                engine, name=settings.engine_name, author=settings.engine_author
            ).run()
            return 0
        if args.command == "perft":
            return _run_perft(args)
        if args.command == "play":
            ConsoleGame(create_engine(args.engine, args.seed)).run()
            return 0
    except ChessError as exc:
        _LOGGER.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
