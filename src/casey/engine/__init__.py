"""Move-choosing engines and their shared search protocol."""

from __future__ import annotations

import random

from casey.engine.greedy import GreedyEngine
from casey.engine.random_engine import RandomEngine
from casey.engine.search import (
    CancelCheck,
    IEngine,
    ProgressCallback,
    SearchLimits,
    SearchResult,
)

ENGINES: dict[str, type[IEngine]] = {
    "greedy": GreedyEngine,
    "random": RandomEngine,
}


def create_engine(name: str, seed: int | None = None) -> IEngine:
    """Instantiate an engine by its registry name."""
    if name == "random":
        return RandomEngine(random.Random(seed))
    try:
        return ENGINES[name]()
    except KeyError:
        raise ValueError(f"Unknown engine: {name!r}") from None


__all__ = [
    "CancelCheck",
    "ENGINES",
    "GreedyEngine",
    "IEngine",
    "ProgressCallback",
    "RandomEngine",
    "SearchLimits",
    "SearchResult",
    "create_engine",
]
