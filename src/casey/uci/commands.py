"""UCI protocol vocabulary: commands from the GUI and replies to it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GuiCommandKind(Enum):
    """Commands a GUI may send (first token of the line)."""

    UCI = "uci"
    DEBUG = "debug"
    ISREADY = "isready"
    SETOPTION = "setoption"
    UCINEWGAME = "ucinewgame"
    POSITION = "position"
    GO = "go"
    STOP = "stop"
    PONDERHIT = "ponderhit"
    QUIT = "quit"


_KEYWORDS: dict[str, GuiCommandKind] = {kind.value: kind for kind in GuiCommandKind}


@dataclass(frozen=True, slots=True)
class GuiCommand:
    """A parsed GUI line: the keyword and the rest of the line."""

    kind: GuiCommandKind
    args: str = ""

    @property
    def tokens(self) -> list[str]:
        return self.args.split()


def parse_gui_command(line: str) -> GuiCommand | None:
    """Parse one input line; ``None`` for blank lines and unknown keywords."""
    parts = line.split()
    if not parts:
        return None
    kind = _KEYWORDS.get(parts[0])
    if kind is None:
        return None
    return GuiCommand(kind, " ".join(parts[1:]))


class ReplyKind(Enum):
    ID = "id"
    UCIOK = "uciok"
    READYOK = "readyok"
    BESTMOVE = "bestmove"
    COPYPROTECTION = "copyprotection"
    REGISTRATION = "registration"
    INFO = "info"
    OPTION = "option"


@dataclass(frozen=True, slots=True)
class EngineReply:
    """One line the engine writes to the GUI."""

    kind: ReplyKind
    text: str = ""

    def __str__(self) -> str:
        if not self.text:
            return self.kind.value
        return f"{self.kind.value} {self.text}"

    @classmethod
    def id_name(cls, name: str) -> EngineReply:
        return cls(ReplyKind.ID, f"name {name}")

    @classmethod
    def id_author(cls, author: str) -> EngineReply:
        return cls(ReplyKind.ID, f"author {author}")

    @classmethod
    def uci_ok(cls) -> EngineReply:
        return cls(ReplyKind.UCIOK)

    @classmethod
    def ready_ok(cls) -> EngineReply:
        return cls(ReplyKind.READYOK)

    @classmethod
    def best_move(cls, move: str) -> EngineReply:
        return cls(ReplyKind.BESTMOVE, move)

    @classmethod
    def copy_protection(cls, status: str) -> EngineReply:
        return cls(ReplyKind.COPYPROTECTION, status)

    @classmethod
    def registration(cls, status: str) -> EngineReply:
        return cls(ReplyKind.REGISTRATION, status)

    @classmethod
    def info(cls, text: str) -> EngineReply:
        return cls(ReplyKind.INFO, text)

    @classmethod
    def option(cls, text: str) -> EngineReply:
        return cls(ReplyKind.OPTION, text)
