"""Tests for the UCI coordinator state machine."""

from __future__ import annotations

import io
import queue
import threading
import time

import pytest

from casey.core.notation import parse_long_algebraic, position_from_fen
from casey.engine import GreedyEngine
from casey.uci.commands import parse_gui_command
from casey.uci.handler import HandlerState, UciHandler
from casey.uci.messages import (
    CurrentBestMove,
    FinalBestMove,
    GuiMessage,
    InputClosed,
    MakeMove,
    NewFen,
    PositionSet,
    StartingPosition,
    StartSearch,
    StopSearch,
)

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _drain(q: queue.Queue) -> list:
    items = []
    while True:
        try:
            items.append(q.get_nowait())
        except queue.Empty:
            return items


class _Session:
    """Handler with captured output; threads are never started."""

    def __init__(self) -> None:
        self.out = io.StringIO()
        self.handler = UciHandler(
            GreedyEngine(),
            name="Casey",
            author="Tester",
            input_stream=io.StringIO(""),
            output_stream=self.out,
        )

    def send(self, line: str) -> bool:
        command = parse_gui_command(line)
        assert command is not None, line
        return self.handler.handle(GuiMessage(command))

    def lines(self) -> list[str]:
        text = self.out.getvalue()
        self.out.seek(0)
        self.out.truncate()
        return text.splitlines()

    def sent(self) -> list:
        return _drain(self.handler.worker_queue)

    @property
    def state(self) -> HandlerState:
        return self.handler.state


@pytest.fixture
def session() -> _Session:
    return _Session()


@pytest.fixture
def idle(session: _Session) -> _Session:
    session.send("uci")
    session.send("position startpos")
    session.handler.handle(PositionSet())
    session.lines()
    session.sent()
    assert session.state == HandlerState.IDLE
    return session


@pytest.fixture
def thinking(idle: _Session) -> _Session:
    idle.send("go")
    idle.sent()
    assert idle.state == HandlerState.THINKING
    return idle


class TestHandshake:
    def test_uci_identifies(self, session: _Session) -> None:
        assert session.send("uci")
        assert session.lines() == ["id name Casey", "id author Tester", "uciok"]
        assert session.state == HandlerState.READY

    def test_uci_only_once(self, session: _Session) -> None:
        session.send("uci")
        session.lines()
        session.send("uci")
        assert session.lines() == []
        assert session.state == HandlerState.READY

    def test_isready_in_any_state(self, session: _Session) -> None:
        session.send("isready")
        assert session.lines() == ["readyok"]
        session.send("uci")
        session.lines()
        session.send("isready")
        assert session.lines() == ["readyok"]

    def test_commands_before_uci_ignored(self, session: _Session) -> None:
        session.send("position startpos")
        session.send("go")
        assert session.sent() == []
        assert session.lines() == []
        assert session.state == HandlerState.NEW


class TestPosition:
    def test_startpos_with_moves(self, session: _Session) -> None:
        session.send("uci")
        session.send("position startpos moves e2e4 e7e5")
        assert session.sent() == [StartingPosition(("e2e4", "e7e5"))]
        assert session.state == HandlerState.WAIT_MSG
        session.handler.handle(PositionSet())
        assert session.state == HandlerState.IDLE

    def test_fen(self, session: _Session) -> None:
        session.send("uci")
        session.send(f"position fen {KIWIPETE} moves e1g1")
        assert session.sent() == [NewFen(KIWIPETE, ("e1g1",))]
        assert session.state == HandlerState.WAIT_MSG

    def test_fen_without_moves(self, session: _Session) -> None:
        session.send("uci")
        session.send(f"position fen {KIWIPETE}")
        assert session.sent() == [NewFen(KIWIPETE)]

    @pytest.mark.parametrize("args", ["", "startpos e2e4", "fen", "somewhere"])
    def test_malformed_ignored(self, session: _Session, args: str) -> None:
        session.send("uci")
        session.send(f"position {args}")
        assert session.sent() == []
        assert session.state == HandlerState.READY

    def test_go_while_waiting_ignored(self, session: _Session) -> None:
        session.send("uci")
        session.send("position startpos")
        session.sent()
        session.send("go")
        assert session.sent() == []
        assert session.state == HandlerState.WAIT_MSG

    def test_idle_appends_last_move(self, idle: _Session) -> None:
        idle.send("position startpos moves e2e4 e7e5 g1f3")
        assert idle.sent() == [MakeMove("g1f3")]
        assert idle.state == HandlerState.IDLE

    def test_idle_without_moves_ignored(self, idle: _Session) -> None:
        idle.send("position startpos")
        idle.send("position startpos moves")
        assert idle.sent() == []

    def test_ucinewgame_returns_to_ready(self, idle: _Session) -> None:
        idle.send("ucinewgame")
        assert idle.state == HandlerState.READY
        idle.send("position startpos moves d2d4")
        assert idle.sent() == [StartingPosition(("d2d4",))]


class TestSearch:
    def test_go_starts_search(self, idle: _Session) -> None:
        idle.send("go")
        assert idle.sent() == [StartSearch()]
        assert idle.state == HandlerState.THINKING

    def test_go_movetime(self, idle: _Session) -> None:
        idle.send("go movetime 250")
        assert idle.sent() == [StartSearch(time_limit_ms=250)]

    def test_go_other_limits_unbounded(self, idle: _Session) -> None:
        idle.send("go wtime 1000 btime 1000")
        assert idle.sent() == [StartSearch()]

    def test_progress_reported_as_info(self, thinking: _Session) -> None:
        thinking.handler.handle(CurrentBestMove("e2e4", 35))
        assert thinking.lines() == ["info score cp 35 pv e2e4"]

    def test_final_best_move(self, thinking: _Session) -> None:
        thinking.handler.handle(FinalBestMove("d2d4"))
        assert thinking.lines() == ["bestmove d2d4"]
        assert thinking.state == HandlerState.IDLE

    def test_stop_reports_current_best(self, thinking: _Session) -> None:
        thinking.handler.handle(CurrentBestMove("g1f3", 0))
        thinking.lines()
        thinking.send("stop")
        assert thinking.lines() == ["bestmove g1f3"]
        assert thinking.sent() == [StopSearch("g1f3")]
        assert thinking.state == HandlerState.IDLE

    def test_stop_without_progress(self, thinking: _Session) -> None:
        thinking.send("stop")
        assert thinking.lines() == ["bestmove 0000"]
        assert thinking.sent() == [StopSearch("0000")]

    def test_late_best_move_dropped(self, thinking: _Session) -> None:
        thinking.send("stop")
        thinking.lines()
        thinking.handler.handle(FinalBestMove("e2e4"))
        thinking.handler.handle(CurrentBestMove("e2e4", 0))
        assert thinking.lines() == []
        assert thinking.state == HandlerState.IDLE

    def test_stop_when_idle_ignored(self, idle: _Session) -> None:
        idle.send("stop")
        assert idle.lines() == []
        assert idle.sent() == []

    def test_progress_cleared_between_searches(self, thinking: _Session) -> None:
        thinking.handler.handle(CurrentBestMove("e2e4", 0))
        thinking.handler.handle(FinalBestMove("e2e4"))
        thinking.send("go")
        thinking.lines()
        thinking.send("stop")
        assert thinking.lines() == ["bestmove 0000"]


class TestSessionEnd:
    def test_quit(self, session: _Session) -> None:
        assert session.send("quit") is False

    def test_input_closed(self, session: _Session) -> None:
        assert session.handler.handle(InputClosed()) is False

    def test_unhandled_commands_keep_running(self, session: _Session) -> None:
        assert session.send("debug on")
        assert session.send("setoption name Hash value 16")
        assert session.send("ponderhit")
        assert session.lines() == []


# ── Threaded session ─────────────────────────────────────────────────────


class _Feed:
    """Blocking line source standing in for stdin."""

    def __init__(self) -> None:
        self._lines: queue.Queue[str] = queue.Queue()

    def send(self, line: str) -> None:
        self._lines.put(line + "\n")

    def close(self) -> None:
        self._lines.put("")

    def readline(self) -> str:
        return self._lines.get()


class _Capture(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self._cond = threading.Condition()

    def write(self, s: str) -> int:
        with self._cond:
            n = super().write(s)
            self._cond.notify_all()
            return n

    def wait_for(self, text: str, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: text in self.getvalue(), timeout)


def _wait_for_state(handler: UciHandler, state: HandlerState) -> None:
    deadline = time.monotonic() + 5.0
    while handler.state != state:
        assert time.monotonic() < deadline, handler.state
        time.sleep(0.01)


class TestThreadedSession:
    def _start(self) -> tuple[UciHandler, _Feed, _Capture, threading.Thread]:
        feed, out = _Feed(), _Capture()
        handler = UciHandler(
            GreedyEngine(), name="Casey", input_stream=feed, output_stream=out
        )
        thread = threading.Thread(target=handler.run, daemon=True)
        thread.start()
        return handler, feed, out, thread

    def test_full_game_turn(self) -> None:
        handler, feed, out, thread = self._start()
        feed.send("uci")
        feed.send("isready")
        assert out.wait_for("readyok")
        feed.send("position startpos moves e2e4")
        _wait_for_state(handler, HandlerState.IDLE)
        feed.send("go")
        assert out.wait_for("bestmove")

        lines = out.getvalue().splitlines()
        reply = [line for line in lines if line.startswith("bestmove")]
        move_text = reply[0].split()[1]
        after_e4 = position_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert parse_long_algebraic(move_text, after_e4) in after_e4.legal_moves()

        feed.send("quit")
        thread.join(5.0)
        assert not thread.is_alive()

    def test_eof_ends_session(self) -> None:
        _, feed, out, thread = self._start()
        feed.send("uci")
        assert out.wait_for("uciok")
        feed.close()
        thread.join(5.0)
        assert not thread.is_alive()
