import io
import logging

import pytest

import termtris.__main__ as cli
from termtris.__main__ import build_parser, main, parse_args
from termtris.config import GameConfig
from termtris.pacing import TickPacer
from termtris.run_terminal import GameRunner
from termtris.terminal import KeyReader, QueueInput, raw_input_mode


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def __call__(self) -> float:
        return self.current


def _runner(keys: str = "", **config) -> GameRunner:
    clock = FakeClock()
    pacer = TickPacer(1 / 30, clock=clock, sleep=lambda _s: None)
    return GameRunner(
        GameConfig(seed=11, **config),
        source=QueueInput(keys),
        pacer=pacer,
        output=io.StringIO(),
    )


def test_quit_key_ends_run():
    runner = _runner("q")
    assert runner.run() == 0
    assert not runner.running
    assert runner.pacer.snapshot().ticks == 1
    assert runner.screen.to_ansi().startswith("\x1b[H")


def test_run_respects_tick_limit():
    runner = _runner()
    runner.run(max_ticks=5)
    assert runner.running
    assert runner.pacer.snapshot().ticks == 5
    assert runner.state.fall_timer == pytest.approx(5.0)


def test_one_key_consumed_per_tick():
    runner = _runner("aaq")
    runner.run(max_ticks=1)
    assert runner.source.pending() == 2
    anchor = runner.state.active.anchor
    assert anchor[0] == runner.state.config.spawn_position[0] - 1


def test_frames_are_presented_each_tick():
    runner = _runner()
    runner.run(max_ticks=3)
    assert runner._output.getvalue().count("\x1b[H") == 3


def test_run_logs_final_score(caplog):
    runner = _runner("q")
    with caplog.at_level(logging.INFO, logger="termtris.run_terminal"):
        runner.run()
    assert "Game stopped. Score: 0" in caplog.messages


def test_queue_input_is_non_blocking():
    source = QueueInput("ab")
    assert source.poll() == "a"
    assert source.poll() == "b"
    assert source.poll() is None


def test_key_reader_queues_characters_in_order():
    reader = KeyReader(io.StringIO("kj "))
    reader.start()
    reader._thread.join(timeout=1)
    assert [reader.poll() for _ in range(4)] == ["k", "j", " ", None]


def test_raw_input_mode_is_noop_without_terminal():
    stream = io.StringIO()
    with raw_input_mode(stream):
        pass


def test_cli_defaults():
    args = parse_args([])
    assert (args.width, args.height, args.tick_rate) == (10, 20, 30)
    assert args.seed is None


def test_cli_rejects_bad_board(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--width", "0"])
    assert exc.value.code == 2
    assert "Board dimensions" in capsys.readouterr().err


class _IdleRunner:
    def __init__(self, config) -> None:
        self.config = config

    def run(self) -> int:
        return 0


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--log-level", "DEBUG"], logging.WARNING),
        (["--log-level", "ERROR"], logging.ERROR),
        (["--log-level", "DEBUG", "--log-file", "game.log"], logging.DEBUG),
    ],
)
def test_stderr_logging_stays_at_warning_or_above(monkeypatch, argv, expected):
    calls = []
    monkeypatch.setattr(cli.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(cli, "GameRunner", _IdleRunner)
    assert main(argv) == 0
    assert calls[0]["level"] == expected
    assert calls[0]["filename"] == (argv[-1] if "--log-file" in argv else None)


def test_build_parser_matches_parse_args():
    parser = build_parser()
    assert parser.prog == "termtris"
    assert vars(parser.parse_args(["--seed", "7"])) == vars(parse_args(["--seed", "7"]))
