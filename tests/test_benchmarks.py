from pathlib import Path

import pytest

pytest.importorskip("pytest_benchmark")

from csstictactoe.build import BuildArgs, run_build
from csstictactoe.enumerator import enumerate_states
from csstictactoe.variants import TWO_PLAYER


def test_benchmark_enumerate_two_player(benchmark):
    space = benchmark(enumerate_states, TWO_PLAYER)
    assert len(space) == 5477


def test_benchmark_one_player_build(tmp_path: Path, benchmark):
    def _build():
        return run_build(BuildArgs(out=tmp_path / "bench", variants=["one-player"]))

    out = benchmark(_build)
    assert (out / "index.html").exists()
