"""Unit tests for run_witness."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from witness_action.runner import run_witness


class TestRunWitness:
    """Exit status and working directory handling."""

    def test_returns_exit_code(self) -> None:
        args = ["-c", "import sys; sys.exit(7)"]

        assert run_witness(Path(sys.executable), args) == 7

    def test_runs_in_cwd(self, tmp_path: Path) -> None:
        args = ["-c", "import pathlib; pathlib.Path('marker').write_text('x')"]

        assert run_witness(Path(sys.executable), args, cwd=tmp_path) == 0
        assert (tmp_path / "marker").read_text() == "x"

    def test_missing_binary(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            run_witness(tmp_path / "witness", ["run", "--"])
