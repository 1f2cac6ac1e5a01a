"""Integration tests for CLI functionality."""

import json
import subprocess
import sys

from mathsteps_pkg.cli import main_entry
from mathsteps_pkg.config import VERSION


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "mathsteps_pkg", *args],
        capture_output=True,
        text=True,
        timeout=30,
    )


def test_cli_version():
    """Test --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() == VERSION


def test_cli_simplify_json():
    """Test CLI simplification with JSON output."""
    result = run_cli("--simplify", "3x + 4x", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["type"] == "simplify"
    assert data["result"] == "7x"


def test_cli_check_human():
    """Test CLI step checking with human output."""
    result = run_cli("--check", "a + b", "b + a")
    assert result.returncode == 0
    assert "Result: equivalent" in result.stdout
    assert "commutative property" in result.stdout
    assert "Values match: yes" in result.stdout


def test_cli_solve_equation():
    """Test CLI equation solving."""
    result = run_cli("--solve", "2x + 4 = 10")
    assert result.returncode == 0
    assert "Solution: x = 3" in result.stdout


def test_cli_solve_not_an_equation():
    result = run_cli("--solve", "x + 1", "--format", "json")
    assert result.returncode == 1
    data = json.loads(result.stdout)
    assert data["error_code"] == "NOT_AN_EQUATION"


def test_main_entry_in_process(capsys):
    assert main_entry(["--simplify", "2/3"]) == 0
    out = capsys.readouterr().out
    assert "Already simplified" in out
    assert "Result: 2 / 3" in out


def test_main_entry_unsolved(capsys):
    assert main_entry(["--solve", "y^2 = 4", "--var", "y"]) == 0
    assert "Could not isolate y" in capsys.readouterr().out


def test_main_entry_without_mode(capsys):
    assert main_entry([]) == 1
    assert "usage" in capsys.readouterr().out
