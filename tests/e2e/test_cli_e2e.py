from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess and checks exit codes,
stdout, and the materialized file, including write avoidance across
separate process runs.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "gentree" / "main.py"


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Isolated HOME so the user data directory lands in the sandbox."""
    home = tmp_path / "home"
    home.mkdir()
    return home


def run_cli(args: List[str], home: Path, stdin: bytes = b"") -> subprocess.CompletedProcess[bytes]:
    """
    Execute the CLI in a separate process.

    Args:
        args: Command line arguments (excluding interpreter and script path).
        home: Value of HOME/LOCALAPPDATA for the child process.
        stdin: Bytes fed to the child's standard input.

    Returns:
        subprocess.CompletedProcess: Result with returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        input=stdin,
        env=env,
        capture_output=True,
    )


def test_e2e_materialize_from_stdin(tmp_path: Path, home_dir: Path) -> None:
    out = tmp_path / "out"

    result = run_cli(["-o", str(out), "-n", "hello.txt", "--json"], home_dir, stdin=b"hello")

    assert result.returncode == 0, result.stderr.decode()
    payload = json.loads(result.stdout)
    assert payload["path"] == str(out / "hello.txt")
    assert payload["size"] == 5
    assert (out / "hello.txt").read_bytes() == b"hello"


def test_e2e_unchanged_content_keeps_mtime(tmp_path: Path, home_dir: Path) -> None:
    out = tmp_path / "out"
    argv = ["-o", str(out), "-n", "manifest.json", "--json"]

    assert run_cli(argv, home_dir, stdin=b'{"v": 1}\n').returncode == 0
    target = out / "manifest.json"
    os.utime(target, ns=(1_600_000_000_000_000_000, 1_600_000_000_000_000_000))

    second = run_cli(argv, home_dir, stdin=b'{"v": 1}\n')

    assert second.returncode == 0
    payload = json.loads(second.stdout)
    assert payload["written"] is False
    assert payload["last_modified"] == 1_600_000_000
    assert os.stat(target).st_mtime_ns == 1_600_000_000_000_000_000


def test_e2e_changed_content_rewrites(tmp_path: Path, home_dir: Path) -> None:
    out = tmp_path / "out"
    argv = ["-o", str(out), "-n", "manifest.json"]

    run_cli(argv, home_dir, stdin=b"hello")
    result = run_cli(argv, home_dir, stdin=b"world")

    assert result.returncode == 0
    assert result.stdout.decode().startswith("written:")
    assert (out / "manifest.json").read_bytes() == b"world"


def test_e2e_missing_source(tmp_path: Path, home_dir: Path) -> None:
    result = run_cli(
        ["-o", str(tmp_path), "-n", "x.txt", "-s", str(tmp_path / "missing.json")], home_dir
    )

    assert result.returncode == 2
    assert b"does not exist" in result.stderr


def test_e2e_help(home_dir: Path) -> None:
    result = run_cli(["--help"], home_dir)

    assert result.returncode == 0
    assert b"gentree" in result.stdout
