from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs main() in-process with an injected stdin stream and an isolated user
data directory.
"""

import io
import json
import os
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from gentree.infra.logging import shutdown_logging
from gentree.interface.cli.app import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path) -> Generator[None, None, None]:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    with patch("gentree.domain.config.get_user_data_dir", return_value=str(data_dir)):
        yield
    shutdown_logging()


def test_materializes_stdin(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"

    code = main(["-o", str(out), "-n", "hello.txt", "--json"], stdin=io.BytesIO(b"hello"))

    assert code == EXIT_OK
    assert (out / "hello.txt").read_bytes() == b"hello"
    result = json.loads(capsys.readouterr().out)
    assert result["size"] == 5
    assert result["written"] is True


def test_second_run_reports_unchanged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"
    argv = ["-o", str(out), "-n", "hello.txt"]

    main(argv, stdin=io.BytesIO(b"hello"))
    capsys.readouterr()
    code = main(argv, stdin=io.BytesIO(b"hello"))

    assert code == EXIT_OK
    assert capsys.readouterr().out.startswith("unchanged:")


def test_materializes_source_file(tmp_path: Path) -> None:
    source = tmp_path / "input.json"
    source.write_bytes(b'{"a": 1}\n')
    out = tmp_path / "out"

    code = main(["-o", str(out), "-n", "manifest.json", "-s", str(source)])

    assert code == EXIT_OK
    assert (out / "manifest.json").read_bytes() == b'{"a": 1}\n'


def test_missing_name_is_usage_error(tmp_path: Path) -> None:
    assert main(["-o", str(tmp_path)], stdin=io.BytesIO(b"")) == EXIT_USAGE


def test_missing_source_is_usage_error(tmp_path: Path) -> None:
    code = main(["-o", str(tmp_path), "-n", "x.txt", "-s", str(tmp_path / "missing")])

    assert code == EXIT_USAGE


def test_dry_run_creates_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"

    code = main(["-o", str(out), "-n", "x.txt", "--dry-run"], stdin=io.BytesIO(b"data"))

    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == os.path.join(str(out), "x.txt")
    assert not out.exists()


def test_dump_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["-o", str(tmp_path), "-n", "x.txt", "--dump-config"])

    assert code == EXIT_OK
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["file_name"] == "x.txt"
    assert dumped["output_dir"] == str(tmp_path)


def test_config_file_supplies_defaults(tmp_path: Path) -> None:
    out = tmp_path / "from_config"
    config = tmp_path / "cfg.json"
    config.write_text(json.dumps({"output_dir": str(out), "file_name": "c.txt"}), encoding="utf-8")

    code = main(["--config", str(config)], stdin=io.BytesIO(b"cfg"))

    assert code == EXIT_OK
    assert (out / "c.txt").read_bytes() == b"cfg"


def test_generation_failure_exit_code(tmp_path: Path) -> None:
    source = tmp_path / "input.txt"
    source.write_bytes(b"data")

    with patch("gentree.interface.cli.app.file_copy_generator") as factory:
        def broken(sink):
            raise OSError("source vanished")
        factory.return_value = broken

        code = main(["-o", str(tmp_path / "out"), "-n", "x.txt", "-s", str(source)])

    assert code == EXIT_FAILURE
