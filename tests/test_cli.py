"""Tests for the command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from unittest.mock import patch

import orjson
import pytest

from neaparse.cli import main
from neaparse.models import User

from .conftest import deep_install_json, find_raw_keys


@pytest.fixture
def installation_file(tmp_path: Path, installation_document: dict[str, Any]) -> Path:
    path = tmp_path / "installationdata.json"
    path.write_bytes(orjson.dumps(installation_document))
    return path


@pytest.fixture
def user_data_file(tmp_path: Path, user_data_document: dict[str, Any]) -> Path:
    path = tmp_path / "userdata.json"
    path.write_bytes(orjson.dumps(user_data_document))
    return path


def test_installation_full_output(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["installation", str(installation_file)]) == 0
    output = orjson.loads(capsys.readouterr().out)
    assert output["email"] == "e@x.com"
    assert len(output["installations"]) == 2
    assert output["installations"][0]["raw"]["unique"] == "ABC"


def test_installation_typed_output(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["installation", str(installation_file), "--typed"]) == 0
    output = orjson.loads(capsys.readouterr().out)
    assert output["installations"][0]["name"] == "Home"
    assert find_raw_keys(output) == []


def test_installation_summary_output(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["installation", str(installation_file), "--summary"]) == 0
    out = capsys.readouterr().out
    assert "User: e@x.com (u1)" in out
    assert "Installations: 2" in out


def test_installation_unique_filter(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    args = ["installation", str(installation_file), "--typed", "--unique", "DEF"]
    assert main(args) == 0
    output = orjson.loads(capsys.readouterr().out)
    assert [install["unique"] for install in output["installations"]] == ["DEF"]


def test_installation_unknown_unique_is_empty(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    args = ["installation", str(installation_file), "--typed", "--unique", "ZZZ"]
    assert main(args) == 0
    assert orjson.loads(capsys.readouterr().out)["installations"] == []


def test_installation_v1(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["installation", str(installation_file), "--v1", "--summary"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Installation: Home (ABC)")


def test_installation_v1_unknown_unique(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    args = ["installation", str(installation_file), "--v1", "--unique", "ZZZ"]
    assert main(args) == 0
    assert orjson.loads(capsys.readouterr().out) is None
    assert main([*args, "--summary"]) == 0
    assert capsys.readouterr().out.strip() == "No matching installation"


def test_installation_deeply_nested_entry(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "deep.json"
    path.write_text(deep_install_json())
    assert main(["installation", str(path), "--typed"]) == 0
    output = orjson.loads(capsys.readouterr().out)
    assert [install["unique"] for install in output["installations"]] == [
        "BAD",
        "ABC",
    ]
    assert main(["installation", str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: Cannot encode output")


def test_userdata_summary(
    user_data_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["userdata", str(user_data_file), "--summary"]) == 0
    assert "Weekly Programs: 1" in capsys.readouterr().out


def test_userdata_typed(
    user_data_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["userdata", str(user_data_file), "--typed"]) == 0
    output = orjson.loads(capsys.readouterr().out)
    assert find_raw_keys(output) == []


def test_compare(
    tmp_path: Path,
    single_install_document: dict[str, Any],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = tmp_path / "single.json"
    path.write_bytes(orjson.dumps(single_install_document))
    assert main(["compare", str(path)]) == 0
    out = capsys.readouterr().out
    assert "PARSER COMPARISON" in out
    assert "[PASS] channels: V1=4 V2=4" in out
    assert "checks passed" in out


def test_compare_unknown_unique(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["compare", str(installation_file), "--unique", "ZZZ"]) == 0
    out = capsys.readouterr().out
    assert "[PASS] installation: V1=None V2=None" in out
    assert "All 1 checks passed" in out


def test_compare_reports_failures(
    installation_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("neaparse.cli.InstallationDataParserV2.parse") as mock_parse:
        mock_parse.return_value = User()
        assert main(["compare", str(installation_file)]) == 0
    out = capsys.readouterr().out
    assert "[FAIL] installation" in out
    assert "1 of 1 checks failed" in out


def test_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["installation", str(tmp_path / "nope.json")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_malformed_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert main(["installation", str(path)]) == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_structural_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "empty.json"
    path.write_bytes(orjson.dumps({"success": True, "data": {}}))
    assert main(["installation", str(path)]) == 1
    assert "data.user" in capsys.readouterr().err


def test_summary_and_typed_are_exclusive(installation_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["installation", str(installation_file), "--summary", "--typed"])
    assert excinfo.value.code == 2


def test_help_exits_zero(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "installation" in capsys.readouterr().out


def test_debug_mode(installation_file: Path) -> None:
    with patch("neaparse.cli.logging.basicConfig") as mock_logging:
        main(["--debug", "installation", str(installation_file), "--summary"])
    mock_logging.assert_called_once()
    assert mock_logging.call_args[1]["level"] == logging.DEBUG
