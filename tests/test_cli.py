"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from typer.testing import CliRunner

from principles_skill.cli import main_app

runner = CliRunner()


def test_list_prints_corpus() -> None:
    result = runner.invoke(main_app, ["skill", "list"])

    assert result.exit_code == 0
    assert "Integrity" in result.output
    assert "Reflection" in result.output


def test_invoke_prints_response(
    tmp_path: Path, make_event: Callable[..., dict[str, Any]]
) -> None:
    path = tmp_path / "stop.json"
    path.write_text(json.dumps(make_event(intent="AMAZON.StopIntent")), encoding="utf-8")

    result = runner.invoke(main_app, ["skill", "invoke", str(path)])

    assert result.exit_code == 0
    assert "outputSpeech" in result.output
    assert "Okay, goodbye!" in result.output


def test_invoke_rejects_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(main_app, ["skill", "invoke", str(path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_invoke_rejects_malformed_envelope(tmp_path: Path) -> None:
    path = tmp_path / "envelope.json"
    path.write_text(json.dumps({"request": {"type": "LaunchRequest"}}), encoding="utf-8")

    result = runner.invoke(main_app, ["skill", "invoke", str(path)])

    assert result.exit_code == 1
    assert "user id" in result.output


def test_skill_group_exposes_invoke_and_list() -> None:
    result = runner.invoke(main_app, ["skill", "--help"])

    assert result.exit_code == 0
    assert "invoke" in result.output
    assert "list" in result.output
