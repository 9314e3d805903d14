"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from openapi_builder.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["render", "--output", "/tmp/openapi.yaml"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate-config", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_render_errors_are_reported_without_traceback(tmp_path: Path, capsys) -> None:
    exit_code = main(["render", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    existing = tmp_path / "openapi-builder.yaml"
    existing.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(existing)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert existing.read_text(encoding="utf-8") == "existing"
