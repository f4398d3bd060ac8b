"""Tests for the layout-builder CLI commands."""

import json
import logging

import pytest

from layout_builder.cli import lib as cli_lib
from layout_builder.cli import main
from layout_builder.validation import validate_document


def _write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def exported_file(tmp_path, sample_canvas, fixed_now):
    """A valid export written to disk."""
    payload = sample_canvas.export_document(now=fixed_now).to_dict()
    return _write_json(tmp_path / "layout.json", payload)


# =============================================================================
# types
# =============================================================================


def test_types_lists_palette(capsys):
    assert main(["types"]) == 0
    out = capsys.readouterr().out
    for name in ("header", "footer", "card", "text", "slider"):
        assert name in out
    assert "Text Content" in out


# =============================================================================
# demo
# =============================================================================


def test_demo_prints_valid_document(capsys):
    assert main(["demo"]) == 0
    document = json.loads(capsys.readouterr().out)

    assert validate_document(document).is_valid
    assert document["metadata"]["totalElements"] == 6
    assert document["project"]["name"] == "Test Builder Layout"
    assert document["elements"][-1]["type"] == "header"


def test_demo_writes_output_file(tmp_path, capsys):
    target = tmp_path / "out.json"
    assert main(["demo", "--output", str(target)]) == 0

    assert capsys.readouterr().out == ""
    assert validate_document(json.loads(target.read_text(encoding="utf-8"))).is_valid


def test_demo_bare_output_uses_configured_path(tmp_path, monkeypatch):
    target = tmp_path / "configured.json"
    monkeypatch.setenv("LAYOUT_EXPORT_PATH", str(target))

    assert main(["demo", "--output"]) == 0
    assert target.exists()


def test_demo_project_name_from_env(monkeypatch, capsys):
    monkeypatch.setenv("LAYOUT_PROJECT_NAME", "Landing Page")
    assert main(["demo"]) == 0
    assert json.loads(capsys.readouterr().out)["project"]["name"] == "Landing Page"


def test_demo_project_flag_wins(monkeypatch, capsys):
    monkeypatch.setenv("LAYOUT_PROJECT_NAME", "Landing Page")
    assert main(["demo", "--project", "Pricing"]) == 0
    assert json.loads(capsys.readouterr().out)["project"]["name"] == "Pricing"


def test_demo_custom_container(capsys):
    assert main(["demo", "--width", "960", "--height", "800"]) == 0
    document = json.loads(capsys.readouterr().out)
    assert validate_document(document).is_valid


def test_demo_write_failure(tmp_path, caplog):
    target = tmp_path / "missing-dir" / "out.json"
    with caplog.at_level(logging.ERROR):
        assert main(["demo", "--output", str(target)]) == 1
    assert "Could not write export" in caplog.text
    assert not target.exists()


# =============================================================================
# validate
# =============================================================================


def test_validate_valid_file(exported_file, capsys):
    assert main(["validate", str(exported_file)]) == 0
    assert "valid" in capsys.readouterr().out


def test_validate_invalid_file(tmp_path, exported_file, capsys):
    payload = json.loads(exported_file.read_text(encoding="utf-8"))
    del payload["metadata"]
    broken = _write_json(tmp_path / "broken.json", payload)

    assert main(["validate", str(broken)]) == 1
    out = capsys.readouterr().out
    assert "1 error(s)" in out
    assert "Missing root key: metadata" in out


def test_validate_json_output(tmp_path, capsys):
    path = _write_json(tmp_path / "list.json", [])

    assert main(["validate", str(path), "--json"]) == 1
    assert json.loads(capsys.readouterr().out) == {
        "isValid": False,
        "errors": ["Root JSON is not an object."],
    }


def test_validate_json_output_valid(exported_file, capsys):
    assert main(["validate", str(exported_file), "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"isValid": True, "errors": []}


def test_validate_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main(["validate", str(tmp_path / "nope.json")]) == 2
    assert "Could not read" in caplog.text


def test_validate_not_json(tmp_path, caplog):
    path = tmp_path / "garbage.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert main(["validate", str(path)]) == 2
    assert "is not valid JSON" in caplog.text


def test_validate_not_utf8(tmp_path, caplog):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe{\x00}")
    with caplog.at_level(logging.ERROR):
        assert main(["validate", str(path)]) == 2
    assert "is not UTF-8 text" in caplog.text


# =============================================================================
# env
# =============================================================================


def test_env_shows_defaults(capsys):
    assert main(["env"]) == 0
    out = capsys.readouterr().out
    assert "LAYOUT_CONTAINER_WIDTH=1200" in out
    assert "LAYOUT_LOG_LEVEL=INFO" in out


def test_env_shows_overrides(monkeypatch, capsys):
    monkeypatch.setenv("LAYOUT_CONTAINER_WIDTH", "960")
    assert main(["env", "--category", "canvas"]) == 0
    out = capsys.readouterr().out
    assert "LAYOUT_CONTAINER_WIDTH=960" in out
    assert "LAYOUT_LOG_LEVEL" not in out


def test_env_unknown_category():
    assert main(["env", "--category", "network"]) == 1


# =============================================================================
# test / argument handling
# =============================================================================


def test_test_command_maps_tiers(monkeypatch):
    calls: list[list[str]] = []

    def fake_call(cmd):
        calls.append(cmd)
        return 0

    monkeypatch.setattr(cli_lib.subprocess, "call", fake_call)

    assert main(["test", "--unit", "-k", "resize"]) == 0
    assert calls[0][1:] == ["-m", "pytest", "-m", "unit", "-k", "resize"]


def test_missing_command_exits():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
