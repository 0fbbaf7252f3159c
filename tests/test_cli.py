from __future__ import annotations

import json
from pathlib import Path

import pytest

from mapmark.cli import _run, build_parser, main


@pytest.fixture(autouse=True)
def _workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _add(capsys: pytest.CaptureFixture[str], *extra: str) -> str:
    assert main(["--backend", "local", "add", "--type", "view", "--lng", "121.6", "--lat", "38.9", *extra]) == 0
    return capsys.readouterr().out.strip()


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args([])

    assert exc_info.value.code == 2


def test_parser_rejects_non_object_info() -> None:
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["add", "--type", "view", "--lng", "1", "--lat", "2", "--info", "[1]"])

    assert exc_info.value.code == 2


def test_parser_import_flags() -> None:
    args = build_parser().parse_args(["--backend", "host", "import", "in.json", "--avoid-overwrite"])

    assert args.backend == "host"
    assert args.file == "in.json"
    assert args.avoid_overwrite is True


def test_add_then_show(capsys: pytest.CaptureFixture[str]) -> None:
    marker_id = _add(capsys, "--info", '{"note": "A"}')

    assert main(["--backend", "local", "show", marker_id]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["id"] == marker_id
    assert shown["info"] == {"note": "A"}


def test_list_reports_marker_count(capsys: pytest.CaptureFixture[str]) -> None:
    _add(capsys)
    _add(capsys)

    assert main(["--backend", "local", "list"]) == 0
    assert "2 marker(s)" in capsys.readouterr().out


def test_update_changes_existing_marker(capsys: pytest.CaptureFixture[str]) -> None:
    marker_id = _add(capsys)

    exit_code = main(
        ["--backend", "local", "update", marker_id, "--type", "food", "--lng", "1", "--lat", "2", "--info", "{}"]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == marker_id
    main(["--backend", "local", "show", marker_id])
    assert json.loads(capsys.readouterr().out)["type"] == "food"


def test_update_unknown_marker_fails(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--backend", "local", "update", "missing", "--type", "view", "--lng", "1", "--lat", "2"])

    assert exit_code == 4
    assert "Marker not found: missing" in capsys.readouterr().err


def test_show_unknown_marker_fails(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--backend", "local", "show", "missing"]) == 4
    assert "Marker not found" in capsys.readouterr().err


def test_delete_then_delete_again(capsys: pytest.CaptureFixture[str]) -> None:
    marker_id = _add(capsys)

    assert main(["--backend", "local", "delete", marker_id]) == 0
    assert main(["--backend", "local", "delete", marker_id]) == 4
    assert "Delete failed: Marker not found" in capsys.readouterr().err


def test_export_and_import_with_host_backend(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    assert main(["--backend", "host", "add", "--type", "view", "--lng", "121.6", "--lat", "38.9"]) == 0
    assert (tmp_path / "data" / "markers.json").exists()

    assert main(["--backend", "host", "export", "."]) == 0
    [snapshot] = tmp_path.glob("map-record-*.json")

    assert main(["--backend", "host", "import", str(snapshot)]) == 0
    assert "(0 new, 1 overwritten)" in capsys.readouterr().err

    assert main(["--backend", "host", "import", str(snapshot), "--avoid-overwrite"]) == 0
    assert "(1 new, 1 duplicate id(s) renamed)" in capsys.readouterr().err
    document = json.loads((tmp_path / "data" / "markers.json").read_text(encoding="utf-8"))
    assert len(document["markers"]) == 2


def test_import_of_invalid_snapshot_fails(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    source = tmp_path / "bad.json"
    source.write_text('{"version": "1.0"}', encoding="utf-8")

    assert main(["--backend", "local", "import", str(source)]) == 4
    assert "must contain a 'markers' array" in capsys.readouterr().err


def test_config_file_selects_backend(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    config_path = tmp_path / "conf" / "mapmark.json"
    config_path.parent.mkdir()
    config_path.write_text(json.dumps({"backend": "host", "data_dir": "store"}), encoding="utf-8")

    assert main(["--config", str(config_path), "add", "--type", "view", "--lng", "1", "--lat", "2"]) == 0
    assert (tmp_path / "conf" / "store" / "markers.json").exists()


def test_invalid_config_exits_with_config_code(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    config_path = tmp_path / "mapmark.json"
    config_path.write_text("{not json", encoding="utf-8")

    assert main(["--config", str(config_path), "list"]) == 3
    assert "invalid JSON" in capsys.readouterr().err


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["show", "missing"], "Marker not found: missing"),
        (["update", "missing", "--type", "view", "--lng", "1", "--lat", "2"], "Marker not found: missing"),
        (["delete", "missing"], "Delete failed: Marker not found"),
        (["import", "absent.json"], "Import failed: could not read absent.json"),
    ],
)
async def test_every_failure_is_reported_once_through_the_notifier(
    argv: list[str], expected: str, notifier, capsys: pytest.CaptureFixture[str]
) -> None:
    args = build_parser().parse_args(["--backend", "local", *argv])

    assert await _run(args, notifier=notifier) == 4
    assert notifier.errors == [expected]
    assert capsys.readouterr().err == ""
