from __future__ import annotations

import json
from pathlib import Path

import pytest

from carton_packer.cli import main


def test_cli_round_trip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    request = {
        "items": [{"id": "T", "qty": 5, "dim": [10, 10, 30]}],
        "containers": [{"id": "C", "qty": 1, "dim": [20, 20, 30]}],
    }
    input_path = tmp_path / "request.json"
    input_path.write_text(json.dumps(request), encoding="utf-8")
    output_path = tmp_path / "out" / "result.json"

    assert main(["--input", str(input_path), "--output", str(output_path)]) == 0

    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert len(result["containers"]) == 1
    assert len(result["unpacked_items"]) == 1

    out = capsys.readouterr().out
    assert "Packed units    : 4" in out
    assert "Unpacked units  : 1" in out


def test_cli_threshold_override(tmp_path: Path) -> None:
    request = {
        "items": [{"id": "T", "qty": 4, "dim": [10, 10, 30]}],
        "containers": [{"id": "C", "qty": 1, "dim": [20, 20, 30]}],
    }
    input_path = tmp_path / "request.json"
    input_path.write_text(json.dumps(request), encoding="utf-8")
    output_path = tmp_path / "result.json"

    assert main(["--input", str(input_path), "--output", str(output_path), "--threshold", "0"]) == 0
    assert json.loads(output_path.read_text(encoding="utf-8"))["unpacked_items"] == []


def test_cli_rejects_malformed_input(tmp_path: Path) -> None:
    input_path = tmp_path / "request.json"
    input_path.write_text(json.dumps({"items": "nope"}), encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--input", str(input_path), "--output", str(tmp_path / "result.json")])

    assert exc.value.code == 2


def test_cli_adds_box_presets(tmp_path: Path) -> None:
    input_path = tmp_path / "request.json"
    input_path.write_text(json.dumps({"items": [{"id": "A", "qty": 2, "dim": [10, 10, 10]}]}), encoding="utf-8")
    output_path = tmp_path / "result.json"

    code = main(["--input", str(input_path), "--output", str(output_path), "--box-preset", "medium", "--box-qty", "2"])

    assert code == 0
    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert [c["id"] for c in result["containers"]] == ["Medium carton"]
    assert result["containers"][0]["dim"] == {"length": 39, "width": 29, "height": 24}
    assert len(result["containers"][0]["items"]) == 2


def test_cli_rejects_unknown_box_preset(tmp_path: Path) -> None:
    input_path = tmp_path / "request.json"
    input_path.write_text(json.dumps({"items": []}), encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--input", str(input_path), "--output", str(tmp_path / "result.json"), "--box-preset", "giant"])

    assert exc.value.code == 2
