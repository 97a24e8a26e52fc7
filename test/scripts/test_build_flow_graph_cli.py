from __future__ import annotations

import json
import runpy
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=1)
def _load_cli_main():
    module_globals = runpy.run_path(str(Path(__file__).resolve().parents[2] / "scripts" / "build_flow_graph.py"))
    return module_globals["main"]


def _property(key: str, value: str) -> dict[str, object]:
    return {"key": key, "values": [{"value": value}]}


def _write_export(path: Path) -> Path:
    export = {
        "statements": [
            {
                "subject": "rubble",
                "predicate": "IS_INPUT_OF",
                "object": "aggregate",
                "properties": [
                    _property("processName", "Crushing"),
                    _property("flowCategory", "RECYCLING"),
                    _property("input_quantity", "100"),
                    _property("input_unit", "kg"),
                    _property("materialLossPercent", "10"),
                ],
            },
            {
                "subject": "aggregate",
                "predicate": "IS_INPUT_OF",
                "object": "concrete",
                "properties": [_property("processName", "Mixing")],
            },
        ],
        "entities": [
            {"id": "rubble", "name": "Rubble"},
            {"id": "aggregate", "name": "Aggregate"},
            {"id": "concrete", "name": "Concrete"},
        ],
    }
    path.write_text(json.dumps(export), encoding="utf-8")
    return path


def test_cli_writes_layout_payload(tmp_path) -> None:
    source = _write_export(tmp_path / "export.json")
    target = tmp_path / "out" / "graph.json"
    cli_main = _load_cli_main()
    cli_main(["--input", str(source), "--output", str(target), "--dashboard"])

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [edge["processName"] for edge in payload["edges"]] == ["Crushing"]
    assert len(payload["recyclingFlows"]) == 1
    assert payload["stats"]["recyclingRate"] == 100
    assert [item["reason"] for item in payload["diagnostics"]] == ["invalid_quantity"]
    assert payload["dashboard"]["circular_flows"] == 1
    assert payload["dashboard"]["environmental"]["average_material_loss"] == 10.0
    assert {node["id"] for node in payload["nodes"]} == {"rubble", "aggregate"}
