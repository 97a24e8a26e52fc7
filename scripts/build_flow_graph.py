#!/usr/bin/env python
"""Build the layered material flow graph from a statement/entity JSON export."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

from material_flow_graph.core.logging import configure_logging
from material_flow_graph.flow_stats import summarize_dashboard
from material_flow_graph.workflow import build_flow_graph, compute_layout


def _parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON file with `statements` and `entities` arrays.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write the layout payload (default: stdout).",
    )
    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Include the dashboard KPI summary under `dashboard`.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(list(argv) if argv is not None else None)


def _load_export(path: Path) -> tuple[Any, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SystemExit(f"Expected a JSON object in {path}")
    return data.get("statements") or [], data.get("entities") or []


def main(argv: Iterable[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.log_level)
    statements, entities = _load_export(args.input)

    graph = build_flow_graph(statements, entities)
    payload = compute_layout(graph).to_payload()
    payload["diagnostics"] = [asdict(item) for item in graph.diagnostics]
    if args.dashboard:
        dashboard = summarize_dashboard(graph.edges)
        summary = asdict(dashboard)
        summary["environmental"]["average_material_loss"] = dashboard.environmental.average_material_loss
        payload["dashboard"] = summary

    text = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    if args.output is None:
        print(text)
        return
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(f"{text}\n", encoding="utf-8")
    print(f"Flow graph written to {args.output}")


if __name__ == "__main__":
    main()
