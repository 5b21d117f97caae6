#!/usr/bin/env python3
"""Export a ground overlay YAML snapshot as the JSON sent to the map host."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ground_overlay.services.overlay_serializer import (  # noqa: E402
    OverlayDocumentError,
    dump_overlay_json,
    load_overlay_yaml,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a ground overlay YAML snapshot to JSON")
    parser.add_argument("overlay_yaml", type=Path, help="Path to the overlay YAML snapshot")
    parser.add_argument("--json", type=Path, default=None, help="Destination JSON file (stdout if omitted)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = parser.parse_args()
    return args


def main() -> int:
    args = parse_args()
    try:
        result = load_overlay_yaml(args.overlay_yaml)
    except OverlayDocumentError as exc:
        print(f"Unable to load overlay: {exc}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)

    try:
        json_text = dump_overlay_json(result.overlay, indent=args.indent)
    except OverlayDocumentError as exc:
        print(f"Unable to export overlay: {exc}", file=sys.stderr)
        return 1

    if args.json is None:
        print(json_text)
        return 0

    args.json.parent.mkdir(parents=True, exist_ok=True)
    args.json.write_text(json_text + "\n", encoding="utf-8")
    print(f"Overlay JSON written to {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
