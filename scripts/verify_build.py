#!/usr/bin/env python3
"""
Verify a CSS tic-tac-toe build directory.

Checks performed:
- manifest.json exists and is parseable
- State counts in manifest are positive (>0)
- Files listed in manifest exist and match their SHA-256 checksums
- Each page holds one radio input per state plus the start board
- Every label on a page points at an input on the same page
- State CSVs, when present, have one row per state

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import csv
import hashlib
import json
import re
import sys
from pathlib import Path
from typing import Any, Dict

INPUT_ID = re.compile(r'<input type="radio" name="game-state" id="([^"]*)"')
LABEL_FOR = re.compile(r'<label for="([^"]*)"')


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def count_csv_rows(path: Path) -> int:
    with path.open('r', newline='') as f:
        reader = csv.reader(f)
        # subtract header
        return sum(1 for _ in reader) - 1


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify CSS tic-tac-toe build output")
    ap.add_argument("out", type=Path, help="Build directory (contains manifest.json)")
    ns = ap.parse_args(argv)
    out = ns.out
    manifest_path = out / "manifest.json"
    if not manifest_path.exists():
        print(f"ERROR: manifest not found: {manifest_path}", file=sys.stderr)
        return 2
    try:
        manifest = json.loads(manifest_path.read_text())
    except json.JSONDecodeError as e:
        print(f"ERROR: failed to parse manifest: {e}", file=sys.stderr)
        return 2

    ok = True
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}
    variants: Dict[str, Any] = manifest.get("variants", {}) or {}

    for name, info in variants.items():
        if not isinstance(info.get("states"), int) or info["states"] <= 0:
            print(f"ERROR: variants.{name}.states must be a positive integer", file=sys.stderr)
            ok = False

    for label, rel in files.items():
        fp = out / rel
        if not fp.exists():
            print(f"ERROR: missing file listed in manifest: {label} -> {fp}", file=sys.stderr)
            ok = False
            continue
        want = checksums.get(label)
        have = sha256_file(fp)
        if want != have:
            print(f"ERROR: checksum mismatch for {label}: manifest={want} computed={have}", file=sys.stderr)
            ok = False

    for name, info in variants.items():
        page = files.get(f"{name}_page")
        if page and (out / page).exists():
            html = (out / page).read_text(encoding="utf-8")
            ids = INPUT_ID.findall(html)
            if len(ids) != info.get("states", 0) + 1:
                print(f"ERROR: {name} page has {len(ids)} inputs, expected {info.get('states', 0) + 1}",
                      file=sys.stderr)
                ok = False
            dangling = set(LABEL_FOR.findall(html)) - set(ids)
            if dangling:
                print(f"ERROR: {name} page has {len(dangling)} labels without a target input", file=sys.stderr)
                ok = False
        states_csv = files.get(f"{name}_states_csv")
        if states_csv and (out / states_csv).exists():
            n = count_csv_rows(out / states_csv)
            if n != info.get("states"):
                print(f"ERROR: {name} states row count mismatch: manifest={info.get('states')} actual={n}",
                      file=sys.stderr)
                ok = False

    if not ok:
        return 1
    print("OK: build verified", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
