"""
Static site build: enumerate, render, write.

All requested variants are enumerated before anything touches the disk, so
a depth-limit overrun leaves no partial output behind.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .enumerator import StateSpace, enumerate_states, transitions
from .game_basics import CELLS, get_winner, split_tokens
from .paths import get_git_commit, get_git_is_dirty
from .render import render_page, render_stylesheet
from .variants import VARIANTS, get_variant

BUILD_VERSION = "1.0.0"
STATES_FORMATS = ("none", "csv", "parquet", "both")


@dataclass
class BuildArgs:
    out: Path
    variants: List[str] = field(default_factory=lambda: list(VARIANTS))
    max_depth: Optional[int] = None
    states_format: str = "none"  # one of STATES_FORMATS
    verbose: bool = False
    cli_argv: List[str] | None = None


def state_rows(space: StateSpace) -> List[Dict[str, Any]]:
    """One row per state: outcome, token count, depth and the 9 targets."""
    rows: List[Dict[str, Any]] = []
    for state in space.states:
        row: Dict[str, Any] = {
            'state': state,
            'depth': space.depth_of(state),
            'moves': len(split_tokens(state)),
            'outcome': get_winner(state) or '',
        }
        for cell, target in zip(CELLS, transitions(state, space.variant)):
            row[f'next_{cell}'] = target
        rows.append(row)
    return rows


def outcome_split(space: StateSpace) -> Dict[str, int]:
    counts = Counter(get_winner(s) or 'none' for s in space.states)
    return {k: counts.get(k, 0) for k in ('r', 'g', 'd', 'none')}


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _have_parquet_deps() -> bool:
    return (importlib.util.find_spec('pandas') is not None
            and importlib.util.find_spec('pyarrow') is not None)


def write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    fnames = list(rows[0].keys()) if rows else ['state']
    with path.open('w', newline='') as f:
        w = csv.DictWriter(f, fieldnames=fnames)
        w.writeheader()
        for r in rows:
            w.writerow(r)


def write_parquet(path: Path, rows: List[Dict[str, Any]]) -> None:
    import pandas as pd  # type: ignore

    pd.DataFrame(rows).to_parquet(path)


def run_build(args: BuildArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.states_format or "none").lower()
    if fmt not in STATES_FORMATS:
        raise ValueError(f"Unknown states format: {args.states_format}")
    if fmt == "parquet" and not _have_parquet_deps():
        # Strict: only parquet was asked for; fail before writing anything
        raise RuntimeError(
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )
    variants = [get_variant(name) for name in args.variants]

    spaces: List[StateSpace] = []
    for variant in variants:
        logging.info("Building CSS tic-tac-toe (%s)…", variant.name)
        spaces.append(enumerate_states(variant, max_depth=args.max_depth))

    args.out.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}

    stylesheet = args.out / "styles.css"
    stylesheet.write_text(render_stylesheet(), encoding="utf-8")
    written["styles"] = stylesheet

    for space in spaces:
        variant = space.variant
        logging.info("Mapping %d %s states to boards…", len(space), variant.name)
        page = args.out / Path(*variant.output_path.parts)
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(render_page(space), encoding="utf-8")
        written[f"{variant.name}_page"] = page
        logging.info("Wrote %s", page)

        if fmt == "none":
            continue
        rows = state_rows(space)
        stem = f"states_{variant.name.replace('-', '_')}"
        if fmt in {"csv", "both"}:
            path = args.out / f"{stem}.csv"
            write_csv(path, rows)
            written[f"{variant.name}_states_csv"] = path
            logging.info("Wrote %s (%d rows)", path, len(rows))
        if fmt in {"parquet", "both"}:
            if not _have_parquet_deps():
                logging.warning(
                    "Parquet dependencies not available; proceeding with CSV only for %s.",
                    variant.name,
                )
                continue
            path = args.out / f"{stem}.parquet"
            write_parquet(path, rows)
            written[f"{variant.name}_states_parquet"] = path
            logging.info("Wrote %s", path)

    manifest = {
        "build_version": BUILD_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "variants": [v.name for v in variants],
            "max_depth": args.max_depth,
            "states_format": fmt,
        },
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python_version": sys.version.split(" ")[0],
        "cli_argv": args.cli_argv,
        "variants": {
            space.variant.name: {
                "states": len(space),
                "level_sizes": space.level_sizes,
                "outcomes": outcome_split(space),
            }
            for space in spaces
        },
        "files": {label: str(p.relative_to(args.out)) for label, p in written.items()},
        "checksums": {label: sha256_file(p) for label, p in written.items()},
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")
    return args.out
