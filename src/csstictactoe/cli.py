from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .build import STATES_FORMATS, BuildArgs, run_build
from .enumerator import DepthLimitExceeded
from .game_basics import InvalidStateError, get_winner, legal_moves, parse_state
from .opponent import explain_computer_move
from .paths import dist_dir
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run
from .variants import VARIANTS, get_variant


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="css-ttt", description="CSS-only tic-tac-toe site builder")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_build = sub.add_parser("build", help="Enumerate every state and write the static pages")
    p_build.add_argument(
        "--out", type=Path, default=None, help="Output directory (default: $CSSTTT_DIST or ./dist)"
    )
    p_build.add_argument(
        "--variant",
        choices=[*VARIANTS, "all"],
        default="all",
        help="Which page to build (default: all)",
    )
    p_build.add_argument(
        "--max-depth", type=int, default=None, help="Abort if enumeration needs more levels than this"
    )
    p_build.add_argument(
        "depth", nargs="?", type=int, default=None, help="Same as --max-depth"
    )
    p_build.add_argument(
        "--states-format",
        choices=STATES_FORMATS,
        default="none",
        help="Also export a per-state table: csv, parquet (needs pandas+pyarrow), both",
    )
    p_build.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_build.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_move = sub.add_parser("move", help="Show the computer's reply to a one-player state")
    p_move.add_argument("--state", required=True, help='State string, e.g. "g5 r1 r9"')

    p_out = sub.add_parser("outcome", help="Show canonical form, outcome and legal moves of a state")
    p_out.add_argument("--state", required=True, help='State string, e.g. "r1-g5-r9"')
    p_out.add_argument("--variant", choices=list(VARIANTS), default="one-player")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["jinja2", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _resolve_depth(ns: argparse.Namespace) -> Optional[int]:
    if ns.max_depth is not None and ns.depth is not None and ns.max_depth != ns.depth:
        raise ValueError(f"Conflicting depth limits: --max-depth {ns.max_depth} and {ns.depth}")
    depth = ns.max_depth if ns.max_depth is not None else ns.depth
    if depth is not None and depth < 1:
        raise ValueError(f"Depth limit must be at least 1: {depth}")
    return depth


def _build(ns: argparse.Namespace, argv: list[str] | None) -> int:
    try:
        max_depth = _resolve_depth(ns)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    variants = list(VARIANTS) if ns.variant == "all" else [ns.variant]
    out = ns.out if ns.out is not None else dist_dir()
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="build", log_dir=ns.log_dir) as tracking:
        try:
            out = run_build(BuildArgs(
                out=out,
                variants=variants,
                max_depth=max_depth,
                states_format=ns.states_format,
                verbose=ns.verbose,
                cli_argv=list(argv) if argv is not None else None,
            ))
        except DepthLimitExceeded as e:
            logging.error("%s; nothing was written", e)
            return 3
        except RuntimeError as e:
            logging.error("%s", e)
            return 2
        if tracking:
            log_params({"variants": ",".join(variants), "max_depth": max_depth,
                        "states_format": ns.states_format})
            log_artifact(out / "manifest.json")
            manifest = json.loads((out / "manifest.json").read_text())
            log_metrics({f"states_{name}": float(info["states"])
                         for name, info in manifest["variants"].items()})
    logging.info("Built site in: %s", out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("css-tic-tac-toe"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "build":
        return _build(ns, argv)

    if ns.cmd == "move":
        try:
            state = parse_state(ns.state, after_human=True)
        except InvalidStateError as e:
            logging.error("%s", e)
            return 2
        cell, rule = explain_computer_move(state)
        if cell is None:
            logging.info("state=%r game over outcome=%s", state, get_winner(state))
        else:
            logging.info("state=%r move=%d rule=%s", state, cell, rule)
        return 0

    if ns.cmd == "outcome":
        variant = get_variant(ns.variant)
        try:
            state = parse_state(ns.state, variant.delimiter)
        except InvalidStateError as e:
            logging.error("%s", e)
            return 2
        logging.info(
            "canonical=%r outcome=%s legal=%s",
            state,
            get_winner(state) or "none",
            legal_moves(state),
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
