"""
Build tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it never becomes a
hard dependency. Every helper is a no-op when MLflow is missing or fails.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False otherwise."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("MLflow is not installed; continuing without tracking")
        yield False
        return
    try:
        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("Could not start MLflow run (%s: %s); continuing without tracking",
                        type(e).__name__, e)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
    except Exception as e:
        logging.debug("log_params skipped: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)
    except Exception as e:
        logging.debug("log_metrics skipped: %s", e)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception as e:
        logging.debug("log_artifact skipped: %s", e)
