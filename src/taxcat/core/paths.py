"""Utilities for locating the runtime data directory and working-directory files."""

from __future__ import annotations

import os
from pathlib import Path

_ENV_VAR = "TAXCAT_DATA_DIR"
_DEFAULT_DIRNAME = ".taxcat"
_REPO_ROOT = Path(__file__).resolve().parents[3]


def get_data_dir() -> Path:
    """Return the configured runtime data directory.

    Honors the TAXCAT_DATA_DIR environment variable; otherwise defaults
    to ~/.taxcat on the current platform.
    """
    override = os.getenv(_ENV_VAR)
    if override is not None:
        cleaned = override.strip()
        if not cleaned:
            return (_REPO_ROOT / _DEFAULT_DIRNAME).resolve()
        candidate = Path(cleaned).expanduser()
        if not candidate.is_absolute():
            candidate = (_REPO_ROOT / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate
    return (Path.home() / _DEFAULT_DIRNAME).resolve()


def resolve_output_file(path: str, ensure_parent: bool = False) -> Path:
    """Resolve a configured output file path.

    Absolute paths are used as-is. Relative paths are interpreted relative to
    the current working directory, which is where the results file of a run
    is expected to land.
    """
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    if ensure_parent:
        candidate.parent.mkdir(parents=True, exist_ok=True)
    return candidate


__all__ = [
    "get_data_dir",
    "resolve_output_file",
]
