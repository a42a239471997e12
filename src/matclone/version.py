"""Package version lookup."""
from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path
from typing import Optional

DISTRIBUTION_NAME = "matclone"
PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"

_PROJECT_TABLE = re.compile(
    r"^\[project\]\s*$(.*?)(?=^\[|\Z)", re.MULTILINE | re.DOTALL
)
_VERSION_LINE = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def _version_from_pyproject(path: Path = PYPROJECT_PATH) -> Optional[str]:
    """Read ``version`` from the ``[project]`` table of a source checkout."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return None
    table = _PROJECT_TABLE.search(content)
    match = _VERSION_LINE.search(table.group(1)) if table else None
    return match.group(1) if match else None


def get_version() -> str:
    """Return the installed version, or the checkout's when not installed."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _version_from_pyproject() or "unknown"


__all__ = ["get_version"]
