"""Default output locations, anchored on the nearest marked ancestor directory."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

DEFAULT_MAX_DEPTH = 8
SOUNDS_DIRNAME = "sounds"
XC_DIRNAME = "xeno-canto"
INDEX_FILENAME = "index.json"


def find_anchor(marker: str, start: Optional[Path] = None, max_depth: int = DEFAULT_MAX_DEPTH) -> Optional[Path]:
    """Return the nearest directory at or above ``start`` that contains ``marker``.

    At most ``max_depth`` parents are inspected beyond ``start`` itself.
    """
    current = (start or Path.cwd()).resolve()
    for _ in range(max_depth + 1):
        if (current / marker).exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return None


def default_paths(marker: str, start: Optional[Path] = None, max_depth: int = DEFAULT_MAX_DEPTH) -> Tuple[Path, Path]:
    """Output directory and index path used when neither is configured."""
    root = find_anchor(marker, start, max_depth) or (start or Path.cwd())
    sounds = root / SOUNDS_DIRNAME
    return sounds / XC_DIRNAME, sounds / INDEX_FILENAME
