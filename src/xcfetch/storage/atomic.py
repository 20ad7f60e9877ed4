"""Atomic file replacement helpers."""
from __future__ import annotations

import os
from pathlib import Path


def atomic_write_bytes(dest: Path, data: bytes) -> None:
    """Write ``data`` to a temporary sibling, fsync it, then rename over ``dest``."""
    tmp = dest.with_name(dest.name + f".tmp-{os.getpid()}")
    try:
        with open(tmp, "wb") as wf:
            wf.write(data)
            wf.flush()
            os.fsync(wf.fileno())
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    os.replace(tmp, dest)


def atomic_write_text(dest: Path, text: str) -> None:
    atomic_write_bytes(dest, text.encode("utf-8"))
