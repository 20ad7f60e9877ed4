"""Shared sound index: load, de-duplicate and rewrite."""
from __future__ import annotations

import enum
import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from xcfetch.errors import CorruptIndexError, IndexWriteError
from xcfetch.ingest.models import IndexEntry, PersistResult, RecordingMetadata, SoundIndex
from xcfetch.storage.atomic import atomic_write_text


class MergeOutcome(str, enum.Enum):
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"


def load_index(path: Path) -> SoundIndex:
    """Read the index at ``path``; a missing file yields an empty index."""
    if not path.exists():
        return SoundIndex()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return SoundIndex.model_validate(payload)
    except (OSError, ValueError, ValidationError) as exc:
        raise CorruptIndexError(f"Index {path} could not be read: {exc}") from exc


def render_index(index: SoundIndex) -> str:
    return json.dumps(index.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"


def _relative_to_index(index_path: Path, asset: Path) -> str:
    index_dir = index_path.parent.resolve()
    target = asset.resolve()
    try:
        return target.relative_to(index_dir).as_posix()
    except ValueError:
        return str(target)


def build_entry(index_path: Path, meta: RecordingMetadata, result: PersistResult) -> IndexEntry:
    audio: Optional[str] = None
    if result.audio_path is not None:
        audio = _relative_to_index(index_path, result.audio_path)
    return IndexEntry(
        filename=audio,
        metadata=_relative_to_index(index_path, result.metadata_path),
        xc_id=meta.xc_id,
        en=meta.en,
        species=meta.species,
        source=meta.source,
    )


def merge_entry(index_path: Path, entry: IndexEntry) -> MergeOutcome:
    """Append ``entry`` unless an entry with the same ``xc_id`` already exists.

    The file is left untouched when the recording is already indexed. Prior
    entries keep their order.
    """
    index = load_index(index_path)
    if index.find(entry.xc_id) is not None:
        logging.info("XC%d already present in %s", entry.xc_id, index_path)
        return MergeOutcome.ALREADY_PRESENT

    index.sounds.append(entry)
    try:
        os.makedirs(index_path.parent, exist_ok=True)
        atomic_write_text(index_path, render_index(index))
    except OSError as exc:
        raise IndexWriteError(f"Failed to write index {index_path}: {exc}") from exc
    logging.info("Added XC%d to %s (%d entries)", entry.xc_id, index_path, len(index.sounds))
    return MergeOutcome.INSERTED
