"""Writing recording metadata and audio to a local directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from xcfetch.errors import (
    AudioWriteError,
    DirectoryCreateError,
    MetadataWriteError,
    MissingAudioURLError,
)
from xcfetch.ingest.models import PersistResult, RecordingMetadata
from xcfetch.processing.normalize import render_metadata
from xcfetch.storage.atomic import atomic_write_bytes, atomic_write_text

METADATA_SUFFIX = ".xc.json"
DEFAULT_AUDIO_EXTENSION = "wav"


class AudioDownloader(Protocol):
    """Anything able to fetch a binary asset by URL."""

    def download(self, url: str) -> bytes:
        ...


def audio_extension(raw: Dict[str, Any]) -> str:
    """Extension announced by the record's ``file-name``, or ``wav``."""
    name = raw.get("file-name")
    if not isinstance(name, str) or "." not in name:
        return DEFAULT_AUDIO_EXTENSION
    ext = name.rsplit(".", 1)[1].strip()
    return ext or DEFAULT_AUDIO_EXTENSION


def metadata_path_for(directory: Path, base: str) -> Path:
    return directory / f"{base}{METADATA_SUFFIX}"


def persist_recording(
    meta: RecordingMetadata,
    raw: Dict[str, Any],
    base: str,
    directory: Path,
    download_audio: bool,
    client: Optional[AudioDownloader] = None,
) -> PersistResult:
    """Write ``<base>.xc.json`` and, when requested, ``<base>.<ext>`` into ``directory``.

    The metadata file is left in place if the audio step fails afterwards.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"Failed to create output directory {directory}: {exc}") from exc

    metadata_path = metadata_path_for(directory, base)
    try:
        atomic_write_text(metadata_path, render_metadata(meta))
    except OSError as exc:
        raise MetadataWriteError(f"Failed to write metadata {metadata_path}: {exc}") from exc
    logging.info("Wrote %s", metadata_path)

    if not download_audio:
        return PersistResult(metadata_path=metadata_path)

    file_url = raw.get("file")
    if not isinstance(file_url, str) or not file_url.strip():
        raise MissingAudioURLError(f"No 'file' URL in recording data for XC{meta.xc_id}")
    if client is None:
        raise ValueError("An audio downloader is required when download_audio is set")

    audio_path = directory / f"{base}.{audio_extension(raw)}"
    logging.info("Downloading audio...")
    payload = client.download(file_url)
    try:
        atomic_write_bytes(audio_path, payload)
    except OSError as exc:
        raise AudioWriteError(f"Failed to write audio {audio_path}: {exc}") from exc
    logging.info("Wrote %s (%.1f MB)", audio_path, len(payload) / 1_048_576)

    return PersistResult(metadata_path=metadata_path, audio_path=audio_path, audio_bytes=len(payload))
