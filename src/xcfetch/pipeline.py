"""End-to-end fetch of one recording: resolve, fetch, normalize, persist, index."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from xcfetch.ingest.identifiers import parse_identifier
from xcfetch.ingest.models import PersistResult, RecordingMetadata
from xcfetch.ingest.xeno_canto_api import XenoCantoClient
from xcfetch.processing.normalize import metadata_base_name, normalize_recording
from xcfetch.storage.index import MergeOutcome, build_entry, merge_entry
from xcfetch.storage.persist import persist_recording


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class FetchRequest:
    identifier: str
    output_dir: Path
    index_path: Optional[Path] = None
    download_audio: bool = True


@dataclass
class FetchSummary:
    metadata: RecordingMetadata
    files: PersistResult
    index_outcome: Optional[MergeOutcome] = None


def run_fetch(
    request: FetchRequest,
    client: XenoCantoClient,
    today: Optional[Callable[[], date]] = None,
) -> FetchSummary:
    """Run every stage once; the first failure propagates and stops the rest."""
    xc_id = parse_identifier(request.identifier)
    raw = client.fetch_recording(xc_id)
    metadata = normalize_recording(raw, xc_id, (today or utc_today)())
    files = persist_recording(
        metadata,
        raw,
        metadata_base_name(metadata),
        request.output_dir,
        request.download_audio,
        client,
    )

    outcome = None
    if request.index_path is not None:
        entry = build_entry(request.index_path, metadata, files)
        outcome = merge_entry(request.index_path, entry)
    return FetchSummary(metadata=metadata, files=files, index_outcome=outcome)
