"""Normalization of raw xeno-canto records into the local metadata schema."""
from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from xcfetch.ingest.identifiers import MAX_CATALOGUE_ID, XC_DOMAIN
from xcfetch.ingest.models import SOURCE_NAME, RecordingMetadata

RESERVED_CHARACTERS = '<>:"/\\|?*'
DESCRIPTIVE_FIELDS = ("cnt", "loc", "lat", "lon", "date", "time", "type", "q", "length")

_RESERVED_TABLE = str.maketrans({char: "_" for char in RESERVED_CHARACTERS})


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in path components with an underscore."""
    return name.translate(_RESERVED_TABLE)


def base_name(xc_id: int, en: str, gen: str, sp: str) -> str:
    return sanitize_filename(f"XC{xc_id} - {en} - {gen} {sp}")


def _text(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def resolve_recording_id(raw: Dict[str, Any], requested_id: int) -> int:
    """Prefer the id echoed by the API, falling back to the requested one."""
    echoed = _optional_int(raw.get("id"))
    if echoed is None or not 0 < echoed <= MAX_CATALOGUE_ID:
        return requested_id
    return echoed


def attribution_for(recordist: str, xc_id: int) -> str:
    return f"{recordist}, XC{xc_id}. Accessible at www.{XC_DOMAIN}/{xc_id}"


def normalize_recording(
    raw: Dict[str, Any],
    xc_id: int,
    fetched_at: Union[date, datetime],
) -> RecordingMetadata:
    """Map a raw API record onto :class:`RecordingMetadata`.

    Missing text fields become empty strings and an unparseable ``smp`` is
    dropped to ``None``; nothing here raises for a well-formed record. The
    complete raw record is kept under ``raw_response``.
    """
    recording_id = resolve_recording_id(raw, xc_id)
    recordist = _text(raw, "rec")
    if isinstance(fetched_at, datetime):
        fetched_at = fetched_at.date()

    return RecordingMetadata(
        source=SOURCE_NAME,
        xc_id=recording_id,
        url=f"https://www.{XC_DOMAIN}/{recording_id}",
        file_url=raw.get("file"),
        gen=_text(raw, "gen"),
        sp=_text(raw, "sp"),
        en=_text(raw, "en"),
        rec=recordist,
        smp=_optional_int(raw.get("smp")),
        lic=_text(raw, "lic"),
        attribution=attribution_for(recordist, recording_id),
        retrieved=fetched_at.isoformat(),
        raw_response=dict(raw),
        **{field: raw.get(field) for field in DESCRIPTIVE_FIELDS},
    )


def metadata_base_name(meta: RecordingMetadata) -> str:
    return base_name(meta.xc_id, meta.en, meta.gen, meta.sp)


def render_metadata(meta: RecordingMetadata) -> str:
    """Serialize metadata as indented JSON with a trailing newline."""
    return json.dumps(meta.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
