"""Data models for the recording ingestion layer."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

SOURCE_NAME = "xeno-canto"
INDEX_VERSION = 1


class RecordingMetadata(BaseModel):
    """Normalized metadata for a single xeno-canto recording.

    Field order is the key order of the ``.xc.json`` document.
    """

    source: str = SOURCE_NAME
    xc_id: int
    url: str
    file_url: Any = None
    gen: str = ""
    sp: str = ""
    en: str = ""
    rec: str = ""
    cnt: Any = None
    loc: Any = None
    lat: Any = None
    lon: Any = None
    date: Any = None
    time: Any = None
    type: Any = None
    q: Any = None
    length: Any = None
    smp: Optional[int] = None
    lic: str = ""
    attribution: str
    retrieved: str = Field(..., description="Fetch date as YYYY-MM-DD")
    raw_response: Dict[str, Any] = Field(default_factory=dict)

    @property
    def species(self) -> str:
        return f"{self.gen} {self.sp}".strip()


class IndexEntry(BaseModel):
    """One row of the shared sound index."""

    model_config = ConfigDict(extra="allow")

    filename: Optional[str] = None
    metadata: str
    xc_id: int
    en: str = ""
    species: str = ""
    source: str = SOURCE_NAME


class SoundIndex(BaseModel):
    """Versioned container for index entries, kept in insertion order."""

    model_config = ConfigDict(extra="allow")

    version: int = INDEX_VERSION
    sounds: List[IndexEntry] = Field(default_factory=list)

    def find(self, xc_id: int) -> Optional[IndexEntry]:
        for entry in self.sounds:
            if entry.xc_id == xc_id:
                return entry
        return None


class PersistResult(BaseModel):
    """Files written for one recording."""

    metadata_path: Path
    audio_path: Optional[Path] = None
    audio_bytes: int = 0
