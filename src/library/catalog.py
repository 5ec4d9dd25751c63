# src/library/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from core.models import TrackRecord

logger = logging.getLogger(__name__)

EQUAL_TOKEN = "_EQUAL_"
NO_COVER = "none"
MIN_FIELDS = 3


class CatalogState(Enum):
    LOADING = auto()
    READY = auto()
    EMPTY = auto()        # count artifact says 0
    MALFORMED = auto()    # count > 0 but nothing usable
    UNAVAILABLE = auto()  # fetch failed


@dataclass(frozen=True)
class CatalogResult:
    state: CatalogState
    tracks: tuple[TrackRecord, ...] = ()
    declared_count: Optional[int] = None
    skipped: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is CatalogState.READY


STATE_MESSAGES = {
    CatalogState.LOADING: "Loading library…",
    CatalogState.EMPTY: "No music files found",
    CatalogState.MALFORMED: "No tracks available",
    CatalogState.UNAVAILABLE: "Error loading library",
}


def escape_field(value: str) -> str:
    return value.replace("=", EQUAL_TOKEN)


def unescape_field(value: str) -> str:
    return value.replace(EQUAL_TOKEN, "=")


def serialize_record(record: TrackRecord) -> str:
    """Producer-side line for a record (what the extraction pipeline writes)."""
    cover = record.cover_image if record.cover_image else NO_COVER
    fields = [record.filename, escape_field(record.title), escape_field(record.artist), cover]
    return "(" + "=".join(fields) + ")"


def parse_line(line: str) -> TrackRecord | None:
    line = line.strip()
    if len(line) < 2 or not line.startswith("(") or not line.endswith(")"):
        return None

    parts = line[1:-1].split("=")
    if len(parts) < MIN_FIELDS:
        return None

    # filenames are written unescaped
    filename = parts[0].strip()
    if not filename:
        return None

    # base64 padding inside the cover payload is a literal "="
    cover = "=".join(parts[3:]).strip() if len(parts) > MIN_FIELDS else ""
    if cover == NO_COVER:
        cover = ""

    return TrackRecord.create(
        filename=filename,
        title=unescape_field(parts[1]),
        artist=unescape_field(parts[2]),
        cover_image=cover or None,
    )


def parse_catalog(text: str, expected_count: int | None = None) -> list[TrackRecord]:
    tracks, _skipped = _parse(text, expected_count)
    return tracks


def _parse(text: str, expected_count: int | None) -> tuple[list[TrackRecord], int]:
    tracks: list[TrackRecord] = []
    skipped = 0

    for lineno, raw in enumerate((text or "").splitlines(), start=1):
        if not raw.strip():
            continue
        rec = parse_line(raw)
        if rec is None:
            skipped += 1
            logger.debug("Skipping malformed catalog line %d: %.60r", lineno, raw)
            continue
        tracks.append(rec)

    if expected_count is not None and len(tracks) > expected_count:
        logger.info("Catalog has %d records but count says %d; truncating", len(tracks), expected_count)
        tracks = tracks[:max(0, expected_count)]

    return tracks, skipped


def parse_count(count_text: str | None) -> int | None:
    try:
        n = int(str(count_text).strip())
    except (TypeError, ValueError):
        return None
    return n if n >= 0 else None


def load_catalog(text: str, count_text: str | None) -> CatalogResult:
    count = parse_count(count_text)
    if count is None:
        logger.warning("Unreadable catalog count: %.40r", count_text)
        return CatalogResult(CatalogState.MALFORMED, message=STATE_MESSAGES[CatalogState.MALFORMED])

    if count == 0:
        return CatalogResult(CatalogState.EMPTY, declared_count=0, message=STATE_MESSAGES[CatalogState.EMPTY])

    tracks, skipped = _parse(text, count)
    if not tracks:
        logger.warning("Catalog declared %d records but none could be parsed", count)
        return CatalogResult(
            CatalogState.MALFORMED,
            declared_count=count,
            skipped=skipped,
            message=STATE_MESSAGES[CatalogState.MALFORMED],
        )

    if skipped:
        logger.info("Skipped %d malformed catalog line(s)", skipped)
    logger.info("Loaded %d track(s) from catalog", len(tracks))
    return CatalogResult(CatalogState.READY, tracks=tuple(tracks), declared_count=count, skipped=skipped)
