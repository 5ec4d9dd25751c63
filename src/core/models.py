# core/models.py
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

UNKNOWN_ARTIST = "Unknown Artist"


def title_from_filename(filename: str) -> str:
    base = posixpath.basename(filename.replace("\\", "/"))
    stem, _ext = posixpath.splitext(base)
    return stem or base or filename


def album_from_filename(filename: str) -> str:
    parent = posixpath.dirname(filename.replace("\\", "/"))
    return posixpath.basename(parent) if parent else ""


@dataclass(frozen=True)
class TrackRecord:
    filename: str               # opaque asset key, fed to the asset resolver
    title: str
    artist: str = UNKNOWN_ARTIST
    cover_image: str | None = field(default=None, repr=False)  # inline payload (data URL / base64)
    album: str = ""

    @staticmethod
    def create(filename: str, title: str | None, artist: str | None, cover_image: str | None = None) -> "TrackRecord":
        """Build a record applying the catalog defaults for blank fields."""
        title = (title or "").strip() or title_from_filename(filename)
        artist = (artist or "").strip() or UNKNOWN_ARTIST
        return TrackRecord(
            filename=filename,
            title=title,
            artist=artist,
            cover_image=cover_image or None,
            album=album_from_filename(filename),
        )

    def display_title(self) -> str:
        return f"{self.title} - {self.artist}"
