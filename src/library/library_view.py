# src/library/library_view.py
from __future__ import annotations

from typing import Iterable

from core.models import TrackRecord
from core.utils import fold_for_search


class LibraryView:
    """Text search over the full catalog, in catalog order."""

    def __init__(self, tracks: Iterable[TrackRecord] = ()):
        self.set_tracks(tracks)

    def set_tracks(self, tracks: Iterable[TrackRecord]) -> None:
        self._tracks: list[TrackRecord] = list(tracks)
        self._keys = [
            (fold_for_search(t.title), fold_for_search(t.artist), fold_for_search(t.album))
            for t in self._tracks
        ]

    @property
    def tracks(self) -> list[TrackRecord]:
        return list(self._tracks)

    def filter(self, query: str | None) -> list[TrackRecord]:
        needle = fold_for_search(query or "")
        if not needle:
            return list(self._tracks)
        return [
            t for t, keys in zip(self._tracks, self._keys)
            if any(needle in k for k in keys)
        ]
