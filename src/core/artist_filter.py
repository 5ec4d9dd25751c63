# core/artist_filter.py
from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from PySide6.QtCore import QObject, Signal

from core.models import TrackRecord

logger = logging.getLogger(__name__)


class ArtistFilterState(QObject):
    """
    Enabled-artist set over the artist universe of the loaded catalog.

    While the universe is non-empty the enabled set is never empty: removing
    the last artist is refused and that artist stays enabled.
    """

    changed = Signal(object)          # frozenset[str] of enabled artists
    summaryChanged = Signal(int, int)  # enabled, total
    reasserted = Signal(str)          # artist kept enabled by the non-empty rule

    def __init__(self, parent=None):
        super().__init__(parent)
        self._universe: dict[str, int] = {}
        self._enabled: set[str] = set()

    # -------------------------
    # Universe
    # -------------------------

    @property
    def universe(self) -> dict[str, int]:
        return dict(self._universe)

    @property
    def artists(self) -> list[str]:
        return list(self._universe)

    @property
    def enabled(self) -> frozenset[str]:
        return frozenset(self._enabled)

    def set_catalog(self, tracks: Iterable[TrackRecord]) -> None:
        counts = Counter(t.artist for t in tracks)
        self._universe = {name: counts[name] for name in sorted(counts)}

        kept = self._enabled & set(self._universe)
        self._enabled = kept if kept else set(self._universe)
        self._commit()

    def restore(self, artists: Iterable[str] | None) -> None:
        """Apply a persisted selection; unknown names are dropped."""
        wanted = set(artists) if artists is not None else set(self._universe)
        kept = wanted & set(self._universe)
        if not kept and self._universe:
            if artists is not None:
                logger.info("Saved artist filter matches nothing in the catalog; enabling all")
            kept = set(self._universe)
        self._enabled = kept
        self._commit()

    # -------------------------
    # Mutations
    # -------------------------

    def is_enabled(self, artist: str) -> bool:
        return artist in self._enabled

    def enable(self, artist: str) -> bool:
        if artist not in self._universe:
            logger.debug("Ignoring enable for unknown artist %r", artist)
            return False
        if artist in self._enabled:
            return False
        self._enabled.add(artist)
        self._commit()
        return True

    def disable(self, artist: str) -> bool:
        if artist not in self._enabled:
            return False
        if len(self._enabled) == 1:
            self.reasserted.emit(artist)
            return False
        self._enabled.discard(artist)
        self._commit()
        return True

    def select_all(self) -> bool:
        if self._enabled == set(self._universe):
            return False
        self._enabled = set(self._universe)
        self._commit()
        return True

    def select_none(self) -> bool:
        if not self._universe:
            return False
        first = next(iter(self._universe))
        if self._enabled == {first}:
            return False
        self._enabled = {first}
        self._commit()
        return True

    # -------------------------
    # Derived views
    # -------------------------

    def summary(self) -> tuple[int, int]:
        return len(self._enabled), len(self._universe)

    def summary_text(self) -> str:
        enabled, total = self.summary()
        if total and enabled == total:
            return "All artists enabled"
        return f"{enabled}/{total} artists enabled"

    def candidate_pool(self, tracks: Iterable[TrackRecord]) -> list[TrackRecord]:
        return [t for t in tracks if t.artist in self._enabled]

    def _commit(self) -> None:
        enabled, total = self.summary()
        self.summaryChanged.emit(enabled, total)
        self.changed.emit(frozenset(self._enabled))
