# core/session.py
from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from core.artist_filter import ArtistFilterState
from core.models import TrackRecord
from core.preferences import PreferenceStore
from core.shuffle import ShuffleScheduler
from core.state import AppState
from library.catalog import CatalogResult, CatalogState, STATE_MESSAGES, load_catalog
from library.library_view import LibraryView
from player.controller import PlaybackController
from player.device import PlaybackDevice

logger = logging.getLogger(__name__)


class PlayerSession(QObject):
    """
    Per-window playback session: owns the catalog tracks, artist filter,
    shuffle order, library view and playback controller, and keeps the
    preference store in step with user actions.
    """

    catalogStateChanged = Signal(object)   # CatalogState
    tracksChanged = Signal(object)         # list[TrackRecord]
    themeChanged = Signal(bool)            # dark?
    volumeChanged = Signal(float)
    filterPanelVisibleChanged = Signal(bool)

    def __init__(
        self,
        app_state: AppState,
        device: PlaybackDevice,
        prefs: PreferenceStore,
        resolve_asset: Callable[[str], str],
        recovery_delay_ms: int = 1500,
        rng: Optional[random.Random] = None,
        schedule=None,
        parent=None,
    ):
        super().__init__(parent)
        self.app_state = app_state
        self.prefs = prefs

        self.tracks: list[TrackRecord] = []
        self.catalog_state = CatalogState.LOADING
        self.dark_theme = False
        self.filter_panel_visible = False

        self.artist_filter = ArtistFilterState(self)
        self.scheduler = ShuffleScheduler(rng)
        self.library_view = LibraryView()
        self.controller = PlaybackController(
            device,
            resolve_asset=resolve_asset,
            next_track=self._next_scheduled_track,
            recovery_delay_ms=recovery_delay_ms,
            schedule=schedule,
            parent=self,
        )

        self._restoring = False
        self.artist_filter.changed.connect(self._on_filter_changed)
        self.controller.autoplayBlocked.connect(lambda hint: self.app_state.notify(hint, "info"))
        self.controller.trackChanged.connect(self.app_state.track_changed)

    # ------------------ catalog ------------------
    def apply_catalog(self, text: str, count_text: str | None) -> CatalogResult:
        result = load_catalog(text, count_text)
        self._apply_result(result)
        return result

    def bind_loader(self, loader) -> None:
        """Route a CatalogLoader's results into this session."""
        loader.loaded_signal.connect(self.apply_catalog)
        loader.failed_signal.connect(self.catalog_unavailable)

    def catalog_unavailable(self, message: str = "") -> CatalogResult:
        logger.error("Catalog unavailable: %s", message)
        result = CatalogResult(CatalogState.UNAVAILABLE, message=STATE_MESSAGES[CatalogState.UNAVAILABLE])
        self._apply_result(result)
        return result

    def _apply_result(self, result: CatalogResult) -> None:
        self.catalog_state = result.state
        self.tracks = list(result.tracks)
        self.library_view.set_tracks(self.tracks)

        if result.ok:
            # the saved filter is applied by restore_preferences(); don't overwrite it first
            self._restoring = True
            try:
                self.artist_filter.set_catalog(self.tracks)
            finally:
                self._restoring = False
        else:
            self.app_state.notify(result.message, "error" if result.state is CatalogState.UNAVAILABLE else "warn")
            self.app_state.status_changed.emit(result.message)

        self.catalogStateChanged.emit(result.state)
        self.tracksChanged.emit(list(self.tracks))
        self.restore_preferences()

        if result.ok and not self.scheduler.is_empty():
            self.controller.load_track(self.scheduler.current())

    def restore_preferences(self) -> None:
        """Startup read: volume, theme, artist set, panel visibility."""
        self._restoring = True
        try:
            self.controller.set_volume(self.prefs.volume())
            self.volumeChanged.emit(self.controller.volume)

            self.dark_theme = bool(self.prefs.dark_theme())
            self.themeChanged.emit(self.dark_theme)

            if self.tracks:
                self.artist_filter.restore(self.prefs.enabled_artists())

            self.filter_panel_visible = bool(self.prefs.filter_panel_visible())
            self.filterPanelVisibleChanged.emit(self.filter_panel_visible)
        finally:
            self._restoring = False

    # ------------------ filter -> order ------------------
    def _on_filter_changed(self, enabled: frozenset) -> None:
        playing = self.controller.current_track
        pool = self.artist_filter.candidate_pool(self.tracks)
        self.scheduler.reshuffle(pool, keep=playing)
        logger.info("Play order rebuilt: %d of %d track(s)", len(pool), len(self.tracks))

        if not self._restoring:
            self.prefs.set_enabled_artists(enabled)

        # the running track's artist was just filtered out
        if playing is not None and not self.artist_filter.is_enabled(playing.artist) and not self.scheduler.is_empty():
            self.controller.load_track(self.scheduler.current(), resume=self.controller.wants_playback)

    def _next_scheduled_track(self) -> Optional[TrackRecord]:
        if self.scheduler.is_empty():
            if not self.tracks:
                return None
            logger.info("Play order empty; enabling all artists")
            self.artist_filter.select_all()
            if self.scheduler.is_empty():
                self.scheduler.reshuffle(self.artist_filter.candidate_pool(self.tracks))
            return self.scheduler.current()
        return self.scheduler.advance()

    # ------------------ user actions ------------------
    def note_user_interaction(self) -> None:
        self.controller.note_user_interaction()

    def toggle_play(self) -> None:
        self.controller.toggle_play()

    def next_track(self) -> Optional[TrackRecord]:
        return self.controller.advance_to_next()

    def seek(self, fraction: float) -> None:
        self.controller.seek(fraction)

    def seek_by(self, delta_ms: int) -> None:
        self.controller.seek_by(delta_ms)

    def previous_track(self) -> Optional[TrackRecord]:
        """Step back one place in catalog order, wrapping to the last track."""
        if not self.tracks:
            return None
        current = self.controller.current_track
        index = next((i for i, t in enumerate(self.tracks) if t is current), 0)
        record = self.tracks[index - 1]
        self.controller.load_track(record, resume=True)
        return record

    def play_track(self, record: TrackRecord) -> None:
        """Direct pick from the library list; the shuffle cursor is left alone."""
        self.controller.load_track(record, resume=True)

    def search(self, query: str) -> list[TrackRecord]:
        return self.library_view.filter(query)

    def set_volume(self, volume: float) -> None:
        v = self.controller.set_volume(volume)
        self.prefs.set_volume(v)
        self.volumeChanged.emit(v)

    def set_dark_theme(self, dark: bool) -> None:
        self.dark_theme = bool(dark)
        self.prefs.set_dark_theme(self.dark_theme)
        self.themeChanged.emit(self.dark_theme)

    def set_filter_panel_visible(self, visible: bool) -> None:
        self.filter_panel_visible = bool(visible)
        self.prefs.set_filter_panel_visible(self.filter_panel_visible)
        self.filterPanelVisibleChanged.emit(self.filter_panel_visible)

    def enable_artist(self, artist: str) -> bool:
        return self.artist_filter.enable(artist)

    def disable_artist(self, artist: str) -> bool:
        return self.artist_filter.disable(artist)

    def set_artist_enabled(self, artist: str, enabled: bool) -> bool:
        return self.enable_artist(artist) if enabled else self.disable_artist(artist)

    def select_all_artists(self) -> bool:
        return self.artist_filter.select_all()

    def select_no_artists(self) -> bool:
        return self.artist_filter.select_none()

    def enabled_tracks(self) -> list[TrackRecord]:
        return self.artist_filter.candidate_pool(self.tracks)

    def upcoming(self, limit: int = 10) -> Iterable[TrackRecord]:
        order = self.scheduler.order
        return order[self.scheduler.cursor + 1:self.scheduler.cursor + 1 + limit]
