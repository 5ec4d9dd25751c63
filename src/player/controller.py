# src/player/controller.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, QTimer

from core.models import TrackRecord
from core.utils import clamp, format_ms
from .device import PlaybackDevice

logger = logging.getLogger(__name__)

AUTOPLAY_HINT = "Press play to start listening"


class PlaybackState(Enum):
    IDLE = auto()
    LOADING = auto()
    READY = auto()
    PLAYING = auto()
    PAUSED = auto()
    ERROR = auto()
    ENDED = auto()


@dataclass
class PlaybackSession:
    track: TrackRecord | None = None
    source: str | None = None
    elapsed_ms: int = 0
    duration_ms: int = 0          # 0 = unknown
    playing: bool = False
    last_error: str | None = None


def _qt_schedule(delay_ms: int, fn: Callable[[], None]) -> None:
    QTimer.singleShot(int(delay_ms), fn)


class PlaybackController(QObject):
    """
    State machine around a single PlaybackDevice.

        IDLE -> LOADING -> READY -> PLAYING <-> PAUSED
        LOADING/READY/PLAYING/PAUSED -> ERROR -> (delay) -> LOADING next
        PLAYING -> ENDED -> LOADING next

    Every media callback is checked against the source most recently handed
    to the device; callbacks for anything else are stale and dropped.
    """

    stateChanged = Signal(object)             # PlaybackState
    trackChanged = Signal(object)             # TrackRecord | None
    titleChanged = Signal(str)
    progressChanged = Signal(str, str, float)  # elapsed, duration, fraction
    autoplayBlocked = Signal(str)             # one-time hint

    def __init__(
        self,
        device: PlaybackDevice,
        resolve_asset: Callable[[str], str],
        next_track: Callable[[], Optional[TrackRecord]],
        recovery_delay_ms: int = 1500,
        schedule: Optional[Callable[[int, Callable[[], None]], None]] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.device = device
        self._resolve = resolve_asset
        self._next_track = next_track
        self.recovery_delay_ms = int(recovery_delay_ms)
        self._schedule = schedule or _qt_schedule

        self.session = PlaybackSession()
        self.state = PlaybackState.IDLE
        self.volume = 1.0

        self.user_interacted = False
        self._first_load_pending = True
        self._resume_after_load = False
        self._hint_shown = False
        self._load_seq = 0

        device.mediaReady.connect(self._on_media_ready)
        device.mediaFailed.connect(self._on_media_failed)
        device.mediaEnded.connect(self._on_media_ended)
        device.positionChanged.connect(self._on_position)
        device.durationChanged.connect(self._on_duration)

    # ----------------------------
    # Public API
    # ----------------------------

    def note_user_interaction(self) -> None:
        if not self.user_interacted:
            logger.debug("First user interaction observed")
            self.user_interacted = True

    def load_track(self, record: TrackRecord, resume: bool = False) -> None:
        self._load_seq += 1
        url = self._resolve(record.filename)

        self.session = PlaybackSession(track=record, source=url)
        self._resume_after_load = bool(resume)
        self._set_state(PlaybackState.LOADING)
        self.trackChanged.emit(record)
        self._emit_progress()

        logger.info("Loading %s", record.filename)
        try:
            self.device.set_source(url)
        except Exception as e:
            self._on_media_failed(url, str(e))

    def toggle_play(self) -> None:
        if self.state is PlaybackState.PLAYING:
            self.device.pause()
            self.session.playing = False
            self._set_state(PlaybackState.PAUSED)
        elif self.state in (PlaybackState.READY, PlaybackState.PAUSED):
            self._start_playback()
        elif self.state is PlaybackState.LOADING:
            self._resume_after_load = not self._resume_after_load
        else:
            logger.debug("toggle_play ignored in state %s", self.state.name)

    def seek(self, fraction: float) -> None:
        duration = self.session.duration_ms
        if duration <= 0:
            return
        self.device.seek_ms(int(round(clamp(fraction) * duration)))

    def seek_by(self, delta_ms: int) -> None:
        duration = self.session.duration_ms
        if duration <= 0:
            return
        target = int(clamp(self.session.elapsed_ms + int(delta_ms), 0, duration))
        self.session.elapsed_ms = target
        self.device.seek_ms(target)

    def advance_to_next(self, resume: Optional[bool] = None) -> Optional[TrackRecord]:
        if resume is None:
            resume = self.wants_playback

        track = self._next_track()
        if track is None:
            logger.info("No track available to advance to")
            self.session = PlaybackSession()
            self._set_state(PlaybackState.IDLE)
            self.trackChanged.emit(None)
            return None

        self.load_track(track, resume=resume)
        return track

    def set_volume(self, volume_0_to_1: float) -> float:
        self.volume = clamp(volume_0_to_1)
        self.device.set_volume(self.volume)
        return self.volume

    @property
    def wants_playback(self) -> bool:
        """Playing now, or loading with playback requested once ready."""
        return self.state is PlaybackState.PLAYING or (
            self.state is PlaybackState.LOADING and self._resume_after_load
        )

    @property
    def current_track(self) -> TrackRecord | None:
        return self.session.track

    # ----------------------------
    # Device callbacks
    # ----------------------------

    def _is_stale(self, source: str, event: str) -> bool:
        if source != self.session.source:
            logger.debug("Ignoring stale %s for %s", event, source)
            return True
        return False

    def _on_media_ready(self, source: str) -> None:
        if self._is_stale(source, "ready") or self.state is not PlaybackState.LOADING:
            return
        self._set_state(PlaybackState.READY)

        should_play = self._resume_after_load and self.user_interacted
        if self._first_load_pending:
            self._first_load_pending = False
            should_play = should_play or self.user_interacted
        self._resume_after_load = False

        if should_play:
            self._start_playback()

    def _on_media_failed(self, source: str, message: str) -> None:
        if self._is_stale(source, "error"):
            return
        if self.state in (PlaybackState.IDLE, PlaybackState.ERROR):
            return

        was_playing = self.wants_playback
        self.session.last_error = message
        self.session.playing = False
        self._resume_after_load = False
        self._set_state(PlaybackState.ERROR)

        track = self.session.track
        logger.warning(
            "Playback error on %s: %s; skipping in %d ms",
            track.filename if track else source, message, self.recovery_delay_ms,
        )
        seq = self._load_seq
        self._schedule(self.recovery_delay_ms, lambda: self._recover(seq, was_playing))

    def _recover(self, seq: int, was_playing: bool) -> None:
        # user already moved on (next / direct pick) while we were waiting
        if seq != self._load_seq or self.state is not PlaybackState.ERROR:
            return
        self.advance_to_next(resume=was_playing)

    def _on_media_ended(self, source: str) -> None:
        if self._is_stale(source, "end"):
            return
        if self.state in (PlaybackState.IDLE, PlaybackState.ERROR, PlaybackState.LOADING):
            return
        self.session.playing = False
        self._set_state(PlaybackState.ENDED)
        self.advance_to_next(resume=True)

    def _on_position(self, ms: int) -> None:
        self.session.elapsed_ms = max(0, int(ms))
        self._emit_progress()

    def _on_duration(self, ms: int) -> None:
        self.session.duration_ms = max(0, int(ms))
        self._emit_progress()

    # ----------------------------
    # Helpers
    # ----------------------------

    def _start_playback(self) -> bool:
        if self.device.play():
            self.session.playing = True
            self._set_state(PlaybackState.PLAYING)
            return True

        logger.info("Playback request refused")
        if not self.user_interacted and not self._hint_shown:
            self._hint_shown = True
            self.autoplayBlocked.emit(AUTOPLAY_HINT)
        return False

    def _set_state(self, new_state: PlaybackState) -> None:
        if self.state is new_state:
            return
        self.state = new_state
        self.stateChanged.emit(new_state)
        if new_state in (PlaybackState.PLAYING, PlaybackState.PAUSED) and self.session.track:
            self.titleChanged.emit(self.session.track.display_title())

    def _emit_progress(self) -> None:
        elapsed = self.session.elapsed_ms
        duration = self.session.duration_ms
        fraction = clamp(elapsed / duration) if duration > 0 else 0.0
        self.progressChanged.emit(
            format_ms(elapsed),
            format_ms(duration) if duration > 0 else "0:00",
            fraction,
        )
