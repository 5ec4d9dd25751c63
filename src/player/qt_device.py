# src/player/qt_device.py
from __future__ import annotations

import logging

from PySide6.QtCore import QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core.utils import clamp
from .device import PlaybackDevice

logger = logging.getLogger(__name__)


class QtMediaDevice(PlaybackDevice):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._source = ""

        self.audio = QAudioOutput(self)
        self.media = QMediaPlayer(self)
        self.media.setAudioOutput(self.audio)
        self.audio.setVolume(1.0)

        self.media.positionChanged.connect(self._on_position)
        self.media.durationChanged.connect(self._on_duration)
        self.media.mediaStatusChanged.connect(self._on_media_status)
        self.media.errorOccurred.connect(self._on_error)

    # ----------------------------
    # Qt handlers
    # ----------------------------

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status in (QMediaPlayer.MediaStatus.LoadedMedia, QMediaPlayer.MediaStatus.BufferedMedia):
            self.mediaReady.emit(self._source)
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.mediaEnded.emit(self._source)
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            self.mediaFailed.emit(self._source, self.media.errorString() or "invalid media")

    def _on_error(self, error, message: str) -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        logger.debug("QMediaPlayer error %s for %s: %s", error, self._source, message)
        self.mediaFailed.emit(self._source, message or str(error))

    def _on_position(self, ms: int) -> None:
        self.positionChanged.emit(int(ms))

    def _on_duration(self, ms: int) -> None:
        self.durationChanged.emit(int(ms))

    # ----------------------------
    # Device API
    # ----------------------------

    def set_source(self, url: str) -> None:
        if url == self._source:
            # QMediaPlayer ignores setSource() with an unchanged URL
            if self.media.mediaStatus() != QMediaPlayer.MediaStatus.InvalidMedia:
                self.media.setPosition(0)
                self.mediaReady.emit(url)
                return
            self.media.setSource(QUrl())
        self._source = url
        self.media.setSource(QUrl(url))

    def play(self) -> bool:
        if not self._source or self.media.mediaStatus() == QMediaPlayer.MediaStatus.InvalidMedia:
            return False
        self.media.play()
        return True

    def pause(self) -> None:
        self.media.pause()

    def seek_ms(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))

    def set_volume(self, volume_0_to_1: float) -> None:
        self.audio.setVolume(clamp(volume_0_to_1))
