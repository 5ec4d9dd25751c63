# src/player/device.py
from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class PlaybackDevice(QObject):
    """
    Audio handle driven by PlaybackController. Media events carry the source
    address they belong to so late events from a replaced source can be told
    apart from the current one.
    """

    mediaReady = Signal(str)          # source
    mediaFailed = Signal(str, str)    # source, message
    mediaEnded = Signal(str)          # source
    positionChanged = Signal(int)     # ms
    durationChanged = Signal(int)     # ms

    def set_source(self, url: str) -> None:
        raise NotImplementedError

    def play(self) -> bool:
        """Request playback; False when the request was refused."""
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def seek_ms(self, ms: int) -> None:
        raise NotImplementedError

    def set_volume(self, volume_0_to_1: float) -> None:
        raise NotImplementedError
