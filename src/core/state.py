from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify
    status_changed = Signal(str)    # generic status text
    track_changed = Signal(object)  # emits TrackRecord | None

    def __init__(self):
        super().__init__()
        self.config = None
        self.prefs = None
        self.session = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        n = Notify(message=message, notify_type=notify_type)
        self.notification.emit(n)
