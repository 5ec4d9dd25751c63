# ui/toast.py
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget


@dataclass(frozen=True)
class ToastStyle:
    background: str
    timeout_ms: int | None   # None: stays until clicked


TOAST_STYLES = {
    "info": ToastStyle("#2b2f36", 3500),
    "success": ToastStyle("#1f6f3b", 3000),
    "warn": ToastStyle("#7a5b12", 6000),
    "error": ToastStyle("#7a1b1b", None),
}


def toast_style(kind: str | None) -> ToastStyle:
    return TOAST_STYLES.get((kind or "info").lower(), TOAST_STYLES["info"])


class ToastLabel(QLabel):
    """One notification bubble; click dismisses it."""

    def __init__(self, text: str, style: ToastStyle, on_dismiss, parent=None):
        super().__init__(text, parent)
        self._on_dismiss = on_dismiss
        self.setWordWrap(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setStyleSheet(
            f"QLabel {{ border-radius: 8px; padding: 8px 12px; background: {style.background}; color: #fff; }}"
        )
        if style.timeout_ms is not None:
            QTimer.singleShot(style.timeout_ms, self.dismiss)

    def dismiss(self):
        self._on_dismiss(self)

    def mousePressEvent(self, event):
        self.dismiss()
        super().mousePressEvent(event)


class ToastHost(QWidget):
    """
    Column of toasts pinned to the bottom-right of a window. A message that
    is already on screen is not shown twice; catalog errors stay until the
    user clicks them away.
    """

    def __init__(self, window: QWidget, max_visible: int = 3, margin: int = 16):
        super().__init__(window)
        self._margin = margin
        self._max_visible = max_visible
        self._toasts: list[ToastLabel] = []

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(6)
        self.hide()

    def show_message(self, text: str, kind: str = "info") -> None:
        if not text or any(t.text() == text for t in self._toasts):
            return
        while len(self._toasts) >= self._max_visible:
            self._remove(self._toasts[0])

        toast = ToastLabel(text, toast_style(kind), self._remove, self)
        self._toasts.append(toast)
        self._layout.addWidget(toast)
        self.reposition()
        self.show()
        self.raise_()

    def reposition(self) -> None:
        window = self.parentWidget()
        if window is None:
            return
        width = max(260, window.width() // 3)
        self.setFixedWidth(width)
        self.adjustSize()
        self.move(
            window.width() - width - self._margin,
            window.height() - self.height() - self._margin,
        )

    def _remove(self, toast: ToastLabel) -> None:
        if toast not in self._toasts:
            return
        self._toasts.remove(toast)
        self._layout.removeWidget(toast)
        toast.deleteLater()
        if self._toasts:
            self.reposition()
        else:
            self.hide()
