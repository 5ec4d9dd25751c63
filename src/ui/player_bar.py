# ui/player_bar.py
from __future__ import annotations

import base64
import logging

from PySide6.QtCore import Qt, QSize, QByteArray
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider
from PySide6.QtSvg import QSvgRenderer

from player.controller import PlaybackState

logger = logging.getLogger(__name__)

SEEK_STEPS = 1000
COVER_SIZE = 40


def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


def cover_pixmap(payload: str | None, size: int = COVER_SIZE) -> QPixmap | None:
    """Decode an inline cover (data URL or bare base64) into a scaled pixmap."""
    if not payload:
        return None
    data = payload.split(",", 1)[1] if payload.startswith("data:") else payload
    try:
        raw = base64.b64decode(data, validate=False)
    except (ValueError, TypeError):
        logger.debug("Undecodable cover payload")
        return None
    pm = QPixmap()
    if not pm.loadFromData(raw):
        return None
    return pm.scaled(size, size, Qt.AspectRatioMode.KeepAspectRatio, Qt.TransformationMode.SmoothTransformation)


SVG_PREV = "M6 6h2v12H6V6zm3.5 6l8.5 6V6l-8.5 6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"
SVG_FILTER = "M10 18h4v-2h-4v2zM3 6v2h18V6H3zm3 7h12v-2H6v2z"
SVG_THEME = "M12 3a9 9 0 1 0 9 9c0-.46-.04-.92-.1-1.36A5.39 5.39 0 0 1 12 3z"


class PlayerBar(QWidget):
    def __init__(self, session, parent=None, show_previous: bool = False):
        super().__init__(parent)
        self.session = session

        self._dragging = False
        self._icon_color = "#e5e7eb"

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        # --- buttons ---
        self.btn_prev = QToolButton()
        self.btn_prev.setObjectName("BtnPrev")
        self.btn_prev.setIconSize(QSize(20, 20))
        self.btn_prev.setToolTip("Previous")

        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play")

        self.btn_next = QToolButton()
        self.btn_next.setObjectName("BtnNext")
        self.btn_next.setIconSize(QSize(20, 20))
        self.btn_next.setToolTip("Next")

        self.btn_filter = QToolButton()
        self.btn_filter.setCheckable(True)
        self.btn_filter.setToolTip("Artists")

        self.btn_theme = QToolButton()
        self.btn_theme.setCheckable(True)
        self.btn_theme.setToolTip("Dark theme")

        # --- labels ---
        self.lbl_cover = QLabel()
        self.lbl_cover.setFixedSize(COVER_SIZE, COVER_SIZE)
        self.lbl_cover.setObjectName("Cover")

        self.lbl_title = QLabel("Nothing playing")
        self.lbl_title.setMinimumWidth(220)
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_title.setObjectName("NowPlaying")

        self.lbl_time = QLabel("0:00")
        self.lbl_dur = QLabel("0:00")

        # --- sliders ---
        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, SEEK_STEPS)
        self.slider.setEnabled(False)

        self.volume = QSlider(Qt.Orientation.Horizontal)
        self.volume.setRange(0, 100)
        self.volume.setFixedWidth(90)
        self.volume.setToolTip("Volume")

        root.addWidget(self.btn_prev)
        self.btn_prev.setVisible(show_previous)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_cover)
        root.addWidget(self.lbl_title, 1)
        root.addWidget(self.lbl_time)
        root.addWidget(self.slider, 3)
        root.addWidget(self.lbl_dur)
        root.addWidget(self.volume)
        root.addWidget(self.btn_filter)
        root.addWidget(self.btn_theme)

        # --- signals ---
        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)

        self.btn_play.clicked.connect(self.session.toggle_play)
        self.btn_prev.clicked.connect(self.session.previous_track)
        self.btn_next.clicked.connect(self.session.next_track)
        self.volume.valueChanged.connect(self._on_volume_moved)
        self.btn_filter.toggled.connect(self.session.set_filter_panel_visible)
        self.btn_theme.toggled.connect(self.session.set_dark_theme)

        controller = self.session.controller
        controller.trackChanged.connect(self._on_track_changed)
        controller.stateChanged.connect(self._on_state_changed)
        controller.titleChanged.connect(self.lbl_title.setText)
        controller.progressChanged.connect(self._on_progress)

        self.session.volumeChanged.connect(self._on_volume_restored)
        self.session.filterPanelVisibleChanged.connect(self._sync_check(self.btn_filter))
        self.session.themeChanged.connect(self._sync_check(self.btn_theme))

        self.setObjectName("PlayerBar")
        self.set_icon_color(self._icon_color)

    def set_icon_color(self, color: str):
        self._icon_color = color
        self.btn_prev.setIcon(_svg_icon(SVG_PREV, 20, color))
        self.btn_next.setIcon(_svg_icon(SVG_NEXT, 20, color))
        self.btn_filter.setIcon(_svg_icon(SVG_FILTER, 20, color))
        self.btn_theme.setIcon(_svg_icon(SVG_THEME, 20, color))
        self._set_playing(self.session.controller.state is PlaybackState.PLAYING)

    # --- slider handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_released(self):
        self._dragging = False
        self.session.note_user_interaction()
        self.session.seek(self.slider.value() / SEEK_STEPS)

    def _on_volume_moved(self, value: int):
        self.session.set_volume(value / 100.0)

    def _on_volume_restored(self, volume: float):
        self.volume.blockSignals(True)
        self.volume.setValue(int(round(volume * 100)))
        self.volume.blockSignals(False)

    def _sync_check(self, button: QToolButton):
        def apply(checked: bool):
            button.blockSignals(True)
            button.setChecked(bool(checked))
            button.blockSignals(False)
        return apply

    # --- player updates ---
    def _on_track_changed(self, track):
        if track:
            self.lbl_title.setText(track.display_title())
            pm = cover_pixmap(track.cover_image)
            if pm is not None:
                self.lbl_cover.setPixmap(pm)
            else:
                self.lbl_cover.clear()
        else:
            self.lbl_title.setText("Nothing playing")
            self.lbl_cover.clear()
            self.slider.setValue(0)
            self.lbl_time.setText("0:00")
            self.lbl_dur.setText("0:00")
            self._set_playing(False)

    def _on_state_changed(self, state: PlaybackState):
        self._set_playing(state is PlaybackState.PLAYING)
        if state is PlaybackState.ERROR:
            self.lbl_title.setText("Skipping unplayable track…")

    def _set_playing(self, playing: bool):
        if playing:
            self.btn_play.setIcon(_svg_icon(SVG_PAUSE, 22, self._icon_color))
            self.btn_play.setToolTip("Pause")
        else:
            self.btn_play.setIcon(_svg_icon(SVG_PLAY, 22, self._icon_color))
            self.btn_play.setToolTip("Play")

    def _on_progress(self, elapsed: str, duration: str, fraction: float):
        self.lbl_dur.setText(duration)
        self.slider.setEnabled(self.session.controller.session.duration_ms > 0)
        if self._dragging:
            return
        self.lbl_time.setText(elapsed)
        self.slider.setValue(int(fraction * SEEK_STEPS))
