from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QListWidget, QSplitter, QApplication
)
from PySide6.QtCore import Qt, QEvent, QObject
from PySide6.QtGui import QShortcut, QKeySequence

from library.catalog import CatalogState, STATE_MESSAGES
from library.catalog_client import CatalogClient
from player.controller import PlaybackState
from ui.player_bar import PlayerBar
from ui.theme import palette_for, stylesheet
from ui.toast import ToastHost
from ui.widgets.artist_filter_panel import ArtistFilterPanel
from ui.widgets.track_list_widget import TrackListWidget
from ui.workers.catalog_loader import CatalogLoader

UP_NEXT_LIMIT = 10
SEEK_STEP_MS = 5000


class InteractionWatcher(QObject):
    """Reports the first click or key press anywhere in the application."""

    def __init__(self, on_interaction, parent=None):
        super().__init__(parent)
        self._on_interaction = on_interaction

    def eventFilter(self, obj, event):
        if event.type() in (QEvent.Type.MouseButtonPress, QEvent.Type.KeyPress):
            self._on_interaction()
        return False


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.app_state = app_state
        self.session = app_state.session
        self.config = app_state.config

        title = "Shuffle Player" if not self.config.browsable else "Shuffle Player - Library"
        self.setWindowTitle(title)
        self.resize(960, 600)

        # --- interaction tracking (autoplay policy) ---
        self._watcher = InteractionWatcher(self.session.note_user_interaction, self)
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self._watcher)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Space"), self, activated=self.session.toggle_play)
        QShortcut(QKeySequence("Ctrl+Right"), self, activated=self.session.next_track)
        QShortcut(QKeySequence("N"), self, activated=self.session.next_track)
        QShortcut(QKeySequence("Left"), self, activated=lambda: self.session.seek_by(-SEEK_STEP_MS))
        QShortcut(QKeySequence("Right"), self, activated=lambda: self.session.seek_by(SEEK_STEP_MS))
        if self.config.browsable:
            QShortcut(QKeySequence("P"), self, activated=self.session.previous_track)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.toasts = ToastHost(self)
        self.app_state.notification.connect(self._on_notify)

        # --- Body ---
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.artist_panel = ArtistFilterPanel(self.session)
        splitter.addWidget(self.artist_panel)

        body = QWidget()
        body_layout = QVBoxLayout(body)
        body_layout.setContentsMargins(8, 8, 8, 0)

        self.status_label = QLabel(STATE_MESSAGES[CatalogState.LOADING])
        self.status_label.setObjectName("NowPlaying")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        body_layout.addWidget(self.status_label)

        self.track_list = None
        self.up_next = None
        if self.config.browsable:
            self.track_list = TrackListWidget(self.session)
            self.track_list.playTrack.connect(self.session.play_track)
            body_layout.addWidget(self.track_list, 1)
            QShortcut(QKeySequence("Return"), self, activated=self.track_list.play_selected)
        else:
            self.up_next = QListWidget()
            self.up_next.setObjectName("UpNext")
            body_layout.addWidget(QLabel("Up next"))
            body_layout.addWidget(self.up_next, 1)
            self.session.controller.trackChanged.connect(lambda _t: self._refresh_up_next())
            self.session.artist_filter.changed.connect(lambda _e: self._refresh_up_next())

        splitter.addWidget(body)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        self.layout.addWidget(splitter, 1)

        # --- PlayerBar ---
        self.player_bar = PlayerBar(self.session, self, show_previous=self.config.browsable)
        self.layout.addWidget(self.player_bar)

        # --- Session wiring ---
        self.session.catalogStateChanged.connect(self._on_catalog_state)
        self.session.themeChanged.connect(self.apply_theme)
        self.session.filterPanelVisibleChanged.connect(self.artist_panel.setVisible)
        self.session.controller.stateChanged.connect(self._on_player_state)
        self.artist_panel.setVisible(False)

        self.apply_theme(False)
        self.show_queued_notifications()
        self.load_library()

    # ------------------ catalog ------------------
    def load_library(self):
        client = CatalogClient(
            self.config.catalog_url,
            self.config.count_url,
            timeout_s=self.config.request_timeout_s,
        )
        self.loader = CatalogLoader(client, self)
        self.session.bind_loader(self.loader)
        self.loader.start()
        self.statusBar().showMessage(STATE_MESSAGES[CatalogState.LOADING])

    def _on_catalog_state(self, state: CatalogState):
        if state is CatalogState.READY:
            self.status_label.setVisible(False)
            n = len(self.session.tracks)
            self.statusBar().showMessage(f"{n} track(s) loaded", 4000)
        else:
            self.status_label.setVisible(True)
            self.status_label.setText(STATE_MESSAGES.get(state, ""))
            self.statusBar().clearMessage()

    # ------------------ player ------------------
    def _on_player_state(self, state: PlaybackState):
        track = self.session.controller.current_track
        if state in (PlaybackState.PLAYING, PlaybackState.PAUSED) and track:
            self.setWindowTitle(track.display_title())
        elif state is PlaybackState.ERROR:
            self.statusBar().showMessage("Track failed to load; skipping…", 3000)

    def _refresh_up_next(self):
        if self.up_next is None:
            return
        self.up_next.clear()
        for t in self.session.upcoming(UP_NEXT_LIMIT):
            self.up_next.addItem(t.display_title())

    # ------------------ theme + notifications ------------------
    def apply_theme(self, dark: bool):
        self.setStyleSheet(stylesheet(dark))
        self.player_bar.set_icon_color(palette_for(dark).text)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def _on_notify(self, n):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        self.toasts.show_message(msg, getattr(n, "notify_type", "info"))

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.toasts.reposition()

    def closeEvent(self, event):
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self._watcher)
        loader = getattr(self, "loader", None)
        if loader is not None and loader.isRunning():
            loader.wait(2000)
        super().closeEvent(event)
