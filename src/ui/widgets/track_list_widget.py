# ui/track_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal, QItemSelectionModel
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QLineEdit

from core.models import TrackRecord
from ui.models.track_table_model import TrackTableModel


class TrackListWidget(QWidget):
    """Browsable catalog: search box plus the filtered track table."""

    playTrack = Signal(object)  # TrackRecord

    def __init__(self, session):
        super().__init__()
        self.session = session
        self._search = ""

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search title / artist / album...")
        self.search_box.setClearButtonEnabled(True)

        self.table = QTableView()
        self.model = TrackTableModel([])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)

        self.table.setColumnWidth(0, 320)
        self.table.setColumnWidth(1, 200)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setObjectName("TrackTable")
        self.table.verticalHeader().setDefaultSectionSize(24)

        # Double click -> play
        self.table.doubleClicked.connect(self._on_double_click)
        self.search_box.textChanged.connect(self.setSearchValue)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.search_box)
        layout.addWidget(self.table)

        self.session.tracksChanged.connect(lambda _tracks: self.refresh())
        self.session.controller.trackChanged.connect(self.set_now_playing)

    # -------------------------
    # External API
    # -------------------------
    def setSearchValue(self, text: str):
        self._search = text or ""
        self.refresh()

    def refresh(self):
        self.model.set_rows(self.session.search(self._search))
        self.set_now_playing(self.session.controller.current_track)

    def selected_track(self) -> TrackRecord | None:
        idx = self.table.currentIndex()
        if not idx.isValid():
            return None
        return self.model.track_at(idx.row())

    def play_selected(self):
        track = self.selected_track()
        if track is not None:
            self.playTrack.emit(track)

    def set_now_playing(self, track: TrackRecord | None):
        self.model.set_now_playing(track)
        if track is None:
            return

        row = self.model.row_for_track(track)
        if row < 0:
            return  # track not in current filtered view

        idx = self.model.index(row, 0)
        sm = self.table.selectionModel()
        if sm is None:
            return

        sm.setCurrentIndex(idx, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows)
        self.table.scrollTo(idx, QTableView.ScrollHint.EnsureVisible)

    # -------------------------
    # UI Events
    # -------------------------
    def _on_double_click(self, index):
        if not index.isValid():
            return
        track = self.model.track_at(index.row())
        if track is not None:
            self.playTrack.emit(track)
