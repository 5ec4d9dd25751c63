from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from PySide6.QtCore import Qt
from PySide6.QtGui import QStandardItem, QStandardItemModel
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QTableView, QLabel, QPushButton


@dataclass(frozen=True)
class ArtistFilterRow:
    artist: str
    tracks: int
    enabled: bool


class ArtistFilterPanel(QWidget):
    """Checkable artist list bound to the session's ArtistFilterState."""

    def __init__(self, session):
        super().__init__()
        self.session = session
        self.filter = session.artist_filter
        self._syncing = False

        self.table = QTableView()
        self.model = QStandardItemModel(0, 2, self)
        self.model.setHorizontalHeaderLabels(["Artist", "Tracks"])
        self.table.setModel(self.model)

        self.table.setSelectionMode(QTableView.SelectionMode.NoSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.setObjectName("ArtistTable")
        self.table.verticalHeader().setDefaultSectionSize(24)
        self.table.setColumnWidth(0, 220)
        self.table.horizontalHeader().setStretchLastSection(True)

        self.lbl_summary = QLabel(self.filter.summary_text())
        self.lbl_summary.setObjectName("ArtistSummary")

        self.btn_all = QPushButton("All")
        self.btn_none = QPushButton("None")

        buttons = QHBoxLayout()
        buttons.setContentsMargins(0, 0, 0, 0)
        buttons.addWidget(self.lbl_summary, 1)
        buttons.addWidget(self.btn_all)
        buttons.addWidget(self.btn_none)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(buttons)
        layout.addWidget(self.table)

        self.btn_all.clicked.connect(self.session.select_all_artists)
        self.btn_none.clicked.connect(self.session.select_no_artists)
        self.model.itemChanged.connect(self._on_item_changed)

        self.filter.changed.connect(lambda _enabled: self.refresh())
        self.filter.reasserted.connect(self._on_reasserted)
        self.filter.summaryChanged.connect(self._on_summary)

        self.refresh()

    # -------------------------
    # External API
    # -------------------------

    def refresh(self):
        names = [self.model.item(r, 0).data(Qt.ItemDataRole.UserRole) for r in range(self.model.rowCount())]
        if names == self.filter.artists:
            self._sync_checks()
            self._on_summary(*self.filter.summary())
            return

        rows = [
            ArtistFilterRow(artist=name, tracks=count, enabled=self.filter.is_enabled(name))
            for name, count in self.filter.universe.items()
        ]
        self.set_rows(rows)
        self._on_summary(*self.filter.summary())

    def set_rows(self, rows: Iterable[ArtistFilterRow]):
        self._syncing = True
        try:
            self.model.setRowCount(0)
            for r in rows:
                name = QStandardItem(r.artist)
                name.setEditable(False)
                name.setCheckable(True)
                name.setCheckState(Qt.CheckState.Checked if r.enabled else Qt.CheckState.Unchecked)
                name.setData(r.artist, Qt.ItemDataRole.UserRole)

                count = QStandardItem(str(r.tracks))
                count.setEditable(False)
                count.setTextAlignment(Qt.AlignmentFlag.AlignCenter)

                self.model.appendRow([name, count])
        finally:
            self._syncing = False

    def _sync_checks(self):
        self._syncing = True
        try:
            for row in range(self.model.rowCount()):
                item = self.model.item(row, 0)
                enabled = self.filter.is_enabled(item.data(Qt.ItemDataRole.UserRole))
                item.setCheckState(Qt.CheckState.Checked if enabled else Qt.CheckState.Unchecked)
        finally:
            self._syncing = False

    # -------------------------
    # UI Events
    # -------------------------

    def _on_item_changed(self, item: QStandardItem):
        if self._syncing or item.column() != 0:
            return
        artist = item.data(Qt.ItemDataRole.UserRole)
        if artist is None:
            return
        self.session.set_artist_enabled(str(artist), item.checkState() == Qt.CheckState.Checked)

    def _on_reasserted(self, artist: str):
        # last enabled artist can't be switched off; put the tick back
        for row in range(self.model.rowCount()):
            item = self.model.item(row, 0)
            if item.data(Qt.ItemDataRole.UserRole) == artist:
                self._syncing = True
                try:
                    item.setCheckState(Qt.CheckState.Checked)
                finally:
                    self._syncing = False
                return

    def _on_summary(self, _enabled: int, _total: int):
        self.lbl_summary.setText(self.filter.summary_text())
