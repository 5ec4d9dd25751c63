# ui/track_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QFont
from core.models import TrackRecord

COLUMNS = ["Title", "Artist", "Album"]


class TrackTableModel(QAbstractTableModel):
    def __init__(self, rows):
        super().__init__()
        self._rows: list[TrackRecord] = list(rows)
        self._now_playing: TrackRecord | None = None

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(COLUMNS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return COLUMNS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return row.title
            if col == 1:
                return row.artist
            if col == 2:
                return row.album
        if role == Qt.FontRole and row is self._now_playing:
            f = QFont()
            f.setBold(True)
            return f
        if role == Qt.UserRole:
            return row
        return None

    def track_at(self, row: int) -> TrackRecord | None:
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]

    def row_for_track(self, track: TrackRecord) -> int:
        for i, r in enumerate(self._rows):
            if r is track:
                return i
        return -1

    def set_now_playing(self, track: TrackRecord | None):
        self._now_playing = track
        if self._rows:
            self.dataChanged.emit(self.index(0, 0), self.index(len(self._rows) - 1, len(COLUMNS) - 1))
