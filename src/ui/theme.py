# ui/theme.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    window: str
    surface: str
    alt_surface: str
    border: str
    text: str
    muted: str
    accent: str


DARK = Palette(
    window="#020617",
    surface="#0b1222",
    alt_surface="#030712",
    border="#1f2937",
    text="#e5e7eb",
    muted="#9ca3af",
    accent="#38bdf8",
)

LIGHT = Palette(
    window="#f8fafc",
    surface="#ffffff",
    alt_surface="#f1f5f9",
    border="#cbd5e1",
    text="#0f172a",
    muted="#475569",
    accent="#0284c7",
)


def palette_for(dark: bool) -> Palette:
    return DARK if dark else LIGHT


def stylesheet(dark: bool) -> str:
    p = palette_for(dark)
    return f"""
    QMainWindow, QWidget {{
        background-color: {p.window};
        color: {p.text};
    }}

    QWidget#PlayerBar {{
        background-color: {p.window};
        border-top: 1px solid {p.border};
    }}

    QToolButton {{
        border: 1px solid transparent;
        background: transparent;
        padding: 6px;
        border-radius: 10px;
    }}
    QToolButton:hover {{
        background: {p.surface};
        border-color: {p.border};
    }}
    QToolButton:checked {{
        border-color: {p.accent};
    }}
    QToolButton#BtnPlay {{
        background: {p.surface};
        border: 1px solid {p.border};
        border-radius: 999px;
        padding: 8px;
    }}
    QToolButton#BtnPlay:hover {{
        border-color: {p.accent};
    }}

    QSlider::groove:horizontal {{
        height: 4px;
        background: {p.alt_surface};
        border-radius: 2px;
    }}
    QSlider::handle:horizontal {{
        width: 12px;
        height: 12px;
        margin: -4px 0;
        border-radius: 6px;
        background: {p.accent};
    }}
    QSlider::sub-page:horizontal {{
        background: {p.accent};
        border-radius: 2px;
    }}

    QLabel {{
        color: {p.muted};
        font-size: 11px;
    }}
    QLabel#NowPlaying {{
        color: {p.text};
        font-size: 12px;
    }}

    QLineEdit, QPushButton {{
        background: {p.surface};
        border: 1px solid {p.border};
        border-radius: 8px;
        padding: 4px 8px;
        color: {p.text};
    }}
    QPushButton:hover {{ border-color: {p.accent}; }}

    QTableView#TrackTable, QTableView#ArtistTable {{
        background-color: {p.window};
        alternate-background-color: {p.alt_surface};
        border: none;
        color: {p.text};
        gridline-color: {p.window};
        selection-background-color: {p.accent};
        selection-color: {p.window};
    }}

    QHeaderView::section {{
        background-color: {p.window};
        color: {p.muted};
        padding: 4px 6px;
        border: none;
        border-bottom: 1px solid {p.border};
        font-size: 11px;
    }}

    QTableView::item {{
        padding: 4px 6px;
    }}
    """
