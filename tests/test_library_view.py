"""
Tests for text search over the browsable catalog.
"""

import pytest

from core.models import TrackRecord
from library.library_view import LibraryView


@pytest.fixture
def view():
    return LibraryView([
        TrackRecord.create("Ambient/Drift/one.mp3", "Morning Light", "Hania Rani"),
        TrackRecord.create("Rock/Paranoid/iron.mp3", "Iron Man", "Black Sabbath"),
        TrackRecord.create("Chanson/Best Of/mer.mp3", "La Mer", "Charles Trénet"),
        TrackRecord.create("loose.mp3", "", "Unknown Artist"),
    ])


def _names(tracks):
    return [t.filename for t in tracks]


def test_empty_query_returns_catalog_order(view):
    assert _names(view.filter("")) == _names(view.tracks)
    assert _names(view.filter("   ")) == _names(view.tracks)
    assert _names(view.filter(None)) == _names(view.tracks)


def test_matches_title_case_insensitively(view):
    assert _names(view.filter("iron MAN")) == ["Rock/Paranoid/iron.mp3"]


def test_matches_artist(view):
    assert _names(view.filter("sabbath")) == ["Rock/Paranoid/iron.mp3"]


def test_matches_album_from_folder(view):
    assert _names(view.filter("drift")) == ["Ambient/Drift/one.mp3"]


def test_accents_are_ignored(view):
    assert _names(view.filter("trenet")) == ["Chanson/Best Of/mer.mp3"]


def test_result_keeps_catalog_order(view):
    assert _names(view.filter("a")) == [
        "Ambient/Drift/one.mp3",
        "Rock/Paranoid/iron.mp3",
        "Chanson/Best Of/mer.mp3",
        "loose.mp3",
    ]


def test_no_match(view):
    assert view.filter("zzz") == []


def test_title_defaults_to_filename_stem(view):
    assert view.filter("loose")[0].title == "loose"
