"""
Tests for the enabled-artist filter and its non-empty rule.
"""

import random

import pytest

from core.artist_filter import ArtistFilterState
from core.models import TrackRecord


@pytest.fixture
def state(tracks):
    s = ArtistFilterState()
    s.set_catalog(tracks)
    return s


def _record(signal):
    seen = []
    signal.connect(lambda *args: seen.append(args))
    return seen


class TestUniverse:
    def test_universe_sorted_with_counts(self, state):
        assert state.universe == {"Artist X": 2, "Artist Y": 1, "Artist Z": 1}
        assert state.artists == ["Artist X", "Artist Y", "Artist Z"]

    def test_defaults_to_all_enabled(self, state):
        assert state.enabled == {"Artist X", "Artist Y", "Artist Z"}
        assert state.summary() == (3, 3)

    def test_new_catalog_keeps_surviving_selection(self, state, tracks):
        state.disable("Artist Y")
        state.set_catalog(tracks + [TrackRecord.create("e.mp3", "E", "Artist W")])
        assert state.enabled == {"Artist X", "Artist Z"}

    def test_empty_catalog_allows_empty_set(self):
        s = ArtistFilterState()
        s.set_catalog([])
        assert s.enabled == frozenset()
        assert s.summary() == (0, 0)


class TestMutations:
    def test_disable_and_enable(self, state):
        assert state.disable("Artist X") is True
        assert not state.is_enabled("Artist X")
        assert state.enable("Artist X") is True
        assert state.is_enabled("Artist X")

    def test_disabling_last_artist_reasserts_it(self, state):
        reasserted = _record(state.reasserted)
        state.disable("Artist X")
        state.disable("Artist Y")
        assert state.disable("Artist Z") is False
        assert state.enabled == {"Artist Z"}
        assert reasserted == [("Artist Z",)]

    def test_two_artist_scenario_keeps_last_disabled(self):
        s = ArtistFilterState()
        s.set_catalog([
            TrackRecord.create("a.mp3", "Song A", "Artist X"),
            TrackRecord.create("b.mp3", "Song B", "Artist Y"),
        ])
        s.disable("Artist X")
        s.disable("Artist Y")
        assert s.enabled == {"Artist Y"}

    def test_select_none_pins_first_artist(self, state):
        state.disable("Artist X")
        assert state.select_none() is True
        assert state.enabled == {"Artist X"}

    def test_select_all(self, state):
        state.select_none()
        assert state.select_all() is True
        assert state.summary() == (3, 3)
        assert state.select_all() is False

    def test_unknown_artist_ignored(self, state):
        changed = _record(state.changed)
        assert state.enable("Nobody") is False
        assert state.disable("Nobody") is False
        assert changed == []

    def test_successful_mutation_emits_changed_and_summary(self, state):
        changed = _record(state.changed)
        summaries = _record(state.summaryChanged)
        state.disable("Artist Y")
        assert changed == [(frozenset({"Artist X", "Artist Z"}),)]
        assert summaries == [(2, 3)]

    def test_noop_mutation_emits_nothing(self, state):
        changed = _record(state.changed)
        state.enable("Artist X")
        state.select_all()
        assert changed == []

    def test_never_empty_under_random_operations(self, state):
        rng = random.Random(7)
        artists = state.artists
        for _ in range(500):
            op = rng.choice(["disable", "disable", "enable", "none", "all"])
            if op == "disable":
                state.disable(rng.choice(artists))
            elif op == "enable":
                state.enable(rng.choice(artists))
            elif op == "none":
                state.select_none()
            else:
                state.select_all()
            assert state.enabled, f"empty after {op}"


class TestRestore:
    def test_restore_applies_known_names(self, state):
        state.restore(["Artist Y", "Ghost"])
        assert state.enabled == {"Artist Y"}

    def test_restore_with_no_matches_enables_all(self, state):
        state.select_none()
        state.restore(["Ghost"])
        assert state.summary() == (3, 3)

    def test_restore_none_means_all(self, state):
        state.select_none()
        state.restore(None)
        assert state.summary() == (3, 3)

    def test_candidate_pool_follows_filter(self, state, tracks):
        state.disable("Artist X")
        assert [t.filename for t in state.candidate_pool(tracks)] == ["b.mp3", "d.mp3"]


class TestSummaryText:
    def test_all_enabled(self, state):
        assert state.summary_text() == "All artists enabled"

    def test_partial_selection(self, state):
        state.disable("Artist Y")
        assert state.summary_text() == "2/3 artists enabled"

    def test_select_none_keeps_one(self, state):
        state.select_none()
        assert state.summary_text() == "1/3 artists enabled"
