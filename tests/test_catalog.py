"""
Tests for catalog line parsing and count interpretation.
"""

import pytest

from core.models import UNKNOWN_ARTIST, TrackRecord
from library.catalog import (
    CatalogState,
    escape_field,
    load_catalog,
    parse_catalog,
    parse_line,
    serialize_record,
    unescape_field,
)


class TestParseLine:
    def test_well_formed_line(self):
        rec = parse_line("(a.mp3=Song A=Artist X=none)")
        assert rec == TrackRecord(filename="a.mp3", title="Song A", artist="Artist X", cover_image=None)

    def test_three_fields_is_enough(self):
        rec = parse_line("(a.mp3=Song A=Artist X)")
        assert rec is not None
        assert rec.cover_image is None

    def test_cover_payload_keeps_equals_padding(self):
        rec = parse_line("(a.mp3=Song=Artist=data:image/png;base64,iVBORw0KGgo==)")
        assert rec.cover_image == "data:image/png;base64,iVBORw0KGgo=="

    def test_escaped_equals_in_title(self):
        rec = parse_line("(a.mp3=E_EQUAL_mc2=Artist=none)")
        assert rec.title == "E=mc2"

    def test_filename_token_is_kept_literal(self):
        rec = parse_line("(x_EQUAL_y.mp3=Song=Artist=none)")
        assert rec.filename == "x_EQUAL_y.mp3"

    def test_blank_title_falls_back_to_filename_stem(self):
        rec = parse_line("(albums/Live/intro.mp3==Artist=none)")
        assert rec.title == "intro"
        assert rec.album == "Live"

    def test_blank_artist_falls_back_to_unknown(self):
        rec = parse_line("(a.mp3=Song A= =none)")
        assert rec.artist == UNKNOWN_ARTIST

    def test_trailing_carriage_return_is_tolerated(self):
        assert parse_line("(a.mp3=Song A=Artist X=none)\r") is not None

    @pytest.mark.parametrize("line", [
        "a.mp3=Song A=Artist X=none)",
        "(a.mp3=Song A=Artist X=none",
        "(a.mp3=Song A)",
        "()",
        "(",
        "(=Song=Artist=none)",
        "garbage",
    ])
    def test_malformed_lines_rejected(self, line):
        assert parse_line(line) is None


class TestParseCatalog:
    def test_skips_bad_lines_without_aborting(self):
        text = "\n".join([
            "(a.mp3=Song A=Artist X=none)",
            "not a record",
            "(b.mp3=only two)",
            "",
            "(c.mp3=Song C=Artist Y=none)",
        ])
        tracks = parse_catalog(text)
        assert [t.filename for t in tracks] == ["a.mp3", "c.mp3"]

    def test_output_never_exceeds_declared_count(self, catalog_text):
        tracks = parse_catalog(catalog_text, expected_count=2)
        assert len(tracks) == 2
        assert [t.filename for t in tracks] == ["a.mp3", "b.mp3"]

    def test_every_record_has_title_and_artist(self):
        text = "(x.mp3===none)\n(y.ogg=Y= =none)"
        for t in parse_catalog(text, expected_count=2):
            assert t.title
            assert t.artist

    def test_parsing_is_idempotent(self, catalog_text):
        assert parse_catalog(catalog_text) == parse_catalog(catalog_text)

    def test_order_is_preserved(self, catalog_text):
        assert [t.filename for t in parse_catalog(catalog_text)] == ["a.mp3", "b.mp3", "c.mp3", "d.mp3"]


class TestEscaping:
    def test_title_with_equals_survives_round_trip(self):
        rec = TrackRecord.create("eq.mp3", "1 + 1 = 2", "Math=Rock")
        parsed = parse_line(serialize_record(rec))
        assert parsed.title == "1 + 1 = 2"
        assert parsed.artist == "Math=Rock"

    def test_unescape_inverts_escape(self):
        assert unescape_field(escape_field("a=b==c")) == "a=b==c"


class TestLoadCatalog:
    def test_two_track_scenario(self):
        text = "(a.mp3=Song A=Artist X=none)\n(b.mp3=Song B=Artist Y=none)"
        result = load_catalog(text, "2")
        assert result.state is CatalogState.READY
        assert len(result.tracks) == 2

    def test_zero_count_is_empty_not_malformed(self):
        result = load_catalog("", "0")
        assert result.state is CatalogState.EMPTY
        assert result.tracks == ()
        assert result.message == "No music files found"

    def test_count_zero_wins_over_stray_text(self):
        assert load_catalog("(a.mp3=A=B=none)", "0\n").state is CatalogState.EMPTY

    def test_positive_count_but_nothing_parsed_is_malformed(self):
        result = load_catalog("junk\nmore junk", "3")
        assert result.state is CatalogState.MALFORMED
        assert result.skipped == 2
        assert result.message == "No tracks available"

    @pytest.mark.parametrize("count_text", ["", "abc", "-1", None])
    def test_unreadable_count_is_malformed(self, count_text):
        assert load_catalog("(a.mp3=A=B=none)", count_text).state is CatalogState.MALFORMED

    def test_skipped_lines_are_counted(self):
        result = load_catalog("(a.mp3=A=B=none)\nbad", "2")
        assert result.ok
        assert result.skipped == 1
        assert result.declared_count == 2
