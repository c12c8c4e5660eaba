"""Tests for the rich marker string codec."""

import logging

import pytest

from eso_maped.catalog import NO_MAP, Catalog
from eso_maped.markers import (
    WHITE,
    Position3D,
    RichMarker,
    SimpleMarker,
    Texture,
    UnknownTexture,
    build_rich_string,
    escape_text,
    parse_rich_string,
    unescape_text,
)

RED = (255, 0, 0, 255)

RECORD = (
    "<1000]1700000000]64:C8:12C]1.5:2]10:2]90:2]FFFFFFFF:1;FF0000FF:2]"
    "M0RMarkers/textures/circle.dds:1]0:0:0:Tank\ue000 go here,32:0:A:>"
)


def two_markers() -> list[RichMarker]:
    return [
        RichMarker(
            Position3D(100, 200, 300),
            background_texture=Texture.CIRCLE,
            text="Tank: go here",
        ),
        RichMarker(Position3D(150, 200, 310), size=1.5, colour=RED, orientation=(10, 90)),
    ]


class TestEscaping:
    """Test free-text escaping."""

    def test_delimiters_are_replaced(self) -> None:
        """Test no record delimiter survives escaping."""
        escaped = escape_text("a:b,c]d;e>f\ng")
        for delimiter in ":,];>\n":
            assert delimiter not in escaped
        assert "\\n" in escaped

    def test_round_trip(self) -> None:
        """Test unescape reverses escape."""
        text = "Stack: left, then ]right[; go > now\nsecond line"
        assert unescape_text(escape_text(text)) == text

    def test_literal_backslash_n_reads_as_newline(self) -> None:
        """Test a typed backslash-n cannot be told apart from a newline."""
        marker = RichMarker(position=Position3D(0, 0, 0), text="C:\\new")
        parsed = parse_rich_string(build_rich_string({1: [marker]}, timestamp=0))
        assert parsed[1][0].text == "C:\new"


class TestBuildRichString:
    """Test building rich marker records."""

    def test_record_layout(self) -> None:
        """Test the full record of two markers."""
        assert build_rich_string({1000: two_markers()}, timestamp=1700000000) == RECORD

    def test_default_size_omitted(self) -> None:
        """Test size 1.0 is left out of the size groups."""
        record = build_rich_string({5: [RichMarker(Position3D(0, 0, 0))]}, timestamp=0)
        assert record == "<5]0]0:0:0]]]]FFFFFFFF:1]]0:0:0:>"

    def test_groups_share_values(self) -> None:
        """Test markers with equal attributes share one group."""
        markers = [
            RichMarker(Position3D(0, 0, 0), size=2.0),
            RichMarker(Position3D(1, 0, 0)),
            RichMarker(Position3D(2, 0, 0), size=2.0),
        ]
        record = build_rich_string({5: markers}, timestamp=0)
        assert "]2:1,3]" in record
        assert "]FFFFFFFF:1,2,3]" in record

    def test_inactive_and_simple_skipped(self) -> None:
        """Test only active rich markers are written."""
        markers = {
            1: [RichMarker(Position3D(0, 0, 0), active=False), SimpleMarker(Position3D(1, 1, 1))],
            2: [RichMarker(Position3D(0, 0, 0))],
        }
        record = build_rich_string(markers, timestamp=0)
        assert record.startswith("<2]")
        assert record.count("<") == 1

    def test_custom_texture_is_escaped(self) -> None:
        """Test custom texture paths are kept and escaped."""
        marker = RichMarker(Position3D(0, 0, 0), background_texture=UnknownTexture("a:b.dds"))
        record = build_rich_string({5: [marker]}, timestamp=0)
        assert "]a\ue000b.dds:1]" in record


class TestParseRichString:
    """Test parsing rich marker records."""

    def test_record(self, catalog: Catalog) -> None:
        """Test a full record parses to its markers."""
        result = parse_rich_string(RECORD, catalog)
        assert result == {1000: two_markers()}

        first, second = result[1000]
        assert first.text == "Tank: go here"
        assert first.background_texture is Texture.CIRCLE
        assert first.orientation is None
        assert second.size == 1.5
        assert second.colour == RED
        assert second.orientation == (10, 90)
        assert [m.id for m in result[1000]] == [0, 1]

    def test_defaults(self) -> None:
        """Test attributes missing from every group take their defaults."""
        [marker] = parse_rich_string("<1000]0]0:0:0]]]]]]5:5:5:>")[1000]
        assert marker.position == Position3D(5, 5, 5)
        assert marker.size == 1.0
        assert marker.colour == WHITE
        assert marker.orientation is None
        assert marker.background_texture is None
        assert marker.text is None

    def test_one_orientation_half(self) -> None:
        """Test a marker listed only in the yaw groups gets pitch 0."""
        [marker] = parse_rich_string("<1]0]0:0:0]]]180:1]]]0:0:0:>")[1]
        assert marker.orientation == (0, 180)

    def test_angles_are_clamped(self) -> None:
        """Test pitch and yaw are clamped to their ranges."""
        [marker] = parse_rich_string("<1]0]0:0:0]]-120:1]400:1]]]0:0:0:>")[1]
        assert marker.orientation == (-90, 360)

    def test_text_round_trip(self) -> None:
        """Test delimiters and newlines in text survive a rebuild."""
        text = "a:b,c]d;e>f\ng"
        record = build_rich_string({1: [RichMarker(Position3D(1, 2, 3), text=text)]}, timestamp=0)
        [marker] = parse_rich_string(record)[1]
        assert marker.text == text

    def test_short_record_drops_everything(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a record with fewer than nine fields empties the whole result."""
        good = build_rich_string({1: [RichMarker(Position3D(1, 2, 3))]}, timestamp=0)
        with caplog.at_level(logging.WARNING, logger="eso_maped"):
            assert parse_rich_string(good + "<1000]123]0:0:0>") == {}
        assert "Malformed rich marker record" in caplog.text

    def test_non_numeric_zone_skips_record(self) -> None:
        """Test a record with a bad zone is skipped, others are kept."""
        good = build_rich_string({1: [RichMarker(Position3D(1, 2, 3))]}, timestamp=0)
        result = parse_rich_string("<abc]0]0:0:0]]]]]]0:0:0:>" + good)
        assert list(result) == [1]

    def test_unknown_zone_kept_unmapped(self, catalog: Catalog) -> None:
        """Test zones missing from the catalog still parse."""
        [marker] = parse_rich_string("<4242]0]0:0:0]]]]]]0:0:0:>", catalog)[4242]
        assert marker.map_id == NO_MAP

    def test_map_resolution(self, catalog: Catalog) -> None:
        """Test markers resolve against the zone's maps."""
        record = build_rich_string(
            {1051: [RichMarker(Position3D(150000, 21000, 50000))]}, timestamp=0
        )
        [marker] = parse_rich_string(record, catalog)[1051]
        assert marker.map_id == 1503

    def test_custom_texture(self) -> None:
        """Test unknown texture paths parse to UnknownTexture."""
        [marker] = parse_rich_string("<1]0]0:0:0]]]]]a\ue000b.dds:1]0:0:0:>")[1]
        assert marker.background_texture == UnknownTexture("a:b.dds")
