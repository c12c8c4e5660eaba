"""Tests for the breadcrumb line string codec."""

from eso_maped.catalog import Catalog
from eso_maped.markers import (
    WHITE,
    BreadcrumbLine,
    Position3D,
    build_lines_string,
    parse_lines_string,
)

RED = (255, 0, 0, 255)

# Two connected lines sharing the point (40, 50, 60)
PATH_STRING = "1;A;14;1E;2;FFFFFF;FF0000;3;0;0;0;1E;1E;1E;3C;0;0;2;1;1;2;2;2;3;"


def path_lines() -> list[BreadcrumbLine]:
    return [
        BreadcrumbLine(Position3D(10, 20, 30), Position3D(40, 50, 60)),
        BreadcrumbLine(Position3D(40, 50, 60), Position3D(70, 20, 30), colour=RED),
    ]


class TestBuildLinesString:
    """Test building line strings."""

    def test_shared_points_stored_once(self) -> None:
        """Test connected lines share point table entries."""
        assert build_lines_string({1: path_lines()}) == PATH_STRING

    def test_inactive_lines_omitted(self) -> None:
        """Test inactive lines and empty zones produce nothing."""
        lines = [BreadcrumbLine(Position3D(0, 0, 0), Position3D(1, 1, 1), active=False)]
        assert build_lines_string({1: lines, 2: []}) == ""

    def test_negative_offsets_and_alpha(self) -> None:
        """Test negative minimums and translucent colours."""
        line = BreadcrumbLine(
            Position3D(-10, 0, -20), Position3D(5, 0, 0), colour=(0, 0, 255, 128)
        )
        assert build_lines_string({2: [line]}) == (
            "2;-A;0;-14;1;0000FF80;2;0;0;0;F;0;14;1;1;1;2;"
        )


class TestParseLinesString:
    """Test parsing line strings."""

    def test_path(self) -> None:
        """Test a built string parses back to the same lines."""
        result = parse_lines_string(PATH_STRING)
        assert result == {1: path_lines()}
        assert [line.id for line in result[1]] == [0, 1]
        assert result[1][1].colour == RED

    def test_lowercase_and_negative(self) -> None:
        """Test hex is read case-insensitively and with a sign."""
        [line] = parse_lines_string("2;-a;0;-14;1;0000ff80;2;0;0;0;f;0;14;1;1;1;2;")[2]
        assert line.position1 == Position3D(-10, 0, -20)
        assert line.position2 == Position3D(5, 0, 0)
        assert line.colour == (0, 0, 255, 128)

    def test_garbage_before_zone(self) -> None:
        """Test leading junk on the zone token is ignored."""
        result = parse_lines_string("junk xyz" + PATH_STRING)
        assert list(result) == [1]
        assert len(result[1]) == 2

    def test_malformed_numbers_read_as_zero(self) -> None:
        """Test malformed tokens never abort the parse."""
        text = "1;A;14;1E;1;ZZZZ;2;0;0;0;G;1;1;1;1;1;2;"
        [line] = parse_lines_string(text)[1]
        assert line.colour == (0, 0, 0, 255)
        assert line.position1 == Position3D(10, 20, 30)
        assert line.position2 == Position3D(10, 21, 31)

    def test_index_zero_clamps_to_first(self) -> None:
        """Test index 0 refers to the first table entry."""
        text = "1;0;0;0;1;FF0000;2;0;0;0;5;5;5;1;0;0;2;"
        [line] = parse_lines_string(text)[1]
        assert line.colour == RED
        assert line.position1 == Position3D(0, 0, 0)

    def test_out_of_range_indices(self) -> None:
        """Test bad point indices drop the line and bad colour indices give white."""
        text = "1;0;0;0;1;FF0000;2;0;0;0;5;5;5;2;9;1;2;1;1;7;"
        [line] = parse_lines_string(text)[1]
        assert line.colour == WHITE
        assert line.position2 == Position3D(5, 5, 5)

    def test_zone_out_of_range(self) -> None:
        """Test zone ids above 65535 are dropped."""
        text = "10000;0;0;0;1;FF0000;2;0;0;0;5;5;5;1;1;1;2;"
        assert parse_lines_string(text) == {}

    def test_truncated_block(self) -> None:
        """Test counts larger than the remaining tokens do not overrun."""
        result = parse_lines_string("1;0;0;0;1;FF0000;50;0;0;0;")
        assert result == {}

    def test_other_formats_are_skipped(self) -> None:
        """Test the combined marker text can be fed directly."""
        text = (
            "/1//1,2,3,4/\n"
            "<1]0]0:0:0]]]]FFFFFFFF:1]]0:0:0:a;b>\n"
            + PATH_STRING
        )
        assert parse_lines_string(text) == {1: path_lines()}

    def test_map_from_midpoint(self, catalog: Catalog) -> None:
        """Test the line's map comes from its midpoint."""
        line = BreadcrumbLine(Position3D(63400, 0, 75500), Position3D(63600, 0, 75700))
        [parsed] = parse_lines_string(build_lines_string({1000: [line]}), catalog)[1000]
        assert parsed.map_id == 1391

    def test_no_lines(self) -> None:
        """Test text without tokens gives nothing."""
        assert parse_lines_string("") == {}
        assert parse_lines_string("/1//1,2,3,4/") == {}
