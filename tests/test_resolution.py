"""Tests for map resolution."""

from eso_maped.catalog import NO_MAP, Catalog, Zone, find_best_map, resolve_map_id
from eso_maped.markers import Position3D


class TestFindBestMap:
    """Test choosing a map for a world position."""

    def test_outside_every_map(self, stacked_zone: Zone) -> None:
        """Test a point outside all boxes gives None."""
        assert find_best_map(Position3D(5000, 100, 5000), stacked_zone) is None

    def test_box_edges_are_inclusive(self, stacked_zone: Zone) -> None:
        """Test points on the bounding box edge are contained."""
        result = find_best_map(Position3D(1000, 100, 0), stacked_zone)
        assert result is not None
        assert result.map_id == 10

    def test_closest_elevation_wins(self, stacked_zone: Zone) -> None:
        """Test stacked floors are told apart by elevation."""
        lower = find_best_map(Position3D(100, 150, 100), stacked_zone)
        upper = find_best_map(Position3D(100, 450, 100), stacked_zone)
        assert lower is not None and lower.map_id == 10
        assert upper is not None and upper.map_id == 11

    def test_smaller_map_breaks_elevation_tie(self, stacked_zone: Zone) -> None:
        """Test the smaller box wins at equal elevation distance."""
        result = find_best_map(Position3D(500, 500, 500), stacked_zone)
        assert result is not None
        assert result.map_id == 12

    def test_area_tie_keeps_catalog_order(self, flat_zone: Zone) -> None:
        """Test equal maps resolve to the first one in the catalog."""
        result = find_best_map(Position3D(1000, 0, 1000), flat_zone)
        assert result is not None
        assert result.map_id == 21

    def test_known_elevation_beats_unknown(self, catalog: Catalog) -> None:
        """Test a map with a reference Y wins over one without, even when far."""
        zone = catalog.get_zone(1000)
        assert zone is not None
        result = find_best_map(Position3D(90000, 99999, 100000), zone)
        assert result is not None
        assert result.map_id == 1392


class TestResolveMapId:
    """Test the map id policy for parsed entities."""

    def test_resolves_in_catalog(self, catalog: Catalog) -> None:
        """Test a contained point resolves to its map."""
        assert resolve_map_id(catalog, 1000, Position3D(63400, 0, 75500)) == 1391

    def test_unknown_zone(self, catalog: Catalog) -> None:
        """Test unknown zones give the sentinel."""
        assert resolve_map_id(catalog, 9999, Position3D(0, 0, 0)) == NO_MAP

    def test_outside_maps(self, catalog: Catalog) -> None:
        """Test points outside every map give the sentinel."""
        assert resolve_map_id(catalog, 1000, Position3D(0, 0, 0)) == NO_MAP

    def test_without_catalog(self) -> None:
        """Test no catalog resolves nothing."""
        assert resolve_map_id(None, 1000, Position3D(63400, 0, 75500)) == NO_MAP
