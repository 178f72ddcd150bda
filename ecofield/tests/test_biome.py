"""Tests for biome features and procedural river placement."""

from __future__ import annotations

from ecofield.src.biome import River, generate_river, river_band_width, river_cells
from ecofield.src.field import Field, Location
from ecofield.src.species import Species
from ecofield.tests.conftest import make_organism, put


class TestRiverFeature:
    def test_crossers(self):
        river = River(Location(0, 0))
        assert river.allows(Species.EAGLE)
        assert river.allows(Species.BEAR)

    def test_blocks_everyone_else(self):
        river = River(Location(0, 0))
        for species in (Species.FOX, Species.RABBIT, Species.PIG, Species.RACCOON, Species.RADISH):
            assert not river.allows(species)

    def test_kind(self):
        assert River(Location(3, 3)).kind == "river"


class TestBandWidth:
    def test_narrow_field(self):
        assert river_band_width(10) == 1

    def test_width_fifty(self):
        assert river_band_width(50) == 3

    def test_width_three_hundred(self):
        assert river_band_width(300) == 13


class TestVerticalRiver:
    def test_columns_cover_band_on_every_row(self):
        depth, width = 8, 50
        cells = set(river_cells(depth, width, 0.6, 0.6))
        start = int(0.6 * width)
        expected = {
            Location(row, col)
            for row in range(depth)
            for col in range(start, start + width // 25 + 1)
        }
        assert cells == expected

    def test_band_is_contiguous(self):
        cells = river_cells(4, 100, 0.2, 0.2)
        for row in range(4):
            cols = sorted(c.col for c in cells if c.row == row)
            assert cols == list(range(cols[0], cols[-1] + 1))

    def test_clipped_at_right_edge(self):
        cells = river_cells(3, 50, 0.98, 0.98)
        assert {c.col for c in cells} == {49}
        assert len(cells) == 3


class TestDiagonalRiver:
    def test_endpoints(self):
        depth, width = 11, 50
        cells = set(river_cells(depth, width, 0.2, 0.8))
        assert Location(depth - 1, 10) in cells
        assert Location(0, 40) in cells

    def test_midpoint_interpolated(self):
        cells = river_cells(11, 50, 0.2, 0.8)
        row5 = sorted(c.col for c in cells if c.row == 5)
        assert row5 == [25, 26, 27]

    def test_every_row_has_water(self):
        cells = river_cells(20, 60, 0.9, 0.1)
        assert {c.row for c in cells} == set(range(20))

    def test_stays_in_bounds(self):
        depth, width = 15, 30
        for cell in river_cells(depth, width, 0.95, 0.0):
            assert 0 <= cell.row < depth
            assert 0 <= cell.col < width


class TestGenerateRiver:
    def test_places_features(self):
        field = Field(6, 50)
        generate_river(field, 0.5, 0.5)
        assert field.feature_locations() == set(river_cells(6, 50, 0.5, 0.5))
        assert all(isinstance(field.object_at(loc), River) for loc in field.feature_locations())

    def test_returns_evicted_organisms(self):
        field = Field(6, 50)
        fox = put(field, make_organism(Species.FOX, 2, 25))
        bystander = put(field, make_organism(Species.RABBIT, 2, 0))
        evicted = generate_river(field, 0.5, 0.5)
        assert evicted == [fox]
        assert field.organism_at(Location(2, 0)) is bystander

    def test_regeneration_is_idempotent(self):
        field = Field(6, 50)
        generate_river(field, 0.2, 0.7)
        first = field.feature_locations()
        generate_river(field, 0.2, 0.7)
        assert field.feature_locations() == first
