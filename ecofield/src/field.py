"""Bounded grid field — locations, occupancy, adjacency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Union

if TYPE_CHECKING:
    from .biome import BiomeFeature
    from .organism import Organism
    from .species import Species


@dataclass(frozen=True)
class Location:
    """A (row, col) address on the field."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


Occupant = Union["Organism", "BiomeFeature"]


class Field:
    """Rectangular, non-wrapping grid holding at most one visible occupant per cell.

    Organisms and biome features are kept in separate layers. Features are
    terrain: they persist for the run and sit underneath any organism that is
    allowed to stand on them. ``object_at`` always reports the top-most
    occupant, so a cell never reports more than one thing.
    """

    def __init__(self, depth: int, width: int):
        self.depth = depth
        self.width = width
        self._organisms: dict[Location, Organism] = {}
        self._features: dict[Location, BiomeFeature] = {}

    # ── Occupancy ───────────────────────────────────────────────

    def object_at(self, location: Location) -> Occupant | None:
        organism = self._organisms.get(location)
        if organism is not None:
            return organism
        return self._features.get(location)

    def organism_at(self, location: Location) -> Organism | None:
        return self._organisms.get(location)

    def feature_at(self, location: Location) -> BiomeFeature | None:
        return self._features.get(location)

    def place(self, occupant: Occupant, location: Location) -> Organism | None:
        """Put an occupant at ``location``, overwriting what was there.

        Placing a feature evicts an organism standing on that cell unless the
        feature lets its species cross; the evicted organism is returned so
        the caller can retire it.
        """
        from .biome import BiomeFeature

        if isinstance(occupant, BiomeFeature):
            self._features[location] = occupant
            standing = self._organisms.get(location)
            if standing is None or occupant.allows(standing.species):
                return None
            return self._organisms.pop(location)
        self._organisms[location] = occupant
        return None

    def clear(self, location: Location) -> None:
        """Remove the organism at ``location``. Terrain stays."""
        self._organisms.pop(location, None)

    def clear_organisms(self) -> None:
        self._organisms.clear()

    def in_bounds(self, location: Location) -> bool:
        return 0 <= location.row < self.depth and 0 <= location.col < self.width

    # ── Adjacency ───────────────────────────────────────────────

    def adjacent(self, location: Location) -> list[Location]:
        """In-bounds neighbours, row-major over the 3x3 block, centre excluded."""
        neighbours = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                where = Location(location.row + dr, location.col + dc)
                if self.in_bounds(where):
                    neighbours.append(where)
        return neighbours

    def free_adjacent(
        self, location: Location, species: Species | None = None
    ) -> list[Location]:
        """Unoccupied neighbours in adjacency order.

        With ``species`` given, cells whose only occupant is a feature that
        species may cross also count as free.
        """
        free = []
        for where in self.adjacent(location):
            if where in self._organisms:
                continue
            feature = self._features.get(where)
            if feature is not None and (species is None or not feature.allows(species)):
                continue
            free.append(where)
        return free

    def any_free_adjacent(
        self, location: Location, species: Species | None = None
    ) -> Location | None:
        free = self.free_adjacent(location, species)
        return free[0] if free else None

    # ── Views ───────────────────────────────────────────────────

    def organisms(self) -> Iterator[Organism]:
        return iter(list(self._organisms.values()))

    def feature_locations(self) -> set[Location]:
        return set(self._features)
