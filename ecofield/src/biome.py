"""Static biome features and procedural river placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .field import Field, Location
from .species import Species

if TYPE_CHECKING:
    from .organism import Organism

logger = logging.getLogger(__name__)

RIVER_CROSSERS = frozenset({Species.EAGLE, Species.BEAR})


@dataclass
class BiomeFeature:
    """Terrain occupying one cell. Blocks every species not listed as a crosser."""
    location: Location
    crossers: frozenset[Species] = field(default_factory=frozenset)
    kind: str = "feature"

    def allows(self, species: Species) -> bool:
        return species in self.crossers


@dataclass
class River(BiomeFeature):
    crossers: frozenset[Species] = RIVER_CROSSERS
    kind: str = "river"


def river_band_width(width: int) -> int:
    """Number of columns a river spans on a field ``width`` cells wide."""
    return width // 25 + 1


def river_cells(
    depth: int, width: int, bottom_fraction: float, top_fraction: float
) -> list[Location]:
    """Cells covered by a river meeting the bottom edge at ``bottom_fraction``
    of the width and the top edge at ``top_fraction``.

    Equal fractions give a straight vertical band. Otherwise each row gets a
    band starting at the column interpolated between the two edge points.
    """
    band = river_band_width(width)
    bottom_col = int(bottom_fraction * width)
    top_col = int(top_fraction * width)

    cells = []
    for row in range(depth):
        if bottom_col == top_col or depth == 1:
            start = top_col
        else:
            # row 0 is the top edge, row depth-1 the bottom edge
            t = (depth - 1 - row) / (depth - 1)
            start = int(bottom_col + (top_col - bottom_col) * t)
        for col in range(start, start + band):
            if 0 <= col < width:
                cells.append(Location(row, col))
    return cells


def generate_river(
    field_: Field, bottom_fraction: float, top_fraction: float
) -> list[Organism]:
    """Lay a river onto ``field_``. Returns organisms evicted from river cells."""
    evicted = []
    for location in river_cells(field_.depth, field_.width, bottom_fraction, top_fraction):
        displaced = field_.place(River(location), location)
        if displaced is not None:
            evicted.append(displaced)
    if evicted:
        logger.debug("River at %.2f/%.2f displaced %d organisms",
                     bottom_fraction, top_fraction, len(evicted))
    return evicted
