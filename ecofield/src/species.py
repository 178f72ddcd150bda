"""Species tags and their fixed behaviour parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class InvariantViolation(RuntimeError):
    """Internal state the simulator should never reach."""


class Species(str, Enum):
    FOX = "fox"
    EAGLE = "eagle"
    BEAR = "bear"
    RACCOON = "raccoon"
    PIG = "pig"
    RABBIT = "rabbit"
    RADISH = "radish"


class FeedingStyle(str, Enum):
    HUNT_FIRST = "hunt_first"   # eat the first eligible neighbour, move onto it
    HUNT_ALL = "hunt_all"       # eat every eligible neighbour, move onto the last
    GRAZE = "graze"             # eat a neighbouring resource in place
    NONE = "none"


@dataclass(frozen=True)
class SpeciesProfile:
    """Per-species constants. ``food_values`` maps prey species to the energy
    an eater is reset to after consuming one."""
    species: Species
    nocturnal: bool
    breeding_age: int
    max_age: int
    breeding_probability: float
    max_litter_size: int
    birth_energy: int
    feeding: FeedingStyle
    food_values: dict[Species, int] = field(default_factory=dict)
    crosses_river: bool = False
    sessile: bool = False
    hunger_loss: int = 1
    diseased_hunger_loss: int | None = None


PROFILES: dict[Species, SpeciesProfile] = {
    Species.FOX: SpeciesProfile(
        species=Species.FOX,
        nocturnal=True,
        breeding_age=14,
        max_age=275,
        breeding_probability=0.09,
        max_litter_size=4,
        birth_energy=20,
        feeding=FeedingStyle.HUNT_FIRST,
        food_values={Species.RABBIT: 20, Species.PIG: 25, Species.RACCOON: 5},
        diseased_hunger_loss=5,
    ),
    Species.EAGLE: SpeciesProfile(
        species=Species.EAGLE,
        nocturnal=False,
        breeding_age=10,
        max_age=400,
        breeding_probability=0.08,
        max_litter_size=2,
        birth_energy=17,
        feeding=FeedingStyle.HUNT_ALL,
        food_values={Species.RABBIT: 17},
        crosses_river=True,
        diseased_hunger_loss=3,
    ),
    Species.BEAR: SpeciesProfile(
        species=Species.BEAR,
        nocturnal=False,
        breeding_age=20,
        max_age=500,
        breeding_probability=0.05,
        max_litter_size=2,
        birth_energy=30,
        feeding=FeedingStyle.HUNT_FIRST,
        food_values={
            Species.PIG: 30,
            Species.RABBIT: 15,
            Species.RACCOON: 12,
            Species.RADISH: 8,
        },
        crosses_river=True,
        diseased_hunger_loss=4,
    ),
    Species.RACCOON: SpeciesProfile(
        species=Species.RACCOON,
        nocturnal=True,
        breeding_age=6,
        max_age=150,
        breeding_probability=0.11,
        max_litter_size=3,
        birth_energy=11,
        feeding=FeedingStyle.HUNT_FIRST,
        food_values={Species.RABBIT: 11, Species.RADISH: 9},
        diseased_hunger_loss=3,
    ),
    Species.PIG: SpeciesProfile(
        species=Species.PIG,
        nocturnal=False,
        breeding_age=8,
        max_age=120,
        breeding_probability=0.10,
        max_litter_size=5,
        birth_energy=12,
        feeding=FeedingStyle.GRAZE,
        food_values={Species.RADISH: 12},
        diseased_hunger_loss=3,
    ),
    Species.RABBIT: SpeciesProfile(
        species=Species.RABBIT,
        nocturnal=False,
        breeding_age=5,
        max_age=40,
        breeding_probability=0.12,
        max_litter_size=4,
        birth_energy=10,
        feeding=FeedingStyle.GRAZE,
        food_values={Species.RADISH: 10},
        diseased_hunger_loss=2,
    ),
    Species.RADISH: SpeciesProfile(
        species=Species.RADISH,
        nocturnal=False,
        breeding_age=3,
        max_age=60,
        breeding_probability=0.15,
        max_litter_size=3,
        birth_energy=1,
        feeding=FeedingStyle.NONE,
        sessile=True,
        hunger_loss=0,
    ),
}

# Fixed check order for initial population: first successful draw wins a cell.
POPULATION_ORDER = [
    Species.FOX,
    Species.RABBIT,
    Species.EAGLE,
    Species.RADISH,
    Species.PIG,
    Species.BEAR,
    Species.RACCOON,
]


def profile_for(species: Species) -> SpeciesProfile:
    try:
        return PROFILES[species]
    except KeyError:
        raise InvariantViolation(f"No behaviour profile for species {species!r}") from None


def parse_species(name: str) -> Species:
    """Resolve a config key such as ``"fox"`` to its tag."""
    try:
        return Species(name.lower())
    except ValueError:
        raise ValueError(
            f"Unknown species: {name!r}. Expected one of "
            f"{', '.join(s.value for s in Species)}"
        ) from None
