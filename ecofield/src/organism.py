"""Organism state and the per-tick act transition: age, hunger, breed, feed, move."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable

from .field import Field, Location
from .species import FeedingStyle, InvariantViolation, Species, SpeciesProfile, profile_for

logger = logging.getLogger(__name__)

FEMALE_PROBABILITY = 0.5


@dataclass(eq=False)
class Organism:
    """A living grid occupant. Compared by identity."""

    species: Species
    location: Location | None
    female: bool
    age: int = 0
    energy: int = 0
    alive: bool = True
    diseased: bool = False
    hunger_loss: int | None = None

    def __post_init__(self):
        if self.hunger_loss is None:
            self.hunger_loss = self.profile.hunger_loss

    @classmethod
    def newborn(cls, species: Species, location: Location, female: bool) -> Organism:
        """Age 0, full energy."""
        return cls(
            species=species,
            location=location,
            female=female,
            energy=profile_for(species).birth_energy,
        )

    @classmethod
    def founder(
        cls,
        species: Species,
        location: Location,
        rng: random.Random,
        female_probability: float = FEMALE_PROBABILITY,
    ) -> Organism:
        """Member of the initial population: random age, random energy."""
        profile = profile_for(species)
        age = rng.randrange(profile.max_age)
        if profile.hunger_loss == 0:
            energy = profile.birth_energy
        else:
            energy = rng.randrange(profile.birth_energy)
        female = rng.random() <= female_probability
        return cls(species=species, location=location, female=female, age=age, energy=energy)

    @property
    def profile(self) -> SpeciesProfile:
        return profile_for(self.species)

    @property
    def nocturnal(self) -> bool:
        return self.profile.nocturnal

    # ── State transitions ───────────────────────────────────────

    def set_dead(self, field: Field) -> None:
        self.alive = False
        if self.location is not None and field.organism_at(self.location) is self:
            field.clear(self.location)
        self.location = None

    def infect(self) -> None:
        """One-way. Hunger loss goes up and stays up."""
        if self.diseased:
            return
        self.diseased = True
        raised = self.profile.diseased_hunger_loss
        self.hunger_loss = max(raised or 0, self.hunger_loss + 1)

    def move_to(self, field: Field, destination: Location) -> None:
        if self.location is not None:
            field.clear(self.location)
        self.location = destination
        field.place(self, destination)

    def to_dict(self) -> dict:
        return {
            "species": self.species.value,
            "position": [self.location.row, self.location.col] if self.location else None,
            "age": self.age,
            "energy": self.energy,
            "female": self.female,
            "alive": self.alive,
            "diseased": self.diseased,
        }


# ── Act ─────────────────────────────────────────────────────────


def act(
    organism: Organism,
    field: Field,
    rng: random.Random,
    newborns: list[Organism],
    female_probability: float = FEMALE_PROBABILITY,
) -> None:
    """Run one tick of an organism's life. Offspring go to ``newborns``."""
    if not organism.alive:
        return
    profile = organism.profile

    organism.age += 1
    if organism.age >= profile.max_age:
        organism.set_dead(field)
        return

    organism.energy -= organism.hunger_loss
    if organism.energy <= 0:
        organism.set_dead(field)
        return

    give_birth(organism, field, rng, newborns, female_probability)

    destination = feed(organism, field)
    if profile.sessile:
        return
    if destination is None:
        destination = field.any_free_adjacent(organism.location, organism.species)
    if destination is None:
        # overcrowding
        organism.set_dead(field)
        return
    organism.move_to(field, destination)


# ── Breeding ────────────────────────────────────────────────────


def has_mate(organism: Organism, field: Field) -> bool:
    """A live neighbour of the same species and the opposite sex."""
    for where in field.adjacent(organism.location):
        other = field.organism_at(where)
        if (
            other is not None
            and other.alive
            and other.species is organism.species
            and other.female != organism.female
        ):
            return True
    return False


def litter_size(organism: Organism, field: Field, rng: random.Random) -> int:
    """Number of births this tick (may be zero)."""
    profile = organism.profile
    if organism.age < profile.breeding_age:
        return 0
    if rng.random() > profile.breeding_probability:
        return 0
    if not has_mate(organism, field):
        return 0
    return rng.randrange(profile.max_litter_size) + 1


def give_birth(
    organism: Organism,
    field: Field,
    rng: random.Random,
    newborns: list[Organism],
    female_probability: float = FEMALE_PROBABILITY,
) -> None:
    free = field.free_adjacent(organism.location)
    births = litter_size(organism, field, rng)
    for location in free[:births]:
        young = Organism.newborn(
            organism.species, location, female=rng.random() <= female_probability
        )
        field.place(young, location)
        newborns.append(young)


# ── Feeding ─────────────────────────────────────────────────────


def consume(eater: Organism, food: Organism, value: int, field: Field) -> None:
    food.set_dead(field)
    eater.energy = value
    if food.diseased and not eater.diseased:
        eater.infect()
        logger.debug("%s infected by eating a diseased %s",
                     eater.species.value, food.species.value)


def _hunt(organism: Organism, field: Field, first_only: bool) -> Location | None:
    food_values = organism.profile.food_values
    target = None
    for where in field.adjacent(organism.location):
        prey = field.organism_at(where)
        if prey is None or not prey.alive or prey.species not in food_values:
            continue
        consume(organism, prey, food_values[prey.species], field)
        target = where
        if first_only:
            break
    return target


def hunt_first(organism: Organism, field: Field) -> Location | None:
    return _hunt(organism, field, first_only=True)


def hunt_all(organism: Organism, field: Field) -> Location | None:
    return _hunt(organism, field, first_only=False)


def graze(organism: Organism, field: Field) -> Location | None:
    """Eat the first neighbouring resource where it stands. Never moves the grazer."""
    food_values = organism.profile.food_values
    for where in field.adjacent(organism.location):
        plant = field.organism_at(where)
        if plant is not None and plant.alive and plant.species in food_values:
            consume(organism, plant, food_values[plant.species], field)
            break
    return None


def no_feeding(organism: Organism, field: Field) -> Location | None:
    return None


FEEDERS: dict[FeedingStyle, Callable[[Organism, Field], Location | None]] = {
    FeedingStyle.HUNT_FIRST: hunt_first,
    FeedingStyle.HUNT_ALL: hunt_all,
    FeedingStyle.GRAZE: graze,
    FeedingStyle.NONE: no_feeding,
}


def feed(organism: Organism, field: Field) -> Location | None:
    """Dispatch to the species' feeding rule. Returns a cell to move to, if any."""
    style = organism.profile.feeding
    feeder = FEEDERS.get(style)
    if feeder is None:
        raise InvariantViolation(
            f"No feeding rule for {organism.species.value} ({style!r})"
        )
    return feeder(organism, field)
