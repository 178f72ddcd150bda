"""Tick orchestration — climate, activation, act sweep, births/deaths, rivers."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable

from .biome import generate_river
from .climate import DayNightCycle, Weather
from .field import Field, Location
from .metrics import Recorder, is_viable
from .organism import FEMALE_PROBABILITY, Organism, act
from .species import POPULATION_ORDER, Species, parse_species

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 300
DEFAULT_WIDTH = 300

DEFAULT_CREATION_PROBABILITIES = {
    Species.FOX: 0.07,
    Species.RABBIT: 0.18,
    Species.EAGLE: 0.07,
    Species.RADISH: 0.1,
    Species.PIG: 0.087,
    Species.BEAR: 0.05,
    Species.RACCOON: 0.08,
}

DEFAULT_WEATHER = {"rain": 0.02, "snow": 0.01, "sun": 0.75}

# (bottom fraction, top fraction) of the field width
DEFAULT_RIVERS = [(0.6, 0.6), (0.2, 0.2)]

DEFAULT_RIVER_REGENERATION_TICKS = 200

DISEASED_SPECIES = {Species.RABBIT: 0.7}

ViabilityCheck = Callable[[Field], bool]


class Simulator:
    """Runs the ecosystem: one field, one population, one random source."""

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        width: int = DEFAULT_WIDTH,
        rng: random.Random | None = None,
        recorders: Iterable[Recorder] = (),
        viability: ViabilityCheck = is_viable,
        creation_probabilities: dict[Species, float] | None = None,
        disease_probabilities: dict[Species, float] | None = None,
        female_probability: float = FEMALE_PROBABILITY,
        weather_probabilities: dict[str, float] | None = None,
        rivers: list[tuple[float, float]] | None = None,
        river_regeneration_ticks: int = DEFAULT_RIVER_REGENERATION_TICKS,
    ):
        if depth <= 0 or width <= 0:
            logger.warning(
                "Field dimensions must be greater than zero (got %dx%d); using %dx%d",
                depth, width, DEFAULT_DEPTH, DEFAULT_WIDTH,
            )
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH

        self.field = Field(depth, width)
        self.rng = rng or random.Random()
        self.recorders = list(recorders)
        self.viability = viability
        self.creation_probabilities = (
            DEFAULT_CREATION_PROBABILITIES if creation_probabilities is None
            else creation_probabilities
        )
        self.disease_probabilities = (
            DISEASED_SPECIES if disease_probabilities is None else disease_probabilities
        )
        self.female_probability = female_probability
        self.weather_probabilities = {**DEFAULT_WEATHER, **(weather_probabilities or {})}
        self.rivers = DEFAULT_RIVERS if rivers is None else rivers
        self.river_regeneration_ticks = river_regeneration_ticks

        self.tick = 0
        self.weather = Weather()
        self.clock = DayNightCycle()
        self.population: list[Organism] = []

    @classmethod
    def from_config(
        cls, config: dict, recorders: Iterable[Recorder] = (), reset: bool = True
    ) -> Simulator:
        """Build from a loaded YAML config (see config/default.yaml)."""
        sim_cfg = config["simulation"]
        pop_cfg = config.get("population", {})
        river_cfg = config.get("rivers", {})

        sim = cls(
            depth=sim_cfg.get("depth", DEFAULT_DEPTH),
            width=sim_cfg.get("width", DEFAULT_WIDTH),
            rng=random.Random(sim_cfg.get("seed")),
            recorders=recorders,
            creation_probabilities=_species_table(pop_cfg.get("creation_probabilities")),
            disease_probabilities=_species_table(pop_cfg.get("disease_probabilities")),
            female_probability=pop_cfg.get("female_probability", FEMALE_PROBABILITY),
            weather_probabilities=config.get("weather"),
            rivers=[tuple(r) for r in river_cfg["bands"]] if "bands" in river_cfg else None,
            river_regeneration_ticks=river_cfg.get(
                "regeneration_ticks", DEFAULT_RIVER_REGENERATION_TICKS
            ),
        )
        if reset:
            sim.reset()
        return sim

    # ── Public surface ──────────────────────────────────────────

    def reset(self) -> None:
        """Repopulate the field from scratch and lay the rivers."""
        self.tick = 0
        self.population.clear()
        self.field.clear_organisms()
        self._populate()
        self._generate_rivers()
        logger.info("Reset: %dx%d field, %d organisms, %d river cells",
                    self.field.depth, self.field.width, len(self.population),
                    len(self.field.feature_locations()))
        self._report()

    def simulate(self, num_steps: int) -> int:
        """Run up to ``num_steps`` ticks, stopping early once the field is no
        longer viable. Returns the number of ticks actually run."""
        ran = 0
        while ran < num_steps and self.viability(self.field):
            self.simulate_one_step()
            ran += 1
        if ran < num_steps:
            logger.info("Field no longer viable at tick %d", self.tick)
        return ran

    def simulate_one_step(self) -> None:
        self.tick += 1
        self.clock.advance(self.tick)
        self.weather.update(
            self.rng,
            self.weather_probabilities["rain"],
            self.weather_probabilities["snow"],
            self.weather_probabilities["sun"],
        )

        newborns: list[Organism] = []
        for organism in list(self.population):
            if organism.alive and self.is_active(organism):
                act(organism, self.field, self.rng, newborns, self.female_probability)

        self.population = [o for o in self.population if o.alive]
        self.population.extend(o for o in newborns if o.alive)

        self._report()

        if self.tick < self.river_regeneration_ticks:
            self._generate_rivers()

    def is_active(self, organism: Organism) -> bool:
        """Whether ``organism`` gets to act this tick."""
        if self.weather.storm:
            return False
        return organism.nocturnal == (not self.clock.is_day)

    # ── Private helpers ─────────────────────────────────────────

    def _populate(self) -> None:
        for row in range(self.field.depth):
            for col in range(self.field.width):
                species = self._draw_species()
                if species is None:
                    continue
                location = Location(row, col)
                if self.field.feature_at(location) is not None:
                    continue
                organism = Organism.founder(
                    species, location, self.rng, self.female_probability
                )
                disease_p = self.disease_probabilities.get(species)
                if disease_p and self.rng.random() <= disease_p:
                    organism.diseased = True
                self.field.place(organism, location)
                self.population.append(organism)

    def _draw_species(self) -> Species | None:
        """First species in the fixed order whose own draw succeeds."""
        for species in POPULATION_ORDER:
            p = self.creation_probabilities.get(species, 0.0)
            if p > 0 and self.rng.random() <= p:
                return species
        return None

    def _generate_rivers(self) -> None:
        displaced: list[Organism] = []
        for bottom, top in self.rivers:
            displaced.extend(generate_river(self.field, bottom, top))
        if not displaced:
            return
        for organism in displaced:
            organism.alive = False
            organism.location = None
        self.population = [o for o in self.population if o.alive]

    def _report(self) -> None:
        for recorder in self.recorders:
            recorder.report(self.tick, self.clock.time_of_day, self.weather.condition, self.field)


def _species_table(raw: dict | None) -> dict[Species, float] | None:
    if raw is None:
        return None
    return {parse_species(name): float(p) for name, p in raw.items()}
