"""Shared test fixtures for ecofield simulation tests."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest
import yaml

from ecofield.src.field import Field, Location
from ecofield.src.metrics import Recorder
from ecofield.src.organism import Organism
from ecofield.src.simulator import Simulator
from ecofield.src.species import Species


# ── Random sources ──────────────────────────────────────────────


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed draws.

    Once a script runs out, ``random()`` returns ``default_float`` (high
    enough that no probability check passes) and ``randrange()`` returns
    ``default_int``.
    """

    def __init__(self, floats=(), ints=(), default_float: float = 0.999, default_int: int = 0):
        self.floats = list(floats)
        self.ints = list(ints)
        self.default_float = default_float
        self.default_int = default_int
        self.float_calls = 0

    def random(self) -> float:
        self.float_calls += 1
        if self.floats:
            return self.floats.pop(0)
        return self.default_float

    def randrange(self, stop: int) -> int:
        value = self.ints.pop(0) if self.ints else self.default_int
        assert 0 <= value < stop, f"scripted randrange {value} outside [0, {stop})"
        return value


class ListRecorder(Recorder):
    """Keeps every report for assertions."""

    def __init__(self):
        self.reports: list[tuple[int, str, str, int]] = []

    def report(self, tick, time_of_day, weather, field):
        population = sum(1 for _ in field.organisms())
        self.reports.append((tick, time_of_day, weather, population))


# ── Helpers ─────────────────────────────────────────────────────


def make_organism(
    species: Species,
    row: int,
    col: int,
    female: bool = True,
    age: int = 1,
    energy: int = 10,
    diseased: bool = False,
) -> Organism:
    return Organism(
        species=species,
        location=Location(row, col),
        female=female,
        age=age,
        energy=energy,
        diseased=diseased,
    )


def put(target: Simulator | Field, organism: Organism) -> Organism:
    """Place an organism on a field (and into a simulator's population)."""
    if isinstance(target, Simulator):
        target.field.place(organism, organism.location)
        target.population.append(organism)
    else:
        target.place(organism, organism.location)
    return organism


def empty_simulator(depth: int = 5, width: int = 5, rng=None, **kwargs) -> Simulator:
    """A simulator with no founders and no rivers."""
    kwargs.setdefault("creation_probabilities", {})
    kwargs.setdefault("rivers", [])
    kwargs.setdefault("river_regeneration_ticks", 0)
    return Simulator(depth, width, rng=rng or ScriptedRandom(), **kwargs)


# ── Config fixtures ─────────────────────────────────────────────


@pytest.fixture
def default_config():
    """Load the real default.yaml config."""
    config_path = Path(__file__).parent.parent / "config" / "default.yaml"
    with open(config_path) as f:
        return yaml.safe_load(f)


@pytest.fixture
def test_config(default_config):
    """Small config for fast tests: 30x40 field, 30 ticks."""
    cfg = copy.deepcopy(default_config)
    cfg["simulation"].update({"ticks": 30, "depth": 30, "width": 40, "seed": 7})
    cfg["metrics"] = {"log_every": 10}
    return cfg


# ── Field fixtures ──────────────────────────────────────────────


@pytest.fixture
def small_field():
    return Field(5, 5)


@pytest.fixture
def recorder():
    return ListRecorder()
