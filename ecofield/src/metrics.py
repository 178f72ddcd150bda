"""Per-tick observation — population census, CSV recording, viability."""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from .species import Species

if TYPE_CHECKING:
    from .field import Field

logger = logging.getLogger(__name__)

METRIC_FIELDS = [
    "tick",
    "time_of_day",
    "weather",
    "total",
    "diseased",
    *[s.value for s in Species],
]


def census(field: Field) -> Counter:
    """Live organisms on the field, counted per species."""
    return Counter(o.species for o in field.organisms() if o.alive)


def is_viable(field: Field) -> bool:
    """A run stays interesting while more than one species is still alive."""
    return len(census(field)) > 1


class Recorder(ABC):
    """Receives the field state once at reset and once per tick."""

    @abstractmethod
    def report(self, tick: int, time_of_day: str, weather: str, field: Field) -> None:
        ...


class LoggingRecorder(Recorder):
    """Logs a one-line census every ``every`` ticks."""

    def __init__(self, every: int = 1):
        self.every = max(1, every)

    def report(self, tick: int, time_of_day: str, weather: str, field: Field) -> None:
        if tick % self.every:
            return
        counts = census(field)
        summary = ", ".join(f"{s.value}={n}" for s, n in sorted(counts.items()))
        logger.info("Tick %d (%s, %s): %s", tick, time_of_day, weather, summary or "empty")


class PopulationRecorder(Recorder):
    """Appends one row per report to ``<data_dir>/analysis/metrics.csv``."""

    def __init__(self, data_dir: Path):
        self.csv_path = data_dir / "analysis" / "metrics.csv"
        self.csv_path.parent.mkdir(parents=True, exist_ok=True)

    def report(self, tick: int, time_of_day: str, weather: str, field: Field) -> None:
        write_header = not self.csv_path.exists()
        counts = census(field)
        diseased = sum(1 for o in field.organisms() if o.alive and o.diseased)

        row = {
            "tick": tick,
            "time_of_day": time_of_day,
            "weather": weather,
            "total": sum(counts.values()),
            "diseased": diseased,
        }
        for species in Species:
            row[species.value] = counts.get(species, 0)

        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=METRIC_FIELDS)
            if write_header:
                writer.writeheader()
            writer.writerow(row)
