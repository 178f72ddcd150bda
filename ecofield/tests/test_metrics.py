"""Tests for ecofield.src.metrics — census, viability, recorders."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from ecofield.src.field import Field
from ecofield.src.metrics import (
    METRIC_FIELDS,
    LoggingRecorder,
    PopulationRecorder,
    census,
    is_viable,
)
from ecofield.src.species import Species
from ecofield.tests.conftest import make_organism, put


@pytest.fixture
def mixed_field() -> Field:
    field = Field(5, 5)
    put(field, make_organism(Species.FOX, 0, 0))
    put(field, make_organism(Species.RABBIT, 1, 1, diseased=True))
    put(field, make_organism(Species.RABBIT, 2, 2))
    return field


class TestCensus:
    def test_counts_per_species(self, mixed_field):
        assert census(mixed_field) == {Species.FOX: 1, Species.RABBIT: 2}

    def test_empty_field(self):
        assert census(Field(3, 3)) == {}


class TestViability:
    def test_two_species_viable(self, mixed_field):
        assert is_viable(mixed_field)

    def test_single_species_not_viable(self):
        field = Field(3, 3)
        put(field, make_organism(Species.RABBIT, 0, 0))
        put(field, make_organism(Species.RABBIT, 1, 1))
        assert not is_viable(field)

    def test_empty_not_viable(self):
        assert not is_viable(Field(3, 3))


class TestPopulationRecorder:
    def test_writes_header_once(self, tmp_path: Path, mixed_field):
        rec = PopulationRecorder(tmp_path)
        rec.report(0, "day", "sun", mixed_field)
        rec.report(1, "day", "rain", mixed_field)
        with open(tmp_path / "analysis" / "metrics.csv", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert list(rows[0].keys()) == METRIC_FIELDS

    def test_row_contents(self, tmp_path: Path, mixed_field):
        rec = PopulationRecorder(tmp_path)
        rec.report(3, "night", "snow", mixed_field)
        with open(rec.csv_path, newline="") as f:
            row = next(csv.DictReader(f))
        assert row["tick"] == "3"
        assert row["time_of_day"] == "night"
        assert row["weather"] == "snow"
        assert row["total"] == "3"
        assert row["diseased"] == "1"
        assert row["fox"] == "1"
        assert row["rabbit"] == "2"
        assert row["bear"] == "0"

    def test_creates_analysis_dir(self, tmp_path: Path):
        PopulationRecorder(tmp_path / "run")
        assert (tmp_path / "run" / "analysis").is_dir()


class TestLoggingRecorder:
    def test_logs_census(self, mixed_field, caplog):
        with caplog.at_level(logging.INFO, logger="ecofield.src.metrics"):
            LoggingRecorder().report(4, "day", "sun", mixed_field)
        assert "Tick 4" in caplog.text
        assert "fox=1" in caplog.text
        assert "rabbit=2" in caplog.text

    def test_respects_interval(self, mixed_field, caplog):
        with caplog.at_level(logging.INFO, logger="ecofield.src.metrics"):
            rec = LoggingRecorder(every=10)
            rec.report(5, "day", "sun", mixed_field)
            rec.report(10, "day", "sun", mixed_field)
        assert "Tick 5" not in caplog.text
        assert "Tick 10" in caplog.text

    def test_empty_field(self, caplog):
        with caplog.at_level(logging.INFO, logger="ecofield.src.metrics"):
            LoggingRecorder().report(0, "day", "sun", Field(2, 2))
        assert "empty" in caplog.text
