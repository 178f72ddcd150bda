"""Matplotlib visualization for ecofield run results.

CLI usage:
    python -m ecofield.analysis.plots data/exp_xxx/ [output_dir]
"""

from __future__ import annotations

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from ecofield.src.metrics import METRIC_FIELDS
from ecofield.src.species import Species

SPECIES_COLUMNS = [s.value for s in Species]


def load_metrics(data_dir: Path) -> pd.DataFrame:
    """Load the per-tick population CSV written by PopulationRecorder."""
    df = pd.read_csv(data_dir / "analysis" / "metrics.csv")
    missing = [c for c in METRIC_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"metrics.csv is missing columns: {', '.join(missing)}")
    return df


def plot_population(data_dir: Path, output_path: Path | None = None) -> None:
    """Plot each species' head count over time."""
    df = load_metrics(data_dir)

    fig, ax = plt.subplots(figsize=(12, 6))
    for column in SPECIES_COLUMNS:
        if df[column].any():
            ax.plot(df["tick"], df[column], label=column, alpha=0.8)

    ax.set_xlabel("Tick")
    ax.set_ylabel("Population")
    ax.set_title("Population by Species")
    ax.legend(fontsize=8, ncol=4)
    ax.grid(True, alpha=0.3)

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    else:
        plt.show()


def plot_disease(data_dir: Path, output_path: Path | None = None) -> None:
    """Share of the population carrying disease (20-tick rolling average)."""
    df = load_metrics(data_dir)
    share = (df["diseased"] / df["total"].where(df["total"] > 0)).fillna(0)

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(df["tick"], share.rolling(20, min_periods=1).mean())
    ax.set_xlabel("Tick")
    ax.set_ylabel("Diseased share (20-tick avg)")
    ax.set_title("Disease Prevalence")
    ax.grid(True, alpha=0.3)

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    else:
        plt.show()


def plot_all(data_dir: Path, output_dir: Path | None = None) -> None:
    """Render both figures, into ``output_dir`` when given, otherwise on screen."""
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        plot_population(data_dir, output_dir / "population.png")
        plot_disease(data_dir, output_dir / "disease.png")
    else:
        plot_population(data_dir)
        plot_disease(data_dir)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m ecofield.analysis.plots <data_dir> [output_dir]")
        sys.exit(1)
    out = Path(sys.argv[2]) if len(sys.argv) > 2 else None
    plot_all(Path(sys.argv[1]), out)
