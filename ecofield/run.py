"""CLI entrypoint for the ecofield simulation."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

import yaml

from ecofield.src.metrics import LoggingRecorder, PopulationRecorder
from ecofield.src.simulator import Simulator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "config" / "default.yaml"


def load_config(config_path: Path) -> dict:
    """Load YAML config with inheritance support."""
    with open(config_path) as f:
        config = yaml.safe_load(f)

    # Handle inherits
    if "inherits" in config:
        base_name = config.pop("inherits")
        base_path = config_path.parent.parent / f"{base_name}.yaml"
        base = load_config(base_path)
        config = _deep_merge(base, config)

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    sim = config["simulation"]
    if args.ticks:
        sim["ticks"] = args.ticks
    if args.seed is not None:
        sim["seed"] = args.seed
    if args.depth:
        sim["depth"] = args.depth
    if args.width:
        sim["width"] = args.width
    return config


def main():
    parser = argparse.ArgumentParser(description="ecofield — grid ecosystem simulator")
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG,
        help="Path to experiment config YAML",
    )
    parser.add_argument("--ticks", type=int, help="Override tick count")
    parser.add_argument("--seed", type=int, help="Override random seed")
    parser.add_argument("--depth", type=int, help="Override field depth")
    parser.add_argument("--width", type=int, help="Override field width")
    parser.add_argument(
        "--data-dir", type=Path, default=None,
        help="Where to write metrics (default data/exp_<timestamp>)",
    )
    args = parser.parse_args()

    config = apply_overrides(load_config(args.config), args)

    if args.data_dir is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        args.data_dir = Path("data") / f"exp_{timestamp}"
    args.data_dir.mkdir(parents=True, exist_ok=True)
    (args.data_dir / "config.yaml").write_text(yaml.dump(config, default_flow_style=False))

    recorders = [
        LoggingRecorder(every=config.get("metrics", {}).get("log_every", 1)),
        PopulationRecorder(args.data_dir),
    ]

    logger.info("Starting experiment: %s", args.data_dir)
    simulator = Simulator.from_config(config, recorders=recorders)
    ran = simulator.simulate(config["simulation"]["ticks"])
    logger.info("Experiment complete: %d ticks, %d organisms alive (%s)",
                ran, len(simulator.population), args.data_dir)


if __name__ == "__main__":
    main()
