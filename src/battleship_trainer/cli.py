"""
Command-line interface for battleship self-play training.
"""

import argparse
import logging
from typing import List, Optional

from battleship_trainer.api import train
from battleship_trainer.games.grid import heatmap_string
from battleship_trainer.games.layouts import LAYOUTS
from battleship_trainer.utils.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_EPOCHS,
    DEFAULT_PARALLEL,
    PLAYERS,
    STRATEGIES,
    Config,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train battleship agents through parallel self-play"
    )
    parser.add_argument(
        "parallel",
        nargs="?",
        type=int,
        default=DEFAULT_PARALLEL,
        help=f"Number of independent game instances (default: {DEFAULT_PARALLEL})",
    )
    parser.add_argument(
        "epochs",
        nargs="?",
        type=int,
        default=DEFAULT_EPOCHS,
        help=f"Number of epochs (default: {DEFAULT_EPOCHS})",
    )
    parser.add_argument(
        "batch_size",
        nargs="?",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Games per instance per epoch (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Pool size (default: min(parallel, CPU count - 1))",
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=STRATEGIES,
        default="epoch",
        help="Scheduling strategy (default: epoch)",
    )
    parser.add_argument(
        "--threads",
        action="store_true",
        help="Use worker threads instead of worker processes",
    )
    parser.add_argument(
        "--opponent",
        choices=list(PLAYERS.keys()),
        default="heuristic",
        help="Player in the second seat (default: heuristic)",
    )
    parser.add_argument(
        "--learning-rate", "-l",
        type=float,
        default=None,
        help="Per-decision weight step",
    )
    parser.add_argument(
        "--layout",
        choices=list(LAYOUTS.keys()),
        default="canonical",
        help="Ship layout used by heuristic agents (default: canonical)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible runs",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    config_kwargs = {
        "parallel": args.parallel,
        "epochs": args.epochs,
        "batch_size": args.batch_size,
        "strategy": args.strategy,
        "use_threads": args.threads,
        "opponent": args.opponent,
        "layout": args.layout,
        "seed": args.seed,
    }
    if args.workers:
        config_kwargs["num_workers"] = args.workers
    if args.learning_rate is not None:
        config_kwargs["learning_rate"] = args.learning_rate
    return Config(**config_kwargs)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
    except (KeyError, ValueError) as e:
        raise SystemExit(f"error: {e}") from e

    model = train(config)

    print("\n" + "=" * 40)
    print("FINAL MODEL")
    print("=" * 40)
    if model is None:
        print("No learning players were trained.")
        return
    print(f"Base weight mass: {model.total_mass:.3f}")
    print(heatmap_string(model.base_weights, precision=2))


if __name__ == "__main__":
    main()
