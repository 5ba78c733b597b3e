#!/usr/bin/env python3

from __future__ import annotations

import argparse
import random

from dungeon_config import DungeonConfig
from dungeon_constants import DEFAULT_FLOOR_HEIGHT, DEFAULT_FLOOR_WIDTH, DEFAULT_MAX_ROOM_DIMENSION, RANDOM_SEED
from dungeon_generator import DungeonGenerator
from grid_renderer import print_grid


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a dungeon floor and print it as ASCII.")
    parser.add_argument("--width", type=int, default=DEFAULT_FLOOR_WIDTH, help="Map width in tiles")
    parser.add_argument("--height", type=int, default=DEFAULT_FLOOR_HEIGHT, help="Map height in tiles")
    parser.add_argument(
        "--max-room-dimension",
        type=int,
        default=DEFAULT_MAX_ROOM_DIMENSION,
        help="Room width/height are drawn from [4, this)",
    )
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Seed for reproducible maps")
    parser.add_argument("--verbose", action="store_true", help="Print generation progress")
    args = parser.parse_args()

    try:
        config = DungeonConfig(
            width=args.width,
            height=args.height,
            max_room_dimension=args.max_room_dimension,
            random_seed=args.seed,
            verbose=args.verbose,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    seed = config.random_seed
    if seed is None:
        # Pick a random seed randomly and print it, so we can reproduce a map by passing --seed next run.
        seed = random.randint(0, 1000000)
        config.random_seed = seed
    print(f"Using random seed {seed}")

    generator = DungeonGenerator(config)
    layout = generator.generate()

    print_grid(layout.floor(0))


if __name__ == "__main__":
    main()
