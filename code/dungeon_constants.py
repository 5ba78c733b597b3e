"""Shared constants for the dungeon generator."""

from __future__ import annotations

# Room width/height are drawn from [MIN_ROOM_DIMENSION, max_room_dimension).
MIN_ROOM_DIMENSION = 4
DEFAULT_MAX_ROOM_DIMENSION = 10

DEFAULT_FLOOR_WIDTH = 100
DEFAULT_FLOOR_HEIGHT = 100
DEFAULT_FLOOR_COUNT = 1

# Fresh candidate rooms tried against one connector before it is blocked.
MAX_PLACEMENT_ATTEMPTS = 10

RANDOM_SEED = None  # Set to a number for reproducible behavior (for debugging); set to None to produce a different dungeon on every run.
