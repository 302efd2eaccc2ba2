# gridsearch/app/world.py
#!/usr/bin/env python3
"""Grid + agent + food, shared by the viewer and the headless runner."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from gridsearch.config import Settings
from gridsearch.core.terrain import Grid, generate_grid, load_map, random_passable_cell
from gridsearch.core.types import Cell

logger = logging.getLogger(__name__)


@dataclass
class World:
    grid: Grid
    agent: Cell
    food: Cell


def new_world(settings: Settings, rng: random.Random) -> World:
    """Load the configured map, or generate one; missing endpoints are drawn at random."""
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    if settings.map_path:
        spec = load_map(settings.map_path)
        grid, start, goal = spec.grid, spec.start, spec.goal
        logger.info("loaded %dx%d map from %s", grid.width, grid.height, settings.map_path)
    else:
        grid = generate_grid(settings.width, settings.height, rng)
    agent = start if start is not None else random_passable_cell(grid, rng)
    food = goal if goal is not None else random_passable_cell(grid, rng)
    return World(grid, agent, food)


def respawn_food(world: World, rng: random.Random) -> None:
    world.food = random_passable_cell(world.grid, rng)
