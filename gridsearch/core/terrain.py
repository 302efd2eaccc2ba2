# gridsearch/core/terrain.py
#!/usr/bin/env python3
"""
Terrain and cost model for the search grid.

- Four terrain classes: IMPASSABLE, LOW, MEDIUM, HIGH.
- Each passable class has a fixed positive traversal cost (entering the cell costs it).
- IMPASSABLE has no cost and can never be entered.

The Manhattan heuristic used by Greedy / A* stays admissible only while every
passable cost is >= 1; a cheaper class is accepted but logged as a warning.

Grids come either from `generate_grid()` (random terrain, same odds as the
interactive demo) or from a JSON map file via `load_map()`.
"""

import json
import logging
import random
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Dict, List, Optional, Union

from gridsearch.core.types import Cell, ConfigurationError

logger = logging.getLogger(__name__)


class TerrainClass(IntEnum):
    IMPASSABLE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


TERRAIN_COSTS: Dict[TerrainClass, int] = {
    TerrainClass.LOW: 1,
    TerrainClass.MEDIUM: 5,
    TerrainClass.HIGH: 10,
}

# cumulative odds per class when generating a map: 10% / 40% / 30% / 20%
TERRAIN_ODDS = (
    (0.1, TerrainClass.IMPASSABLE),
    (0.5, TerrainClass.LOW),
    (0.8, TerrainClass.MEDIUM),
    (1.0, TerrainClass.HIGH),
)


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[int]]             # [row][col]
    costs: Dict[TerrainClass, float] = field(default_factory=lambda: dict(TERRAIN_COSTS))

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.cells, list) or not all(isinstance(r, list) for r in self.cells):
            raise ConfigurationError("cells must be a list of rows")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if len(self.cells) != self.height or any(len(r) != self.width for r in self.cells):
            raise ConfigurationError("cells size mismatch")
        for row in self.cells:
            for v in row:
                try:
                    TerrainClass(v)
                except ValueError:
                    raise ConfigurationError(f"unknown terrain value {v!r}") from None
        if TerrainClass.IMPASSABLE in self.costs:
            raise ConfigurationError("IMPASSABLE terrain cannot have a cost")
        for terrain, cost in self.costs.items():
            if isinstance(cost, bool) or not isinstance(cost, (int, float)) or cost <= 0:
                raise ConfigurationError(f"cost for {TerrainClass(terrain).name} must be a positive number, got {cost!r}")
            if cost < 1:
                logger.warning("cost %s for %s is below 1; Manhattan heuristic is no longer admissible",
                               cost, TerrainClass(terrain).name)

    @classmethod
    def uniform(cls, width: int, height: int, terrain: TerrainClass = TerrainClass.LOW) -> "Grid":
        return cls(width, height, [[int(terrain)] * width for _ in range(height)])

    def with_costs(self, costs: Dict[TerrainClass, float]) -> "Grid":
        """Same terrain, different cost table (e.g. every passable class at 1)."""
        return replace(self, cells=[list(r) for r in self.cells], costs=dict(costs))

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def terrain_at(self, c: Cell) -> TerrainClass:
        x, y = c
        return TerrainClass(self.cells[y][x])

    def is_passable(self, c: Cell) -> bool:
        return self.terrain_at(c) in self.costs

    def cost_of(self, c: Cell) -> float:
        terrain = self.terrain_at(c)
        if terrain not in self.costs:
            raise ValueError(f"Asked cost of an impassable cell {c}")
        return self.costs[terrain]

    def passable_cells(self) -> List[Cell]:
        return [(x, y) for y in range(self.height) for x in range(self.width) if self.is_passable((x, y))]


@dataclass
class MapSpec:
    grid: Grid
    start: Optional[Cell] = None
    goal: Optional[Cell] = None


# ---------- generation ----------

def random_terrain(rng: random.Random) -> TerrainClass:
    r = rng.random()
    for threshold, terrain in TERRAIN_ODDS:
        if r < threshold:
            return terrain
    return TerrainClass.HIGH


def generate_grid(width: int, height: int, rng: Optional[random.Random] = None) -> Grid:
    rng = rng or random.Random()
    cells = [[int(random_terrain(rng)) for _ in range(width)] for _ in range(height)]
    grid = Grid(width, height, cells)
    logger.debug("generated %dx%d grid with %d passable cells", width, height, len(grid.passable_cells()))
    return grid


def random_passable_cell(grid: Grid, rng: Optional[random.Random] = None) -> Cell:
    """Uniform draw among cells that can be stood on."""
    rng = rng or random.Random()
    if not grid.passable_cells():
        raise ConfigurationError("grid has no passable cell")
    while True:
        c = (rng.randrange(grid.width), rng.randrange(grid.height))
        if grid.is_passable(c):
            return c


# ---------- loader ----------

def _whole(value, what: str) -> int:
    """JSON number holding an exact integer: 3 and 3.0 pass, 3.7 and true do not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    return int(value)


def _parse_costs(raw: Dict[str, Union[int, float, str]]) -> Dict[TerrainClass, float]:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"costs must be an object keyed by terrain, got {raw!r}")
    costs = dict(TERRAIN_COSTS)
    for key, value in raw.items():
        try:
            terrain = TerrainClass[key.upper()] if not key.isdigit() else TerrainClass(int(key))
        except (KeyError, ValueError):
            raise ConfigurationError(f"unknown terrain key in costs: {key!r}") from None
        if value == "BLOCK":
            costs.pop(terrain, None)
        else:
            costs[terrain] = value
    return costs


def _parse_cell(data: dict, key: str, grid: Grid) -> Optional[Cell]:
    if data.get(key) is None:
        return None
    try:
        x, y = (_whole(v, key) for v in data[key])
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a [col, row] pair") from None
    if not grid.in_bounds((x, y)):
        raise ConfigurationError(f"{key} out of bounds")
    return (x, y)


def load_map(path: Union[str, Path]) -> MapSpec:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise ConfigurationError(f"cannot read map {path}: {ex}") from ex
    try:
        width = _whole(data["width"], "width")
        height = _whole(data["height"], "height")
        cells = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise ConfigurationError(f"map {path} is missing width/height/cells") from ex
    grid = Grid(width, height, cells, _parse_costs(data.get("costs", {})))
    return MapSpec(grid, _parse_cell(data, "start", grid), _parse_cell(data, "goal", grid))
