# gridsearch/core/search.py
#!/usr/bin/env python3
"""
Frontier search — one expansion per step() so a viewer can animate it.

API used by the viewer and the headless runner:
- initialize(grid, start, goal, strategy) - reset() - step() -> StepResult - reconstruct()

Five strategies share the same step logic; only the frontier discipline and the
priority pushed with each entry differ:

    BFS     FIFO       priority unused
    DFS     LIFO       priority unused
    UCS     min-PQ     g
    Greedy  min-PQ     h
    A*      min-PQ     g + h

Edge cost is the terrain cost of the cell being entered, except the goal (food),
which is always free to step onto whatever its terrain.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Union

from gridsearch.core.frontier import Discipline, Frontier, FrontierEntry
from gridsearch.core.terrain import Grid
from gridsearch.core.types import (
    Cell,
    ConfigurationError,
    InvariantViolation,
    SearchStatus,
    StepResult,
)

logger = logging.getLogger(__name__)

# fixed expansion order: right, left, down, up
OFFSETS4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Strategy(Enum):
    BFS = "BFS"
    DFS = "DFS"
    UCS = "UCS"
    GREEDY = "Greedy"
    ASTAR = "A*"

    @property
    def label(self) -> str:
        return self.value

    @property
    def discipline(self) -> Discipline:
        return _DISCIPLINES[self]

    def priority(self, g: float, h: float) -> float:
        if self is Strategy.UCS:
            return g
        if self is Strategy.GREEDY:
            return h
        if self is Strategy.ASTAR:
            return g + h
        return 0

    @classmethod
    def parse(cls, value: Union["Strategy", str]) -> "Strategy":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for s in cls:
                if key in (s.value.lower(), s.name.lower()):
                    return s
            if key in _ALIASES:
                return _ALIASES[key]
        choices = ", ".join(s.value for s in cls)
        raise ConfigurationError(f"unknown strategy {value!r} (expected one of {choices})")


_DISCIPLINES = {
    Strategy.BFS: Discipline.FIFO,
    Strategy.DFS: Discipline.LIFO,
    Strategy.UCS: Discipline.PRIORITY,
    Strategy.GREEDY: Discipline.PRIORITY,
    Strategy.ASTAR: Discipline.PRIORITY,
}

_ALIASES = {
    "breadth-first": Strategy.BFS,
    "depth-first": Strategy.DFS,
    "uniform-cost": Strategy.UCS,
    "dijkstra": Strategy.UCS,
    "best-first": Strategy.GREEDY,
    "a-star": Strategy.ASTAR,
}


# -------------------- pure helpers --------------------

def neighbors4(grid: Grid, c: Cell) -> List[Cell]:
    """Return valid 4-connected neighbors for cell c, always in OFFSETS4 order."""
    x, y = c
    out: List[Cell] = []
    for dx, dy in OFFSETS4:
        n = (x + dx, y + dy)
        if grid.in_bounds(n) and grid.is_passable(n):
            out.append(n)
    return out


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct_path(goal: Cell, predecessor: Dict[Cell, Cell], start: Cell) -> List[Cell]:
    """Cells after start up to and including goal. Empty when goal == start."""
    path: List[Cell] = []
    cur = goal
    while cur != start:
        path.append(cur)
        try:
            cur = predecessor[cur]
        except KeyError:
            raise InvariantViolation(f"predecessor chain from {goal} breaks at {cur}") from None
    path.reverse()
    return path


# -------------------- the state machine --------------------

@dataclass
class FrontierSearch:
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    strategy: Optional[Strategy] = None

    # Internal state, replaced at every initialize()/reset()
    frontier: Optional[Frontier] = None
    visited: Set[Cell] = field(default_factory=set)
    best_cost: Dict[Cell, float] = field(default_factory=dict)
    predecessor: Dict[Cell, Cell] = field(default_factory=dict)
    status: Optional[SearchStatus] = None
    popped_count: int = 0
    stale_count: int = 0
    step_count: int = 0
    _path: Optional[List[Cell]] = field(default=None, repr=False)

    # -------------------- lifecycle --------------------

    def initialize(self, grid: Grid, start: Cell, goal: Cell, strategy: Union[Strategy, str]) -> None:
        """Validate the request, then start a fresh search. Drops any search in progress."""
        strategy = Strategy.parse(strategy)
        start = self._check_endpoint(grid, start, "start")
        goal = self._check_endpoint(grid, goal, "goal")
        self.grid = grid
        self.start = start
        self.goal = goal
        self.strategy = strategy
        self.reset()
        logger.debug("initialized %s search %s -> %s on %dx%d grid",
                     strategy.label, start, goal, grid.width, grid.height)

    def reset(self) -> None:
        """Restart the current search from the start cell."""
        if self.grid is None or self.strategy is None:
            raise InvariantViolation("reset() called before initialize()")
        self.frontier = Frontier(self.strategy.discipline)
        self.visited = set()
        self.best_cost = {self.start: 0}
        self.predecessor = {}
        self.popped_count = 0
        self.stale_count = 0
        self.step_count = 0
        self._path = None
        self.frontier.push(FrontierEntry(self.start, 0))
        self.status = SearchStatus.SEARCHING

    @staticmethod
    def _check_endpoint(grid: Grid, c, what: str) -> Cell:
        try:
            x, y = c
        except (TypeError, ValueError):
            raise ConfigurationError(f"{what} must be an (x, y) pair, got {c!r}") from None
        if any(isinstance(v, bool) or not isinstance(v, int) for v in (x, y)):
            raise ConfigurationError(f"{what} coordinates must be integers, got {c!r}")
        cell = (x, y)
        if not grid.in_bounds(cell):
            raise ConfigurationError(f"{what} {cell} is outside the {grid.width}x{grid.height} grid")
        if not grid.is_passable(cell):
            raise ConfigurationError(f"{what} {cell} is on an impassable cell")
        return cell

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE step:
          - Empty frontier -> EXHAUSTED.
          - Pop per the strategy's discipline; an already-closed cell is a stale
            entry and is dropped (not an expansion, call step() again).
          - Close the cell; if it is the goal -> FOUND.
          - Else relax neighbours and push the improved ones.
        """
        if self.status is None:
            raise InvariantViolation("step() called before initialize()")
        if self.status.terminal:
            raise InvariantViolation(f"step() called on a finished search ({self.status.value})")

        self.step_count += 1

        if self.frontier.is_empty():
            self.status = SearchStatus.EXHAUSTED
            logger.info("%s: no path from %s to %s after %d expansions",
                        self.strategy.label, self.start, self.goal, self.popped_count)
            return StepResult(status=self.status, metrics=self.metrics())

        u = self.frontier.pop().cell

        # Ignore stale pops
        if u in self.visited:
            self.stale_count += 1
            return StepResult(status=self.status, current=u, stale=True, metrics=self.metrics())

        self.popped_count += 1
        self.visited.add(u)

        if u == self.goal:
            self.status = SearchStatus.FOUND
            self._path = reconstruct_path(self.goal, self.predecessor, self.start)
            logger.info("%s: found %s, cost %s, path length %d, %d expansions",
                        self.strategy.label, self.goal, self.total_cost, len(self._path), self.popped_count)
            return StepResult(status=self.status, closed=[u], current=u, path=list(self._path),
                              metrics=self.metrics())

        opened_now: List[Cell] = []
        g_u = self.best_cost[u]
        for v in neighbors4(self.grid, u):
            if v in self.visited:
                continue
            step_cost = 0 if v == self.goal else self.grid.cost_of(v)
            alt = g_u + step_cost
            if v not in self.best_cost or alt < self.best_cost[v]:
                self.best_cost[v] = alt
                self.predecessor[v] = u
                priority = self.strategy.priority(alt, manhattan(v, self.goal))
                self.frontier.push(FrontierEntry(v, priority))
                opened_now.append(v)

        return StepResult(status=self.status, opened=opened_now, closed=[u], current=u,
                          metrics=self.metrics())

    # -------------------- results --------------------

    def reconstruct(self) -> List[Cell]:
        if self.status is not SearchStatus.FOUND:
            state = self.status.value if self.status else "uninitialized"
            raise InvariantViolation(f"reconstruct() needs a found path, search is {state}")
        return list(self._path)

    @property
    def total_cost(self) -> Optional[float]:
        if self.status is not SearchStatus.FOUND:
            return None
        return self.best_cost[self.goal]

    def frontier_cells(self) -> Set[Cell]:
        return self.frontier.cells() if self.frontier is not None else set()

    def metrics(self) -> dict:
        return {
            "algo": self.strategy.label if self.strategy else None,
            "popped": self.popped_count,
            "stale": self.stale_count,
            "open_size": len(self.frontier) if self.frontier is not None else 0,
            "closed_count": len(self.visited),
            "path_len": len(self._path) if self._path is not None else 0,
            "total_cost": self.total_cost,
        }


def run_search(grid: Grid, start: Cell, goal: Cell, strategy: Union[Strategy, str],
               max_steps: Optional[int] = None) -> FrontierSearch:
    """Driver loop: step until FOUND / EXHAUSTED, or until max_steps step() calls."""
    search = FrontierSearch()
    search.initialize(grid, start, goal, strategy)
    while not search.status.terminal:
        if max_steps is not None and search.step_count >= max_steps:
            logger.info("%s: step budget of %d used up, still searching", search.strategy.label, max_steps)
            break
        search.step()
    return search
