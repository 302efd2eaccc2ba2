# gridsearch/app/walker.py
#!/usr/bin/env python3
"""Agent walk along a found path, paced per frame by the cost of the next cell."""

from typing import List, Optional

from gridsearch.core.terrain import Grid
from gridsearch.core.types import Cell

FRAMES_PER_COST = 2


class AgentWalk:
    def __init__(self, grid: Grid, start: Cell, path: List[Cell], frames_per_cost: int = FRAMES_PER_COST):
        self.grid = grid
        self.position = start
        self.path = list(path)
        self.frames_per_cost = frames_per_cost
        self.index = 0       # next path cell to enter
        self._timer = 0

    @property
    def finished(self) -> bool:
        return self.index >= len(self.path)

    def frames_for(self, c: Cell) -> int:
        return int(self.grid.cost_of(c) * self.frames_per_cost)

    def tick(self) -> Optional[Cell]:
        """Advance one frame. Returns the new position when the agent moved, else None."""
        if self.finished:
            return None
        nxt = self.path[self.index]
        if self._timer < self.frames_for(nxt):
            self._timer += 1
            return None
        self._timer = 0
        self.position = nxt
        self.index += 1
        return nxt
