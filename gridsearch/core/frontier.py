# gridsearch/core/frontier.py
#!/usr/bin/env python3
"""
One frontier type for every strategy; the extraction policy is picked once per search.

- FIFO      (BFS):  append at tail, take from head.
- LIFO      (DFS):  append at tail, take from tail.
- PRIORITY  (UCS / Greedy / A*): take the lowest priority; equal priorities come
  out in insertion order via a monotonic sequence number in the heap key.

Stale entries (a cell pushed again after a cheaper cost was found) are left in
place; the search drops them when they are popped.
"""

import heapq
from collections import deque
from enum import Enum
from typing import Iterator, List, NamedTuple, Tuple

from gridsearch.core.types import Cell


class Discipline(Enum):
    FIFO = "fifo"
    LIFO = "lifo"
    PRIORITY = "priority"


class FrontierEntry(NamedTuple):
    cell: Cell
    priority: float = 0


class Frontier:
    def __init__(self, discipline: Discipline):
        self.discipline = discipline
        self._queue: deque = deque()
        self._heap: List[Tuple[float, int, FrontierEntry]] = []  # (priority, seq, entry)
        self._seq = 0  # monotonic counter for PQ stability

    def push(self, entry: FrontierEntry) -> None:
        if self.discipline is Discipline.PRIORITY:
            self._seq += 1
            heapq.heappush(self._heap, (entry.priority, self._seq, entry))
        else:
            self._queue.append(entry)

    def pop(self) -> FrontierEntry:
        if self.discipline is Discipline.PRIORITY:
            return heapq.heappop(self._heap)[2]
        if self.discipline is Discipline.LIFO:
            return self._queue.pop()
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        if self.discipline is Discipline.PRIORITY:
            return len(self._heap)
        return len(self._queue)

    def __iter__(self) -> Iterator[FrontierEntry]:
        """Pending entries, storage order (not pop order). Read-only view for drawing."""
        if self.discipline is Discipline.PRIORITY:
            return (item[2] for item in self._heap)
        return iter(self._queue)

    def cells(self) -> set:
        return {e.cell for e in self}
