# gridsearch/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (col, row)


class SearchStatus(str, Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"

    @property
    def terminal(self) -> bool:
        return self is not SearchStatus.SEARCHING


class GridSearchError(Exception):
    """Base class for errors raised by gridsearch."""


class ConfigurationError(GridSearchError, ValueError):
    """Bad strategy, start/goal, map file or setting. Raised before any search step."""


class InvariantViolation(GridSearchError, RuntimeError):
    """The driver misused the engine (stepped a finished search, read a path too early)."""


@dataclass
class StepResult:
    status: SearchStatus
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    stale: bool = False           # popped entry was already closed; not an expansion
    metrics: Dict[str, Any] = field(default_factory=dict)
