"""Step-by-step BFS / DFS / UCS / Greedy / A* on a weighted grid, with a pygame viewer."""

from gridsearch.core import *  # noqa: F401,F403

__version__ = "0.1.0"
