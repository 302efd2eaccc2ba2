#!/usr/bin/env python3
"""
Entry point.

    python -m gridsearch                      # pygame viewer
    python -m gridsearch --headless --seed=3  # run one search, log the outcome
"""

import logging
import random
import sys
from typing import Optional, Sequence

from gridsearch.app.world import new_world
from gridsearch.config import Settings, resolve_settings
from gridsearch.core.search import run_search
from gridsearch.core.types import GridSearchError, SearchStatus

logger = logging.getLogger("gridsearch")


def run_headless(settings: Settings) -> int:
    rng = random.Random(settings.seed)
    world = new_world(settings, rng)
    search = run_search(world.grid, world.agent, world.food, settings.strategy, settings.max_steps)
    m = search.metrics()
    if search.status is SearchStatus.FOUND:
        logger.info("path: %s", " ".join(f"{x},{y}" for x, y in search.reconstruct()) or "(already there)")
        logger.info("cost %s over %d cells, %d expansions", m["total_cost"], m["path_len"], m["popped"])
        return 0
    if search.status is SearchStatus.EXHAUSTED:
        logger.info("no path from %s to %s", world.agent, world.food)
        return 1
    logger.info("gave up after %d steps", search.step_count)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        settings = resolve_settings(argv)
    except GridSearchError as ex:
        logging.basicConfig(level=logging.INFO)
        logger.error("%s", ex)
        return 2
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        if settings.headless:
            return run_headless(settings)
        from gridsearch.app.viewer import Viewer
        Viewer(settings).run()
        return 0
    except GridSearchError as ex:
        logger.error("%s", ex)
        return 2


if __name__ == "__main__":
    sys.exit(main())
