from gridsearch.core.frontier import Discipline, Frontier, FrontierEntry
from gridsearch.core.search import (
    FrontierSearch,
    Strategy,
    manhattan,
    neighbors4,
    reconstruct_path,
    run_search,
)
from gridsearch.core.terrain import (
    TERRAIN_COSTS,
    Grid,
    MapSpec,
    TerrainClass,
    generate_grid,
    load_map,
    random_passable_cell,
)
from gridsearch.core.types import (
    Cell,
    ConfigurationError,
    GridSearchError,
    InvariantViolation,
    SearchStatus,
    StepResult,
)

__all__ = [
    "Cell", "ConfigurationError", "Discipline", "Frontier", "FrontierEntry", "FrontierSearch",
    "Grid", "GridSearchError", "InvariantViolation", "MapSpec", "SearchStatus", "StepResult",
    "Strategy", "TERRAIN_COSTS", "TerrainClass", "generate_grid", "load_map", "manhattan",
    "neighbors4", "random_passable_cell", "reconstruct_path", "run_search",
]
