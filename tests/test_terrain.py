import json
import logging
import random

import pytest

from gridsearch.core.terrain import (
    TERRAIN_COSTS,
    Grid,
    TerrainClass,
    generate_grid,
    load_map,
    random_passable_cell,
)
from gridsearch.core.types import ConfigurationError


def test_default_costs_are_ordered_and_at_least_one():
    low, med, high = (TERRAIN_COSTS[t] for t in (TerrainClass.LOW, TerrainClass.MEDIUM, TerrainClass.HIGH))
    assert 1 <= low < med < high
    assert TerrainClass.IMPASSABLE not in TERRAIN_COSTS


def test_cost_model_lookup():
    grid = Grid(3, 1, [[0, 2, 3]])
    assert not grid.is_passable((0, 0))
    assert grid.is_passable((1, 0))
    assert grid.cost_of((1, 0)) == 5
    assert grid.cost_of((2, 0)) == 10
    assert grid.terrain_at((2, 0)) is TerrainClass.HIGH
    with pytest.raises(ValueError):
        grid.cost_of((0, 0))


def test_cells_are_indexed_row_major():
    grid = Grid(2, 3, [[1, 1], [1, 0], [1, 1]])
    assert not grid.is_passable((1, 1))
    assert grid.in_bounds((1, 2))
    assert not grid.in_bounds((2, 1))
    assert not grid.in_bounds((0, -1))


def test_with_costs_keeps_terrain():
    grid = Grid(2, 1, [[2, 3]])
    unit = grid.with_costs({TerrainClass.LOW: 1, TerrainClass.MEDIUM: 1, TerrainClass.HIGH: 1})
    assert unit.cost_of((0, 0)) == 1 and unit.cost_of((1, 0)) == 1
    assert grid.cost_of((1, 0)) == 10


@pytest.mark.parametrize("cells", [[[1, 1]], [[1], [1, 1]], [[1, 7], [1, 1]]])
def test_bad_cells_rejected(cells):
    with pytest.raises(ConfigurationError):
        Grid(2, 2, cells)


@pytest.mark.parametrize("costs", [{TerrainClass.LOW: 0}, {TerrainClass.LOW: -3}, {TerrainClass.IMPASSABLE: 1}])
def test_non_positive_or_impassable_costs_rejected(costs):
    with pytest.raises(ConfigurationError):
        Grid(1, 1, [[1]], costs)


def test_cost_below_one_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="gridsearch.core.terrain"):
        Grid(1, 1, [[1]], {TerrainClass.LOW: 0.5})
    assert "admissible" in caplog.text


def test_generation_is_seeded_and_uses_all_classes():
    a = generate_grid(20, 20, random.Random(11))
    b = generate_grid(20, 20, random.Random(11))
    assert a.cells == b.cells
    seen = {v for row in a.cells for v in row}
    assert seen == {int(t) for t in TerrainClass}


def test_random_passable_cell():
    grid = Grid(3, 3, [[0, 0, 0], [0, 2, 0], [0, 0, 0]])
    assert random_passable_cell(grid, random.Random(0)) == (1, 1)
    with pytest.raises(ConfigurationError):
        random_passable_cell(Grid(2, 1, [[0, 0]]), random.Random(0))


def test_load_map(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({
        "width": 3, "height": 2,
        "cells": [[1, 2, 3], [0, 1, 1]],
        "costs": {"MEDIUM": 4, "3": "BLOCK"},
        "start": [0, 0], "goal": [2, 1],
    }))
    spec = load_map(path)
    assert spec.start == (0, 0) and spec.goal == (2, 1)
    assert spec.grid.cost_of((1, 0)) == 4
    assert not spec.grid.is_passable((2, 0))


def test_load_map_without_endpoints(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({"width": 1, "height": 1, "cells": [[1]]}))
    spec = load_map(path)
    assert spec.start is None and spec.goal is None


@pytest.mark.parametrize("payload", [
    "not json",
    json.dumps({"width": 1, "cells": [[1]]}),
    json.dumps({"width": 1, "height": 1, "cells": [[1]], "start": [3, 0]}),
    json.dumps({"width": 1, "height": 1, "cells": [[1]], "costs": {"LAVA": 2}}),
    json.dumps({"width": 2, "height": 1, "cells": 5}),
    json.dumps({"width": 2, "height": 2, "cells": [[1, 1], 7]}),
    json.dumps({"width": 1, "height": 1, "cells": [[1]], "costs": [1, 5, 10]}),
    json.dumps({"width": 3.7, "height": 1, "cells": [[1, 1, 1]]}),
    json.dumps({"width": True, "height": 1, "cells": [[1]]}),
    json.dumps({"width": 2, "height": 1, "cells": [[1, 1]], "start": [0.5, 0]}),
    json.dumps({"width": 2, "height": 1, "cells": [[1, 1]], "goal": [True, 0]}),
])
def test_load_map_errors(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(payload)
    with pytest.raises(ConfigurationError):
        load_map(path)


def test_load_map_accepts_integral_floats(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({"width": 2.0, "height": 1, "cells": [[1, 1]], "start": [1.0, 0]}))
    spec = load_map(path)
    assert spec.grid.width == 2
    assert spec.start == (1, 0)


@pytest.mark.parametrize("width,height,cells", [
    (True, 1, [[1]]),
    (2.0, 1, [[1, 1]]),
    (1, 1, "1"),
    (1, 1, [(1,)]),
])
def test_grid_rejects_wrongly_typed_fields(width, height, cells):
    with pytest.raises(ConfigurationError):
        Grid(width, height, cells)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_map(tmp_path / "nope.json")


def test_uniform_grid():
    grid = Grid.uniform(3, 2, TerrainClass.MEDIUM)
    assert grid.passable_cells() == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert grid.cost_of((2, 1)) == 5
