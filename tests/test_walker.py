from gridsearch.app.walker import AgentWalk
from gridsearch.core.terrain import Grid


def _ticks_until_move(walk):
    n = 0
    while True:
        n += 1
        moved = walk.tick()
        if moved is not None:
            return n, moved


def test_walk_waits_longer_on_expensive_terrain():
    grid = Grid(3, 1, [[1, 1, 3]])
    walk = AgentWalk(grid, (0, 0), [(1, 0), (2, 0)])
    # cost 1 -> 2 waiting frames then the move; cost 10 -> 20 frames then the move
    assert _ticks_until_move(walk) == (3, (1, 0))
    assert walk.position == (1, 0)
    assert not walk.finished
    assert _ticks_until_move(walk) == (21, (2, 0))
    assert walk.finished
    assert walk.tick() is None
    assert walk.position == (2, 0)


def test_empty_path_is_finished_immediately():
    walk = AgentWalk(Grid(1, 1, [[1]]), (0, 0), [])
    assert walk.finished
    assert walk.tick() is None
    assert walk.position == (0, 0)


def test_frames_per_cost_is_configurable():
    grid = Grid(2, 1, [[1, 2]])
    walk = AgentWalk(grid, (0, 0), [(1, 0)], frames_per_cost=1)
    assert walk.frames_for((1, 0)) == 5
    assert _ticks_until_move(walk) == (6, (1, 0))
