import pytest

from gridsearch.core.frontier import Discipline, Frontier, FrontierEntry


def _drain(frontier):
    out = []
    while not frontier.is_empty():
        out.append(frontier.pop().cell)
    return out


def _filled(discipline, entries):
    f = Frontier(discipline)
    for cell, priority in entries:
        f.push(FrontierEntry(cell, priority))
    return f


ENTRIES = [((0, 0), 5), ((1, 0), 1), ((2, 0), 3), ((3, 0), 1)]


def test_fifo_pops_in_insertion_order_ignoring_priority():
    f = _filled(Discipline.FIFO, ENTRIES)
    assert _drain(f) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_lifo_pops_newest_first():
    f = _filled(Discipline.LIFO, ENTRIES)
    assert _drain(f) == [(3, 0), (2, 0), (1, 0), (0, 0)]


def test_priority_pops_minimum_and_breaks_ties_by_insertion():
    f = _filled(Discipline.PRIORITY, ENTRIES)
    assert _drain(f) == [(1, 0), (3, 0), (2, 0), (0, 0)]


def test_priority_with_interleaved_pushes():
    f = Frontier(Discipline.PRIORITY)
    f.push(FrontierEntry((0, 0), 2))
    f.push(FrontierEntry((1, 1), 2))
    assert f.pop().cell == (0, 0)
    f.push(FrontierEntry((2, 2), 1))
    f.push(FrontierEntry((3, 3), 2))
    assert _drain(f) == [(2, 2), (1, 1), (3, 3)]


def test_duplicate_cells_are_kept():
    f = _filled(Discipline.PRIORITY, [((4, 4), 9), ((4, 4), 2)])
    assert len(f) == 2
    assert f.pop() == FrontierEntry((4, 4), 2)
    assert f.pop() == FrontierEntry((4, 4), 9)


@pytest.mark.parametrize("discipline", list(Discipline))
def test_len_iter_and_cells(discipline):
    f = _filled(discipline, ENTRIES + [((0, 0), 7)])
    assert len(f) == 5
    assert sorted(e.cell for e in f) == [(0, 0), (0, 0), (1, 0), (2, 0), (3, 0)]
    assert f.cells() == {(0, 0), (1, 0), (2, 0), (3, 0)}


@pytest.mark.parametrize("discipline", list(Discipline))
def test_pop_on_empty_raises(discipline):
    f = Frontier(discipline)
    assert f.is_empty()
    with pytest.raises(IndexError):
        f.pop()
