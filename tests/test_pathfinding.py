# path: tests/test_pathfinding.py

"""
Tests for world.pathfinding: optimality, obstacles, unreachable goals,
the search step limit and determinism.
"""

from __future__ import annotations

from typing import List, Set

import pytest

from gridwalk.world import pathfinding
from gridwalk.world.frontier import PriorityFrontier
from gridwalk.world.grid import Cell, manhattan, to_world
from gridwalk.world.obstacles import Enclosure, GridSpec
from gridwalk.world.pathfinding import NOT_FOUND, SearchNode, astar, find_path


def _assert_contiguous(path: List[Cell]) -> None:
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1


@pytest.mark.parametrize(
    "start,goal",
    [((0, 0), (9, 9)), ((9, 0), (0, 9)), ((3, 7), (3, 1)), ((0, 5), (8, 5)), ((2, 2), (2, 3))],
)
def test_open_grid_path_is_manhattan_optimal(start, goal):
    grid = GridSpec(10, 10)
    path = astar(start, goal, grid.is_blocked)

    assert path is not None
    assert path[0] == start
    assert path[-1] == goal
    assert len(path) == manhattan(start, goal) + 1
    _assert_contiguous(path)


def test_path_avoids_blocked_cells_and_stays_optimal():
    # muro vertical en x=5 con un hueco en y=8
    blocked = {(5, y) for y in range(10) if y != 8}
    grid = GridSpec(10, 10, frozenset(blocked))

    path = astar((0, 0), (9, 0), grid.is_blocked)

    assert path is not None
    assert not any(grid.is_blocked(c) for c in path)
    assert (5, 8) in path
    # 9 en x + ida y vuelta hasta y=8
    assert len(path) == 9 + 8 + 8 + 1
    _assert_contiguous(path)


def test_enclosed_goal_is_not_found():
    ring = Enclosure((3, 3, 7, 7))
    grid = GridSpec(12, 12, frozenset(ring.blocked_cells()))

    assert astar((0, 0), (5, 5), grid.is_blocked) is NOT_FOUND


def test_enclosure_with_entrance_is_reachable():
    ring = Enclosure((3, 3, 7, 7), entrances=[(5, 3)])
    grid = GridSpec(12, 12, frozenset(ring.blocked_cells()))

    path = astar((5, 0), (5, 5), grid.is_blocked)

    assert path is not None
    assert (5, 3) in path
    assert len(path) == 6


def test_blocked_goal_is_not_found():
    grid = GridSpec(6, 6, frozenset({(4, 4)}))
    assert astar((0, 0), (4, 4), grid.is_blocked) is NOT_FOUND


def test_step_limit_terminates_on_unbounded_grid():
    calls = []

    def never_blocked(cell: Cell) -> bool:
        calls.append(cell)
        return False

    assert astar((0, 0), (200, 200), never_blocked, max_steps=50) is NOT_FOUND
    # como mucho 4 consultas por nodo extraído
    assert len(calls) <= 4 * 50


def test_step_limit_stops_search_around_enclosed_goal():
    # sin límites de mapa la frontera nunca se agota: solo el tope la para
    ring: Set[Cell] = set(Enclosure((-2, -2, 2, 2)).blocked_cells())

    assert astar((10, 10), (0, 0), lambda c: c in ring, max_steps=1000) is NOT_FOUND


def test_start_equals_goal_returns_single_cell():
    grid = GridSpec(5, 5)
    assert astar((2, 2), (2, 2), grid.is_blocked) == [(2, 2)]
    assert find_path((2, 2), (2, 2), grid.is_blocked, grid_size=10) == [(25.0, 25.0)]


def test_search_is_deterministic():
    blocked = frozenset({(2, y) for y in range(1, 8)} | {(6, y) for y in range(0, 7)})
    grid = GridSpec(9, 9, blocked)

    first = astar((0, 4), (8, 4), grid.is_blocked)
    second = astar((0, 4), (8, 4), grid.is_blocked)

    assert first is not None
    assert first == second


def test_find_path_returns_cell_centers():
    grid = GridSpec(5, 5)
    path = find_path((0, 0), (2, 0), grid.is_blocked, grid_size=24)

    assert path == [to_world((0, 0), 24), to_world((1, 0), 24), to_world((2, 0), 24)]
    assert path[-1] == (60.0, 12.0)


def test_find_path_not_found_is_none():
    grid = GridSpec(3, 3, frozenset({(1, 0), (1, 1), (1, 2)}))
    assert find_path((0, 0), (2, 2), grid.is_blocked, grid_size=1) is None


def test_invalid_step_limit_rejected():
    with pytest.raises(ValueError):
        astar((0, 0), (1, 1), lambda c: False, max_steps=0)


def test_search_node_priority_orders_by_f_then_h():
    a = SearchNode((0, 0), g_cost=2, h_cost=3)
    b = SearchNode((1, 0), g_cost=4, h_cost=1)
    assert a.f_cost == b.f_cost == 5
    assert b.priority < a.priority


# ---------- entradas duplicadas en la frontera ----------

def _record_expansions(monkeypatch) -> List[Cell]:
    """Envuelve neighbors_4 del módulo para apuntar cada celda expandida."""
    expanded: List[Cell] = []
    original = pathfinding.neighbors_4

    def recording(cell: Cell) -> List[Cell]:
        expanded.append(cell)
        return original(cell)

    monkeypatch.setattr(pathfinding, "neighbors_4", recording)
    return expanded


class _DoubleInsertFrontier(PriorityFrontier):
    """Mete cada nodo dos veces: la segunda copia siempre queda obsoleta."""

    inserted: List[Cell] = []

    def insert(self, item) -> None:
        _DoubleInsertFrontier.inserted.append(item.cell)
        super().insert(item)
        super().insert(item)


def test_stale_duplicate_entries_are_never_expanded(monkeypatch):
    expanded = _record_expansions(monkeypatch)
    _DoubleInsertFrontier.inserted = []
    monkeypatch.setattr(pathfinding, "PriorityFrontier", _DoubleInsertFrontier)
    grid = GridSpec(8, 8, frozenset({(3, y) for y in range(7)}))

    path = astar((0, 0), (7, 0), grid.is_blocked)

    assert path is not None
    assert len(path) == 7 + 7 + 7 + 1
    assert len(_DoubleInsertFrontier.inserted) > 1
    assert len(expanded) == len(set(expanded))


def test_each_cell_expanded_once_around_wall_gap(monkeypatch):
    expanded = _record_expansions(monkeypatch)
    blocked = {(5, y) for y in range(10) if y != 8}
    grid = GridSpec(10, 10, frozenset(blocked))

    path = astar((0, 0), (9, 0), grid.is_blocked)

    assert path is not None
    assert expanded
    assert len(expanded) == len(set(expanded))
    assert not any(c in blocked for c in expanded)
