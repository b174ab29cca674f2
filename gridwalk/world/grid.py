# gridwalk/world/grid.py
from __future__ import annotations
from typing import List, Tuple

Cell = Tuple[int, int]
Point = Tuple[float, float]

def to_cell(pos_xy: Point, grid_size: float) -> Cell:
    """Pasa de coordenadas de mundo a celda (enteros)."""
    x, y = pos_xy
    return int(x // grid_size), int(y // grid_size)

def to_world(cell: Cell, grid_size: float) -> Point:
    """Centro de celda → coordenadas de mundo."""
    cx, cy = cell
    return (cx + 0.5) * grid_size, (cy + 0.5) * grid_size

def neighbors_4(cell: Cell) -> List[Cell]:
    """Vecinos en 4 direcciones (E,O,N,S)."""
    x, y = cell
    return [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]

def in_bounds(cell: Cell, width_cells: int, height_cells: int) -> bool:
    x, y = cell
    return 0 <= x < width_cells and 0 <= y < height_cells

def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

