# gridwalk/world/obstacles.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, Optional, Set, Tuple

from .grid import Cell, in_bounds

Rect = Tuple[int, int, int, int]  # (x1, y1, x2, y2) inclusivo


def _normalize(rect: Rect) -> Rect:
    x1, y1, x2, y2 = (int(v) for v in rect)
    return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


class Block:
    """Rectángulo macizo de celdas no transitables."""

    def __init__(self, rect: Rect) -> None:
        self.rect = _normalize(rect)

    def contains(self, cell: Cell) -> bool:
        x1, y1, x2, y2 = self.rect
        x, y = cell
        return x1 <= x <= x2 and y1 <= y <= y2

    def blocked_cells(self) -> Iterator[Cell]:
        x1, y1, x2, y2 = self.rect
        for y in range(y1, y2 + 1):
            for x in range(x1, x2 + 1):
                yield (x, y)


class Enclosure(Block):
    """
    Muro rectangular: solo el perímetro bloquea, salvo las entradas.
    El interior es transitable (se llega a él por una entrada, si la hay).
    """

    def __init__(self, rect: Rect, entrances: Optional[Iterable[Cell]] = None) -> None:
        super().__init__(rect)
        self.entrances: Set[Cell] = {(int(x), int(y)) for x, y in (entrances or [])}

    def perimeter_cells(self) -> Iterator[Cell]:
        x1, y1, x2, y2 = self.rect
        seen = set()
        for x in range(x1, x2 + 1):
            for y in (y1, y2):
                c = (x, y)
                if c not in seen:
                    seen.add(c); yield c
        for y in range(y1 + 1, y2):
            for x in (x1, x2):
                c = (x, y)
                if c not in seen:
                    seen.add(c); yield c

    def blocked_cells(self) -> Iterator[Cell]:
        """Perímetro no transitable = perímetro - entradas."""
        for c in self.perimeter_cells():
            if c not in self.entrances:
                yield c


def blocked_cells_of(obstacles: Iterable[Block]) -> Set[Cell]:
    out: Set[Cell] = set()
    for ob in obstacles:
        out.update(ob.blocked_cells())
    return out


@dataclass(frozen=True)
class GridSpec:
    """
    Proveedor de obstáculos estático para una búsqueda.
    Fuera de los límites cuenta como bloqueado.
    """
    width_cells: int
    height_cells: int
    blocked: FrozenSet[Cell] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.width_cells <= 0 or self.height_cells <= 0:
            raise ValueError(f"Tamaño de grid inválido: {self.width_cells}x{self.height_cells}")
        object.__setattr__(self, "blocked", frozenset(self.blocked))

    def in_bounds(self, cell: Cell) -> bool:
        return in_bounds(cell, self.width_cells, self.height_cells)

    def is_blocked(self, cell: Cell) -> bool:
        return not self.in_bounds(cell) or cell in self.blocked

    def with_blocked(self, cells: Iterable[Cell]) -> "GridSpec":
        return GridSpec(self.width_cells, self.height_cells, self.blocked | frozenset(cells))

    def with_toggled(self, cell: Cell) -> "GridSpec":
        """Nuevo GridSpec con la celda conmutada (bloqueada ↔ libre)."""
        return GridSpec(self.width_cells, self.height_cells, self.blocked ^ {cell})
