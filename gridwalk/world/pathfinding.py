# gridwalk/world/pathfinding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from .frontier import PriorityFrontier
from .grid import Cell, Point, neighbors_4, manhattan, to_world
from .settings import SETTINGS
from gridwalk.utils.logger import get_logger

log = get_logger("world.pathfinding")

BlockedFn = Callable[[Cell], bool]
Path = List[Point]

# "No hay ruta" es un resultado normal, no una excepción.
NOT_FOUND = None


@dataclass(frozen=True)
class SearchNode:
    cell: Cell
    g_cost: float
    h_cost: float

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    @property
    def priority(self) -> Tuple[float, float]:
        # desempate por h: el heap no da orden estable
        return (self.f_cost, self.h_cost)


def reconstruct_path(came_from: Dict[Cell, Cell], start: Cell, goal: Cell) -> List[Cell]:
    cur = goal
    out = [cur]
    while cur != start:
        cur = came_from[cur]
        out.append(cur)
    out.reverse()
    return out


def astar(
    start: Cell,
    goal: Cell,
    is_blocked: BlockedFn,
    max_steps: int = SETTINGS.MAX_SEARCH_STEPS,
) -> Optional[List[Cell]]:
    """
    A* sobre grid 4-dir con coste uniforme (1 por paso) y heurística Manhattan.
    Devuelve la secuencia de celdas (incluye start y goal) o NOT_FOUND si la
    frontera se agota o se superan 'max_steps' extracciones.
    'is_blocked' debe ser una consulta pura: el layout no cambia durante la búsqueda.
    start == goal → [start] (ya hemos llegado).
    """
    if max_steps <= 0:
        raise ValueError(f"max_steps debe ser > 0: {max_steps!r}")

    if start == goal:
        return [start]

    frontier: PriorityFrontier[SearchNode] = PriorityFrontier(key=lambda n: n.priority)
    frontier.insert(SearchNode(start, 0, manhattan(start, goal)))
    came_from: Dict[Cell, Cell] = {}
    g_score: Dict[Cell, float] = {start: 0}
    closed: Set[Cell] = set()

    steps = 0
    while not frontier.is_empty():
        if steps >= max_steps:
            log.warning(f"search=step_limit start={start} goal={goal} steps={steps} open={frontier.size()}")
            return NOT_FOUND
        steps += 1

        current = frontier.remove_min()
        if current.cell == goal:
            path = reconstruct_path(came_from, start, goal)
            log.debug(f"search=found start={start} goal={goal} steps={steps} length={len(path)}")
            return path

        # entradas obsoletas de una celda ya expandida
        if current.cell in closed:
            continue
        closed.add(current.cell)

        for nb in neighbors_4(current.cell):
            if nb in closed:
                continue
            if is_blocked(nb):
                continue

            tentative = g_score[current.cell] + 1  # coste uniforme
            if nb not in g_score or tentative < g_score[nb]:
                g_score[nb] = tentative
                came_from[nb] = current.cell
                frontier.insert(SearchNode(nb, tentative, manhattan(nb, goal)))

    log.debug(f"search=exhausted start={start} goal={goal} steps={steps}")
    return NOT_FOUND


def find_path(
    start: Cell,
    goal: Cell,
    is_blocked: BlockedFn,
    grid_size: float,
    max_steps: int = SETTINGS.MAX_SEARCH_STEPS,
) -> Optional[Path]:
    """Igual que astar, pero devuelve los centros de celda en coordenadas de mundo."""
    cells = astar(start, goal, is_blocked, max_steps)
    if cells is NOT_FOUND:
        return NOT_FOUND
    return [to_world(c, grid_size) for c in cells]
