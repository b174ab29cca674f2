# gridwalk/agent/walker.py
from __future__ import annotations
from typing import Callable, List, Optional

from gridwalk.world.grid import Cell, Point, to_cell, to_world
from gridwalk.world.movement import PathFollower
from gridwalk.world.obstacles import GridSpec
from gridwalk.world.pathfinding import find_path
from gridwalk.world.settings import SETTINGS
from gridwalk.utils.logger import get_logger


class GridWalker:
    """
    Agente de click-to-move:
    - Mantiene su posición en mundo y la mueve con un PathFollower
    - Expone órdenes: spawn_at, move_to_cell/point, stop, is_idle
    - Calcula la ruta con A* usando un proveedor de GridSpec (el mundo)
    - Loggea en logs/agents/<agent_id>.log
    """
    def __init__(
        self,
        agent_id: str,
        grid_size: float,
        grid_spec_provider: Callable[[], GridSpec],
        speed_cells_per_sec: float = SETTINGS.SPEED_CELLS_PER_SEC,
        initial_cell: Optional[Cell] = (1, 1),
        max_steps: int = SETTINGS.MAX_SEARCH_STEPS,
        arrival_tolerance: float = SETTINGS.ARRIVAL_TOLERANCE,
        log_file: Optional[str] = None,
    ) -> None:
        self.id = agent_id
        self.grid_size = grid_size
        self.max_steps = max_steps
        self._grid_spec_provider = grid_spec_provider
        # velocidad en unidades de mundo/seg
        self.follower = PathFollower(speed_cells_per_sec * grid_size, arrival_tolerance)
        self._pos_world: Point = (0.0, 0.0)

        self.log_file = log_file if log_file is not None else f"logs/agents/{agent_id}.log"
        self.log = get_logger(f"agent.{agent_id}", self.log_file)

        if initial_cell is not None:
            self.spawn_at(initial_cell)

    # ----- estado
    def world_position(self) -> Point:
        return self._pos_world

    def current_cell(self) -> Cell:
        return to_cell(self._pos_world, self.grid_size)

    def is_idle(self) -> bool:
        return self.follower.is_idle()

    def get_path_points(self) -> List[Point]:
        return list(self.follower.path)

    def get_path_cells(self) -> List[Cell]:
        return [to_cell(p, self.grid_size) for p in self.follower.path]

    # ----- órdenes (con logs)
    def spawn_at(self, cell: Cell) -> None:
        self.follower.stop()
        self._pos_world = to_world(cell, self.grid_size)
        self.log.info(f"action=spawn_at cell={cell}")

    def move_to_cell(self, cell: Cell) -> bool:
        start = self.current_cell()
        self.log.info(f"action=move_request start={start} goal={cell}")
        grid = self._grid_spec_provider()
        path = find_path(start, cell, grid.is_blocked, self.grid_size, self.max_steps)
        if path is None:
            self.log.warning(f"action=no_path start={start} goal={cell}")
            self.follower.stop()
            return False
        self.follower.begin_path(path)
        self.log.info(f"action=path_set start={start} goal={cell} steps={len(path)}")
        return True

    def move_to_point(self, x: float, y: float) -> bool:
        return self.move_to_cell(to_cell((x, y), self.grid_size))

    def stop(self) -> None:
        self.follower.stop()
        self.log.info("action=stop")

    def update(self, dt: float) -> None:
        was_moving = not self.follower.is_idle()
        prev_cell = self.current_cell()
        self._pos_world = self.follower.tick(dt, self._pos_world)
        new_cell = self.current_cell()

        if new_cell != prev_cell:
            self.log.debug(f"action=step cell_from={prev_cell} cell_to={new_cell}")

        if was_moving and self.follower.is_idle():
            self.log.info(f"action=arrived cell={new_cell}")
