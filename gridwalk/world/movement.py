# gridwalk/world/movement.py
from __future__ import annotations
from enum import Enum, auto
from typing import Optional, Sequence, Tuple
import math

from .grid import Point
from .settings import SETTINGS


class FollowerState(Enum):
    IDLE = auto()
    MOVING = auto()


def move_towards(pos: Point, target: Point, max_delta: float) -> Point:
    """Avanza en línea recta hacia target como mucho max_delta, sin pasarse."""
    x, y = pos
    tx, ty = target
    dx, dy = tx - x, ty - y
    dist = math.hypot(dx, dy)
    if max_delta <= 0.0:
        return (x, y)
    if dist <= max_delta:
        return (tx, ty)
    k = max_delta / dist
    return (x + dx * k, y + dy * k)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


class PathFollower:
    """
    Recorre una ruta de waypoints (mundo) a velocidad lineal fija (unidades/seg).
    Estados: IDLE → MOVING (begin_path) → IDLE (último waypoint, con snap exacto).
    No modifica la ruta que recibe.
    """

    def __init__(self, speed: float, arrival_tolerance: float = SETTINGS.ARRIVAL_TOLERANCE) -> None:
        if speed <= 0:
            raise ValueError(f"speed debe ser > 0: {speed!r}")
        if arrival_tolerance <= 0:
            raise ValueError(f"arrival_tolerance debe ser > 0: {arrival_tolerance!r}")
        self.speed = float(speed)
        self.arrival_tolerance = float(arrival_tolerance)
        self._path: Tuple[Point, ...] = ()
        self._index = 0
        self._state = FollowerState.IDLE

    # ----- estado
    @property
    def state(self) -> FollowerState:
        return self._state

    @property
    def path(self) -> Tuple[Point, ...]:
        return self._path

    @property
    def current_index(self) -> int:
        return self._index

    def is_idle(self) -> bool:
        return self._state is FollowerState.IDLE

    def current_waypoint(self) -> Optional[Point]:
        if self.is_idle():
            return None
        return self._path[self._index]

    # ----- órdenes
    def begin_path(self, path: Optional[Sequence[Point]]) -> bool:
        """Sustituye la ruta en curso. Ruta vacía/None → no hace nada."""
        if not path:
            return False
        self._path = tuple((float(x), float(y)) for x, y in path)
        self._index = 0
        self._state = FollowerState.MOVING
        return True

    def stop(self) -> None:
        self._path = ()
        self._index = 0
        self._state = FollowerState.IDLE

    def _advance(self) -> bool:
        """Pasa al siguiente waypoint. True si era el último."""
        self._index += 1
        if self._index >= len(self._path):
            self._state = FollowerState.IDLE
            return True
        return False

    def tick(self, dt: float, current_position: Point) -> Point:
        """
        Un paso de integración. Devuelve la nueva posición.
        - Los waypoints ya alcanzados (p.ej. el centro de la celda actual) se saltan
          sin gastar el frame.
        - Un solo movimiento por tick: lo que sobre del presupuesto no se
          arrastra al siguiente waypoint.
        """
        pos = (float(current_position[0]), float(current_position[1]))
        if self.is_idle():
            return pos

        while distance(pos, self._path[self._index]) < self.arrival_tolerance:
            final = self._path[self._index]
            if self._advance():
                return final

        target = self._path[self._index]
        pos = move_towards(pos, target, self.speed * dt)
        if distance(pos, target) < self.arrival_tolerance and self._advance():
            pos = target  # snap exacto al destino

        return pos
