# gridwalk/world/frontier.py
from __future__ import annotations
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class EmptyFrontierError(IndexError):
    """remove_min/peek_min sobre una frontera vacía (error de programación)."""


class PriorityFrontier(Generic[T]):
    """
    Montículo binario (min-heap) sobre una lista densa.
    - Los hijos del índice i están en 2i+1 y 2i+2.
    - El orden lo da 'key' (si se pasa) o el propio '<' de los elementos.
    - reverse=True invierte el orden (max-heap).
    - Admite duplicados, incluso con la misma prioridad; los empates
      no tienen orden estable: quien lo necesite lo mete en la clave.
    No sabe nada de celdas ni de A*.
    """

    def __init__(self, key: Optional[Callable[[T], Any]] = None, reverse: bool = False) -> None:
        self._data: List[T] = []
        self._key = key
        self._reverse = reverse

    # --- orden ---
    def _less(self, a: T, b: T) -> bool:
        ka = self._key(a) if self._key is not None else a
        kb = self._key(b) if self._key is not None else b
        if self._reverse:
            return kb < ka
        return ka < kb

    # --- API ---
    def insert(self, item: T) -> None:
        data = self._data
        data.append(item)
        child = len(data) - 1
        while child > 0:
            parent = (child - 1) // 2
            if not self._less(data[child], data[parent]):
                break
            data[child], data[parent] = data[parent], data[child]
            child = parent

    def remove_min(self) -> T:
        data = self._data
        if not data:
            raise EmptyFrontierError("remove_min on empty frontier")
        last = len(data) - 1
        data[0], data[last] = data[last], data[0]
        front = data.pop()
        last -= 1

        parent = 0
        while True:
            child = parent * 2 + 1
            if child > last:
                break
            right = child + 1
            if right <= last and self._less(data[right], data[child]):
                child = right
            if not self._less(data[child], data[parent]):
                break
            data[parent], data[child] = data[child], data[parent]
            parent = child
        return front

    def peek_min(self) -> T:
        if not self._data:
            raise EmptyFrontierError("peek_min on empty frontier")
        return self._data[0]

    def size(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def contains(self, item: T) -> bool:
        # lineal: no mantenemos índice auxiliar
        return item in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __contains__(self, item: object) -> bool:
        return item in self._data
