# gridwalk/utils/loader.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import json

from gridwalk.utils.logger import get_logger
from gridwalk.world.grid import Cell
from gridwalk.world.obstacles import Block, Enclosure, GridSpec, Rect, blocked_cells_of
from gridwalk.world.settings import SETTINGS

log = get_logger("world.loader")

# ---- helpers de validación/normalización ----

def _as_cell(value: Any) -> Cell:
    # admite [x,y] o {"x":..,"y":..}
    if (isinstance(value, (list, tuple)) and len(value) == 2
            and all(isinstance(v, (int, float)) for v in value)):
        # admitimos float pero truncamos a int
        return int(value[0]), int(value[1])
    if isinstance(value, dict) and "x" in value and "y" in value:
        return int(value["x"]), int(value["y"])
    raise ValueError(f"Celda inválida: {value!r}")

def _as_rect(obj: Any) -> Rect:
    """
    Devuelve (x1, y1, x2, y2) inclusivo.
    Soporta:
      - [x1,y1,x2,y2]
      - {"x1":..,"y1":..,"x2":..,"y2":..}
      - {"left":..,"bottom":..,"right":..,"top":..}
    """
    if isinstance(obj, (tuple, list)) and len(obj) == 4:
        return tuple(int(v) for v in obj)  # type: ignore[return-value]
    if isinstance(obj, dict):
        if all(k in obj for k in ("x1", "y1", "x2", "y2")):
            return int(obj["x1"]), int(obj["y1"]), int(obj["x2"]), int(obj["y2"])
        if all(k in obj for k in ("left", "bottom", "right", "top")):
            return int(obj["left"]), int(obj["bottom"]), int(obj["right"]), int(obj["top"])
    raise ValueError(f"Rect inválido: {obj!r}")

def _size(data: Dict[str, Any]) -> Tuple[int, int]:
    if "size" in data:
        w, h = _as_cell(data["size"])
        return w, h
    return SETTINGS.WIDTH // SETTINGS.GRID_SIZE, SETTINGS.HEIGHT // SETTINGS.GRID_SIZE

# ---- Obstáculos ----

def load_obstacles(data: Dict[str, Any]) -> List[Block]:
    """Bloques macizos ("blocks") y muros con entradas ("walls")."""
    obstacles: List[Block] = []
    for spec in data.get("blocks", []) or []:
        rect = spec.get("rect") if isinstance(spec, dict) and "rect" in spec else spec
        obstacles.append(Block(_as_rect(rect)))
    for spec in data.get("walls", []) or []:
        if not isinstance(spec, dict) or "rect" not in spec:
            raise ValueError(f"Muro inválido (falta 'rect'): {spec!r}")
        entrances = [_as_cell(c) for c in spec.get("entrances", []) or []]
        obstacles.append(Enclosure(_as_rect(spec["rect"]), entrances))
    return obstacles

# ---- API pública ----

def load_world_from_json(
    json_path: str | Path,
    walker_factory: Callable[[dict, GridSpec], Any],
):
    """
    Carga tamaño, bloqueos y walkers desde JSON.
    - walker_factory: callable que recibe el dict de un walker del JSON y el GridSpec
      cargado, y devuelve una instancia (p.ej. GridWalker). cfg["cell"] llega ya
      normalizada a tupla (int, int). Así la escena inyecta
      grid_size, proveedor de obstáculos, etc.
    Devuelve: (grid_spec: GridSpec, walkers: list[Any])
    """
    p = Path(json_path)
    data = json.loads(p.read_text(encoding="utf-8"))

    # 1) tamaño y bloqueos
    w, h = _size(data)
    blocked = {_as_cell(c) for c in data.get("blocked", []) or []}
    obstacles = load_obstacles(data)
    blocked |= blocked_cells_of(obstacles)
    grid = GridSpec(w, h, frozenset(blocked))

    # 2) walkers (vía factory del llamador)
    walkers = []
    for cfg in data.get("walkers", []) or []:
        if "id" not in cfg or "cell" not in cfg:
            log.warning(f"Walker inválido (faltan 'id' o 'cell'): {cfg!r}")
            continue
        cell = _as_cell(cfg["cell"])
        if grid.is_blocked(cell):
            log.warning(f"Walker {cfg['id']!r} en celda bloqueada {cell}, se ignora")
            continue
        walkers.append(walker_factory({**cfg, "cell": cell}, grid))

    log.info(f"load_ok size={w}x{h} blocked={len(grid.blocked)} obstacles={len(obstacles)} walkers={len(walkers)} from={p}")
    return grid, walkers
