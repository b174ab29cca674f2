# gridwalk/world/settings.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict
import os

import yaml

@dataclass(frozen=True)
class WorldSettings:
    WIDTH: int = 1280
    HEIGHT: int = 720
    GRID_SIZE: int = 24
    FPS: int = 60
    SPEED_CELLS_PER_SEC: float = 5.0
    MAX_SEARCH_STEPS: int = 1000     # tope de pops del A*
    ARRIVAL_TOLERANCE: float = 0.1   # unidades de mundo

SETTINGS = WorldSettings()


def _coerce(name: str, value: Any) -> Any:
    if name in ("WIDTH", "HEIGHT", "GRID_SIZE", "FPS", "MAX_SEARCH_STEPS"):
        v = int(value)
        if v <= 0:
            raise ValueError(f"{name} debe ser > 0: {value!r}")
        return v
    v = float(value)
    if v <= 0:
        raise ValueError(f"{name} debe ser > 0: {value!r}")
    return v


def load_settings(path: str, base: WorldSettings = SETTINGS) -> WorldSettings:
    """
    Lee un YAML plano (claves en mayúsculas o minúsculas) y sobreescribe
    los valores por defecto. Claves desconocidas → ValueError.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Settings inválidos en {path}: se esperaba un mapa")

    known = {f.name for f in fields(WorldSettings)}
    overrides: Dict[str, Any] = {}
    for k, v in raw.items():
        name = str(k).upper()
        if name not in known:
            raise ValueError(f"Clave de settings desconocida: {k!r}")
        overrides[name] = _coerce(name, v)
    return replace(base, **overrides)
