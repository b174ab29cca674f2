# gridwalk/utils/logger.py
import logging
import os
from typing import Optional

DEFAULT_LOG_FILE = os.path.join("logs", "world", "world.log")
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

def _level_from_env(default: int) -> int:
    """GRIDWALK_LOG_LEVEL=DEBUG|INFO|... sobreescribe el nivel pedido."""
    raw = os.environ.get("GRIDWALK_LOG_LEVEL")
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default

def get_logger(name: str,
               file_path: Optional[str] = None,
               level: int = logging.INFO) -> logging.Logger:
    """
    Logger con formateo consistente.
    - file_path=None → logs/world/world.log
    - file_path=""   → solo consola (sin fichero)
    Si el logger ya tiene handlers se devuelve tal cual.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # ya configurado

    level = _level_from_env(level)
    logger.setLevel(level)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    if file_path is None:
        file_path = DEFAULT_LOG_FILE
    if file_path:
        os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)
        fh = logging.FileHandler(file_path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    logger.propagate = False
    return logger
