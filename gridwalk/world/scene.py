# gridwalk/world/scene.py
"""
Visor mínimo del mundo:
- Dibuja el grid, los obstáculos, la ruta y los walkers.
- Resalta la celda bajo el cursor.
Controles:
- Clic izquierdo: mover a la celda clicada.
- Clic derecho: parar.
- Tecla B: alterna obstáculo en la celda del ratón.
- Tecla C: limpia obstáculos.
- Tecla P: muestra/oculta la ruta.
- ESC/Q: salir.
"""

from __future__ import annotations
import arcade

from gridwalk.utils.loader import load_world_from_json
from gridwalk.utils.logger import get_logger
from gridwalk.world.settings import SETTINGS, WorldSettings
from gridwalk.world.grid import to_cell
from gridwalk.world.obstacles import GridSpec
from gridwalk.agent.walker import GridWalker


class GameWindow(arcade.Window):
    def __init__(self, config_path: str | None = None, settings: WorldSettings = SETTINGS) -> None:
        super().__init__(
            settings.WIDTH,
            settings.HEIGHT,
            "gridwalk",
            update_rate=1 / settings.FPS,
        )
        arcade.set_background_color(arcade.color.DARK_SPRING_GREEN)

        self.settings = settings
        self.g = settings.GRID_SIZE
        self.log = get_logger("world.visual")

        self.show_path = True
        self.grid = GridSpec(settings.WIDTH // self.g, settings.HEIGHT // self.g)

        # el walker consulta siempre el layout actual
        def grid_spec() -> GridSpec:
            return self.grid

        def make_walker(cfg: dict, _grid: GridSpec) -> GridWalker:
            speed = float(cfg.get("speed", settings.SPEED_CELLS_PER_SEC))
            return GridWalker(
                agent_id=str(cfg["id"]),
                grid_size=self.g,
                grid_spec_provider=grid_spec,
                speed_cells_per_sec=speed,
                initial_cell=cfg["cell"],
                max_steps=settings.MAX_SEARCH_STEPS,
                arrival_tolerance=settings.ARRIVAL_TOLERANCE,
            )

        self.walkers: list[GridWalker] = []
        if config_path:
            self.grid, self.walkers = load_world_from_json(config_path, walker_factory=make_walker)
        if not self.walkers:
            self.walkers = [make_walker({"id": "walker", "cell": (2, 3)}, self.grid)]

        self.hud = arcade.Text(
            "L: mover | R: parar | P: ruta ON/OFF | B: bloque | C: limpiar | Q/ESC: salir",
            10, settings.HEIGHT - 24, arcade.color.WHITE, 14
        )

        self._mouse_cell: tuple[int, int] | None = None

    # ---------- loop ----------
    def on_draw(self) -> None:
        self.clear()
        self._draw_grid()
        self._draw_blocked()
        self._draw_cursor()
        self._draw_path_debug()
        self._draw_walkers()
        self.hud.draw()

    def on_update(self, dt: float) -> None:
        for w in self.walkers:
            w.update(dt)

    # ---------- input ----------
    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        cell = to_cell((x, y), self.g)
        self._mouse_cell = cell if self.grid.in_bounds(cell) else None

    def on_mouse_press(self, x, y, button, modifiers):
        cell = to_cell((x, y), self.g)
        if not self.walkers or not self.grid.in_bounds(cell):
            return
        walker = self.walkers[0]
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.log.info(f"cmd move_to cell={cell}")
            walker.move_to_cell(cell)
        elif button == arcade.MOUSE_BUTTON_RIGHT:
            self.log.info("cmd stop")
            walker.stop()

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.B and self._mouse_cell is not None:
            c = self._mouse_cell
            # evita bloquear justo donde hay un walker
            if any(c == w.current_cell() for w in self.walkers):
                return
            self.grid = self.grid.with_toggled(c)
            self.log.info(f"toggle_block cell={c} now_blocked={c in self.grid.blocked}")
        elif symbol == arcade.key.C:
            self.grid = GridSpec(self.grid.width_cells, self.grid.height_cells)
            self.log.info("clear_blocks")
        elif symbol == arcade.key.P:
            self.show_path = not self.show_path
            self.log.info(f"[visual] Path visualization {'ON' if self.show_path else 'OFF'}")
        elif symbol in (arcade.key.ESCAPE, arcade.key.Q):
            self.log.info("quit")
            self.close()

    # ---------- dibujo ----------
    def _draw_grid(self) -> None:
        color = arcade.color.DARK_SLATE_GRAY
        for x in range(0, self.settings.WIDTH + 1, self.g):
            arcade.draw_line(x, 0, x, self.settings.HEIGHT, color, 1)
        for y in range(0, self.settings.HEIGHT + 1, self.g):
            arcade.draw_line(0, y, self.settings.WIDTH, y, color, 1)

    def _draw_blocked(self) -> None:
        for (cx, cy) in self.grid.blocked:
            left, bottom = cx * self.g, cy * self.g
            arcade.draw_lrbt_rectangle_filled(left, left + self.g, bottom, bottom + self.g, arcade.color.BLACK)

    def _draw_cursor(self) -> None:
        if self._mouse_cell is None:
            return
        cx, cy = self._mouse_cell
        left, bottom = cx * self.g, cy * self.g
        arcade.draw_lrbt_rectangle_outline(left, left + self.g, bottom, bottom + self.g, arcade.color.WHITE, 2)

    def _draw_path_debug(self) -> None:
        if not self.show_path:
            return
        for w in self.walkers:
            for x, y in w.get_path_points():
                arcade.draw_circle_outline(x, y, self.g * 0.3, arcade.color.YELLOW, 2)

    def _draw_walkers(self) -> None:
        radius = (self.g - 4) / 2
        for w in self.walkers:
            x, y = w.world_position()
            arcade.draw_circle_filled(x, y, radius, arcade.color.RED)
