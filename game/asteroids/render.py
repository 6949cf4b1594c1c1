"""
Arcade window that draws the engine's render directives and HUD,
plus a keyboard-driven play loop.

Run:
    python -m game.asteroids.render
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import arcade

from .engine import GameStateMachine
from .events import GameSnapshot, Intent, RenderDirective, TickResult


def _rotate(points: List[Tuple[float, float]], angle: float) -> List[Tuple[float, float]]:
    c, s = math.cos(angle), math.sin(angle)
    return [(px * c - py * s, px * s + py * c) for px, py in points]


class AsteroidsWindow(arcade.Window):
    """Draws whatever the last TickResult describes"""

    def __init__(self, width: int, height: int, title: str = "Asteroids"):
        super().__init__(width, height, title)
        self.result: Optional[TickResult] = None

        # Colors
        self.BG = arcade.color.BLACK
        self.LINE_C = (255, 255, 255)
        self.FLAME_C = (255, 165, 0)
        self.GLOW_C = (100, 200, 255, 128)
        self.OVERLAY_C = (0, 0, 0, 190)

    def show(self, result: Optional[TickResult]):
        self.result = result

    # Engine space has y pointing down, arcade has it pointing up
    def _sy(self, y: float) -> float:
        return self.height - y

    def _poly(self, x: float, y: float, points: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        return [(x + px, self._sy(y + py)) for px, py in points]

    def on_draw(self):
        self.clear()
        arcade.set_background_color(self.BG)
        if self.result is None:
            return

        for d in self.result.directives:
            self.draw_directive(d)
        self.draw_hud(self.result.snapshot)

    def draw_directive(self, d: RenderDirective):
        if d.kind == "ship":
            r = d.radius
            hull = _rotate([(r, 0), (-r, -r / 2), (-r / 2, 0), (-r, r / 2)], d.angle)
            arcade.draw_polygon_outline(self._poly(d.x, d.y, hull), self.LINE_C, 2)
            if d.params.get("thrusting"):
                (x1, y1), (x2, y2) = _rotate([(-r, 0), (-r - 8, 0)], d.angle)
                arcade.draw_line(d.x + x1, self._sy(d.y + y1), d.x + x2, self._sy(d.y + y2), self.FLAME_C, 2)

        elif d.kind == "asteroid":
            offsets = d.params["offsets"]
            n = len(offsets)
            outline = [
                (d.radius * o * math.cos(i * 2 * math.pi / n), d.radius * o * math.sin(i * 2 * math.pi / n))
                for i, o in enumerate(offsets)
            ]
            arcade.draw_polygon_outline(self._poly(d.x, d.y, outline), self.LINE_C, 2)

        elif d.kind in ("projectile", "alien_projectile"):
            arcade.draw_circle_filled(d.x, self._sy(d.y), d.radius, self.LINE_C)

        elif d.kind == "alien":
            r = d.radius
            cy = self._sy(d.y)
            arcade.draw_ellipse_outline(d.x, cy, r * 3.0, r * 0.8, self.LINE_C, 2)
            arcade.draw_ellipse_outline(d.x, cy + r * 0.3, r * 1.0, r * 0.6, self.LINE_C, 2)
            arcade.draw_ellipse_filled(d.x, cy - r * 0.4, r * 1.6, r * 0.4, self.GLOW_C)

        elif d.kind == "fragment":
            half = d.params["length"] / 2
            dx, dy = math.cos(d.angle) * half, math.sin(d.angle) * half
            color = (*d.params["color"], int(255 * d.params["alpha"]))
            arcade.draw_line(d.x + dx, self._sy(d.y + dy), d.x - dx, self._sy(d.y - dy), color, 2)

        elif d.kind == "particle":
            color = (*d.params["color"], int(255 * d.params["alpha"]))
            arcade.draw_circle_filled(d.x, self._sy(d.y), d.radius, color)

    def draw_hud(self, snap: GameSnapshot):
        arcade.draw_text(f"{snap.score}", 20, self.height - 30, self.LINE_C, 20)
        arcade.draw_text(f"Level {snap.level}", self.width / 2, self.height - 30,
                         self.LINE_C, 16, anchor_x="center")

        # Lives as small ships pointing up
        size = 15
        for i in range(snap.lives):
            x = self.width - 130 + i * 25
            icon = _rotate([(size / 2, 0), (-size / 2, -size / 4), (-size / 4, 0), (-size / 2, size / 4)],
                           -math.pi / 2)
            arcade.draw_polygon_outline(self._poly(x, 25, icon), self.LINE_C, 1.5)

        if snap.game_over:
            self._overlay("GAME OVER", f"Final Score: {snap.final_score}")
        elif snap.level_complete:
            self._overlay(f"LEVEL {snap.level} COMPLETE", f"Prepare for Level {snap.level + 1}")

    def _overlay(self, title: str, subtitle: str):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.OVERLAY_C)
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy + 20, self.LINE_C, 36, anchor_x="center")
        arcade.draw_text(subtitle, cx, cy - 30, self.LINE_C, 24, anchor_x="center")


class PlayWindow(AsteroidsWindow):
    """Keyboard play: A/D or arrows rotate, W or up thrusts, Space fires, Enter restarts"""

    def __init__(self, engine: GameStateMachine):
        super().__init__(engine.width, engine.height, "Asteroids")
        self.engine = engine
        self.keys = set()
        self.set_update_rate(1 / engine.tick_rate)

    def on_key_press(self, symbol: int, modifiers: int):
        self.keys.add(symbol)
        if symbol == arcade.key.ENTER and self.engine.game_over:
            self.show(self.engine.reset())

    def on_key_release(self, symbol: int, modifiers: int):
        self.keys.discard(symbol)

    def _held(self, *symbols: int) -> bool:
        return any(s in self.keys for s in symbols)

    def on_update(self, delta_time: float):
        intent = Intent(
            rotate_left=self._held(arcade.key.A, arcade.key.LEFT),
            rotate_right=self._held(arcade.key.D, arcade.key.RIGHT),
            thrust=self._held(arcade.key.W, arcade.key.UP),
            fire=self._held(arcade.key.SPACE),
        )
        self.show(self.engine.tick(intent))

    def on_close(self):
        self.engine.close()
        super().on_close()


def play(**engine_kwargs):
    """Open a window and play with the keyboard"""
    engine = GameStateMachine(**engine_kwargs)
    window = PlayWindow(engine)
    window.show(engine.start())
    arcade.run()


if __name__ == "__main__":
    play(verbose=1)
