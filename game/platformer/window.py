"""
Arcade front end: the human frame driver and a read-only renderer.

The window samples the keyboard, calls `Game.update()` at a fixed 60 Hz and
draws the `FrameView` it gets back. Simulation coordinates have y growing
downward; Arcade's grow upward, so every draw call flips y.

Run:
    python -m game.platformer.window --save-dir ./save
"""

from __future__ import annotations

import argparse
import random
from typing import Optional

import arcade

from game.configs.platformer_config import WINDOW_CONFIG

from .audio import SoundManager
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, COLORS, SKIN_COLORS
from .simulation import Game
from .state import FrameView, InputState, Status
from .storage import SaveStore
from .utils import hex_to_rgb

HUD_C = (220, 220, 220)
BANNER_C = (251, 191, 36)

UPGRADE_KEYS = {
    arcade.key.F1: "maxHp",
    arcade.key.F2: "sharpSword",
    arcade.key.F3: "tripleJump",
    arcade.key.F4: "downStrike",
}

COSMETIC_KEYS = {
    arcade.key.F6: "skin",
    arcade.key.F7: "hat",
}


def _rgb(value: str, alpha: Optional[int] = None):
    r, g, b = hex_to_rgb(value)
    return (r, g, b) if alpha is None else (r, g, b, alpha)


def _fill(x: float, y: float, w: float, h: float, color, cam_x: float = 0.0, shake=(0.0, 0.0)):
    """Fill a y-down rectangle in world space"""
    left = x - cam_x + shake[0]
    top = CANVAS_HEIGHT - y + shake[1]
    arcade.draw_lrbt_rectangle_filled(left, left + w, top - h, top, color)


def draw_frame(view: FrameView, rng: Optional[random.Random] = None):
    """Draw one frame from a FrameView without touching the simulation"""
    state = view.state
    arcade.draw_lrbt_rectangle_filled(0, CANVAS_WIDTH, 0, CANVAS_HEIGHT, _rgb(view.background))

    if state.status in (Status.MENU, Status.SHOP):
        _draw_overlay(view)
        return

    rng = rng or random
    shake = (0.0, 0.0)
    if view.shake > 0:
        shake = ((rng.random() - 0.5) * view.shake, (rng.random() - 0.5) * view.shake)
    cam = view.camera_x

    for plat in view.platforms:
        if plat.x + plat.w < cam or plat.x > cam + CANVAS_WIDTH:
            continue
        body = COLORS["platform_moving"] if plat.moving else COLORS["platform"]
        _fill(plat.x, plat.y, plat.w, plat.h, _rgb(body), cam, shake)
        _fill(plat.x, plat.y, plat.w, 4, _rgb(COLORS["platform_top"]), cam, shake)

    door = view.door
    if door is not None:
        color = COLORS["door_locked"] if door.locked else COLORS["door_unlocked"]
        _fill(door.x, door.y, door.w, door.h, _rgb(color), cam, shake)

    for p in view.particles:
        alpha = int(255 * max(0.0, p.life / p.max_life))
        _fill(p.x, p.y, p.size, p.size, _rgb(p.color, alpha), cam, shake)

    for coin in view.coins:
        if coin.collected:
            continue
        arcade.draw_circle_filled(coin.x - cam + shake[0], CANVAS_HEIGHT - coin.y + shake[1],
                                  coin.w / 2, _rgb(COLORS["coin"]))

    for yc in view.yellow_coins:
        arcade.draw_circle_filled(yc.x - cam + shake[0], CANVAS_HEIGHT - yc.y + shake[1],
                                  yc.w / 2, _rgb(COLORS["yellow_coin"]))

    for enemy in view.enemies:
        if enemy.dead:
            continue
        _fill(enemy.x, enemy.y, enemy.w, enemy.h, _rgb(enemy.color), cam, shake)
        _draw_bar(enemy.x, enemy.y - 10, enemy.w, enemy.hp / enemy.max_hp, COLORS["hp_bar_enemy"], cam, shake)

    _draw_player(view, cam, shake)
    _draw_hud(view)


def _draw_bar(x, y, w, ratio, fill, cam, shake):
    _fill(x, y, w, 6, _rgb(COLORS["hp_bar_bg"]), cam, shake)
    if ratio > 0:
        _fill(x, y, w * min(1.0, ratio), 6, _rgb(fill), cam, shake)


def _draw_player(view: FrameView, cam: float, shake):
    p = view.player
    skin = view.state.cosmetics.current_skin
    _fill(p.x, p.y, p.w, p.h, _rgb(SKIN_COLORS.get(skin, COLORS["player"])), cam, shake)
    # Eyes look along facing
    eye_x = p.x + (18 if p.facing == 1 else 6)
    _fill(eye_x, p.y + 8, 8, 8, (255, 255, 255), cam, shake)

    hat = view.state.cosmetics.current_hat
    if hat == "tophat":
        _fill(p.x + 6, p.y - 14, 20, 14, (17, 24, 39), cam, shake)
    elif hat in ("crown", "halo"):
        _fill(p.x + 4, p.y - 8, 24, 4, _rgb(COLORS["yellow_coin"]), cam, shake)

    if p.attack_timer > 0:
        reach = 50
        sx = p.x + p.w if p.facing == 1 else p.x - reach
        _fill(sx, p.y + p.h / 2 - 3, reach, 6, _rgb(COLORS["sword"]), cam, shake)

    _draw_bar(p.x, p.y - 12, p.w, max(0, p.hp) / p.max_hp, COLORS["hp_bar_player"], cam, shake)


def _draw_hud(view: FrameView):
    s = view.state
    txt = (f"Level {s.level}  Coins {s.coins_collected}/{s.total_coins}  "
           f"Lives {s.lives}  Gold {s.gold}")
    arcade.draw_text(txt, 12, CANVAS_HEIGHT - 28, HUD_C, 14)

    if s.status == Status.PAUSED:
        arcade.draw_text("PAUSED  (Esc resume, Backspace menu)", CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2,
                         HUD_C, 24, anchor_x="center")
    elif s.status == Status.GAMEOVER:
        arcade.draw_text("GAME OVER", CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2,
                         (239, 68, 68), 48, anchor_x="center")

    if view.victory_text:
        arcade.draw_text(view.victory_text, CANVAS_WIDTH / 2, CANVAS_HEIGHT * 2 / 3,
                         BANNER_C, 64, anchor_x="center")
    if view.banner:
        arcade.draw_text(view.banner, CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2 + 60,
                         BANNER_C, 32, anchor_x="center")


def _draw_overlay(view: FrameView):
    s = view.state
    cx = CANVAS_WIDTH / 2
    if s.status == Status.MENU:
        arcade.draw_text("ADVENTURE IN THE VOID", cx, CANVAS_HEIGHT * 0.65, (192, 132, 252), 44, anchor_x="center")
        arcade.draw_text("Enter: play   Tab: shop", cx, CANVAS_HEIGHT * 0.45, HUD_C, 20, anchor_x="center")
    else:
        u = s.upgrades
        lines = [
            "THE VOID SHOP  (Backspace: back)",
            f"F1 Extra HP (10){' - owned' if u.max_hp else ''}",
            f"F2 Sharp Sword (20){' - owned' if u.sharp_sword else ''}",
            f"F3 Triple Jump (30){' - owned' if u.triple_jump else ''}",
            f"F4 Down Strike (40){' - owned' if u.down_strike else ''}",
            "F5 Extra Life (10)",
            f"F6 Skin: {s.cosmetics.current_skin}   F7 Hat: {s.cosmetics.current_hat}",
            "Shift+F6 / Shift+F7: buy next skin / hat",
        ]
        for i, line in enumerate(lines):
            arcade.draw_text(line, cx, CANVAS_HEIGHT * 0.75 - i * 36, HUD_C, 18, anchor_x="center")
    arcade.draw_text(f"Gold: {s.gold}   Lives: {s.lives}", cx, 60, BANNER_C, 20, anchor_x="center")
    if view.banner:
        arcade.draw_text(view.banner, cx, CANVAS_HEIGHT / 2, BANNER_C, 28, anchor_x="center")


class PlatformerWindow(arcade.Window):
    """Arcade window driving and drawing a Game"""

    def __init__(self, game: Game, human_input: bool = True,
                 title: str = WINDOW_CONFIG["title"],
                 update_rate: float = WINDOW_CONFIG["update_rate"]):
        super().__init__(CANVAS_WIDTH, CANVAS_HEIGHT, title, update_rate=update_rate)
        self.game = game
        self.human_input = human_input
        self.inputs = InputState()

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.human_input:
            self.game.update(self.inputs)

    def on_draw(self):
        self.clear()
        draw_frame(self.game.view())

    # ----------------------------
    # Input
    # ----------------------------

    def _set_key(self, key: int, held: bool):
        if key == arcade.key.LEFT:
            self.inputs.left = held
        elif key == arcade.key.RIGHT:
            self.inputs.right = held
        elif key == arcade.key.DOWN:
            self.inputs.down = held
        elif key in (arcade.key.SPACE, arcade.key.UP):
            self.inputs.up = held
        elif key in (arcade.key.Z, arcade.key.P):
            self.inputs.attack = held

    def on_key_press(self, key, modifiers):
        if not self.human_input:
            return
        self.game.sound.init()
        self._set_key(key, True)

        game = self.game
        if key == arcade.key.ESCAPE:
            game.toggle_pause()
        elif key in (arcade.key.ENTER, arcade.key.RETURN):
            if game.status == Status.PAUSED:
                game.toggle_pause()
            else:
                game.start_game()
        elif key == arcade.key.TAB:
            game.open_shop()
        elif key == arcade.key.BACKSPACE:
            game.retreat()
        elif key in UPGRADE_KEYS and game.status == Status.SHOP:
            game.buy_upgrade(UPGRADE_KEYS[key])
        elif key == arcade.key.F5 and game.status == Status.SHOP:
            game.buy_life()
        elif key in COSMETIC_KEYS and game.status == Status.SHOP:
            kind = COSMETIC_KEYS[key]
            if modifiers & arcade.key.MOD_SHIFT:
                game.buy_next_cosmetic(kind)
            else:
                game.cycle_cosmetic(kind)
        elif key == arcade.key.F9:
            game.toggle_mute()

    def on_key_release(self, key, modifiers):
        if self.human_input:
            self._set_key(key, False)

    def on_text(self, text: str):
        if self.human_input:
            for char in text:
                self.game.type_char(char)


def main():
    parser = argparse.ArgumentParser(description="Play Adventure in the Void")
    parser.add_argument("--save-dir", type=str, default=WINDOW_CONFIG["save_dir"],
                        help=f"Directory for save files (default: {WINDOW_CONFIG['save_dir']})")
    parser.add_argument("--seed", type=int, default=None, help="Seed for level generation")
    parser.add_argument("--muted", action="store_true", help="Start with sound off")
    parser.add_argument("--verbose", type=int, default=0, help="Diagnostic output level")
    args = parser.parse_args()

    game = Game(
        store=SaveStore(args.save_dir, verbose=args.verbose),
        sound=SoundManager(muted=args.muted, verbose=args.verbose),
        seed=args.seed,
        verbose=args.verbose,
    )
    PlatformerWindow(game)
    arcade.run()


if __name__ == "__main__":
    main()
