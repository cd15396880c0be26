"""
Game - the simulation core of the platformer
--------------------------------------------
- Owns every mutable entity collection and the persistent progress record
- `update()` is one fixed frame: deferred events, death check, effects,
  moving platforms, player control, physics, loot, AI, combat, coins/door
- The status machine (menu/playing/shop/paused/gameover/transition/
  secret_boss) decides whether a frame simulates anything
- Presentation reads `state` / `view()` and calls the action methods; it
  never touches entities directly

Time is passed in milliseconds. Physics uses fixed per-frame steps, so the
game speed follows the frame rate of whatever drives `update()`.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from .ai import update_enemy
from .audio import SoundManager
from .cheats import CHEAT_GOLD, CHEAT_SECRET, CHEAT_SKIP, CheatBuffer
from .combat import apply_contact_damage, attack_damage, pogo_rect, resolve_hit, spawn_loot, sword_rect
from .constants import (
    ATTACK_DURATION, BANNER_MS, CANVAS_HEIGHT, CANVAS_WIDTH, COLORS, DOUBLE_JUMP_FORCE, FRICTION,
    GAMEOVER_DELAY_MS, INVULNERABLE_CONTROL, JUMP_FORCE, MAX_JUMPS, MAX_SPEED, MOVE_SPEED,
    PICKUP_RADIUS, PLAYER_MAX_HP, SECRET_LEVEL, SECRET_VICTORY_DELAY_MS, START_LIVES,
    TRANSITION_DELAY_MS,
)
from .effects import Effects
from .entities import Coin, Door, Enemy, Platform, Player, YellowCoin
from .level_gen import LevelLayout, PLAYER_SPAWN, build_secret_arena, generate_level, roll_biome
from .physics import apply_gravity_and_collision, move_platforms, step_loot
from .scheduler import EventQueue
from .shop import buy_life, buy_upgrade, cosmetic_action, cycle_owned, next_for_sale
from .state import RUNNING, FrameView, GameState, InputState, Status
from .storage import SaveStore
from .utils import center_of, clamp, make_rng, rect_of, rects_overlap, vec_len

EVENT_KEYS = ("coin", "gold", "kill", "damage", "level_clear", "life_lost")


def _perf_ms() -> float:
    return time.perf_counter() * 1000.0


class Game:
    """Single-player platformer simulation"""

    def __init__(
        self,
        store: Optional[SaveStore] = None,
        sound: Optional[SoundManager] = None,
        clock: Optional[Callable[[], float]] = None,
        seed: Optional[int] = None,
        verbose: int = 0,
    ):
        self.store = store if store is not None else SaveStore()
        self.sound = sound if sound is not None else SoundManager()
        self.clock = clock or _perf_ms
        self.verbose = verbose

        self.rng = make_rng(seed)
        self.effects = Effects(self.rng)
        self.events = EventQueue()
        self.cheats = CheatBuffer()

        # Persistent progress
        self.progress = self.store.load()
        self.secret_unlocked = self.store.load_secret_unlocked()

        # Status projection counters
        self.status = Status.MENU
        self.level = 1
        self.coins_collected = 0
        self.epoch = 0  # bumped on every level/arena build

        # World state
        self.player = Player(*PLAYER_SPAWN)
        self.platforms: List[Platform] = []
        self.coins: List[Coin] = []
        self.enemies: List[Enemy] = []
        self.yellow_coins: List[YellowCoin] = []
        self.door: Optional[Door] = None
        self.arena = False

        # Presentation-facing extras
        self.background = COLORS["background"]
        self.victory_text: Optional[str] = None
        self.banner: Optional[str] = None
        self._banner_until = 0.0

        # Edge detection
        self._prev_up = False
        self._prev_attack = False

        self.frame = 0
        self.frame_events: Dict[str, float] = dict.fromkeys(EVENT_KEYS, 0.0)

    # ----------------------------
    # Projections
    # ----------------------------

    @property
    def gold(self) -> int:
        return self.progress.gold

    @property
    def lives(self) -> int:
        return self.progress.lives

    @property
    def upgrades(self):
        return self.progress.upgrades

    @property
    def max_jumps(self) -> int:
        return MAX_JUMPS + 1 if self.upgrades.triple_jump else MAX_JUMPS

    @property
    def player_max_hp(self) -> int:
        return PLAYER_MAX_HP + 1 if self.upgrades.max_hp else PLAYER_MAX_HP

    @property
    def muted(self) -> bool:
        return self.sound.muted

    @property
    def state(self) -> GameState:
        return GameState(
            level=self.level,
            coins_collected=self.coins_collected,
            total_coins=len(self.coins),
            status=self.status,
            lives=self.progress.lives,
            gold=self.progress.gold,
            upgrades=replace(self.progress.upgrades),
            cosmetics=self.progress.cosmetics.copy(),
            muted=self.sound.muted,
            secret_unlocked=self.secret_unlocked,
        )

    def view(self, now: Optional[float] = None) -> FrameView:
        """Read-only picture of the world for the renderer"""
        now = self.clock() if now is None else now
        camera_x = 0.0 if self.arena else max(0.0, self.player.x - CANVAS_WIDTH / 2)
        return FrameView(
            state=self.state,
            player=replace(self.player),
            platforms=tuple(replace(p) for p in self.platforms),
            coins=tuple(replace(c) for c in self.coins),
            yellow_coins=tuple(replace(c) for c in self.yellow_coins),
            enemies=tuple(replace(e) for e in self.enemies),
            particles=tuple(replace(p) for p in self.effects.particles),
            door=replace(self.door) if self.door is not None else None,
            camera_x=camera_x,
            shake=self.effects.shake_intensity,
            background=self.background,
            banner=self.banner if now < self._banner_until else None,
            victory_text=self.victory_text,
            arena=self.arena,
        )

    def save(self) -> bool:
        return self.store.save(self.progress)

    def _flash(self, text: str, now: float):
        self.banner = text
        self._banner_until = now + BANNER_MS

    # ----------------------------
    # Level construction
    # ----------------------------

    def _install(self, layout: LevelLayout, restore_hp: bool):
        self.epoch += 1
        self.victory_text = None
        self.platforms = layout.platforms
        self.coins = layout.coins
        self.enemies = layout.enemies
        self.door = layout.door
        self.arena = layout.arena
        self.yellow_coins = []
        self.effects.clear()
        self.coins_collected = 0

        max_hp = self.player_max_hp
        hp = max_hp if restore_hp else self.player.hp
        x, y = layout.player_spawn
        self.player = Player(x, y, hp=hp, max_hp=max_hp)

    def load_level(self, level: int, restore_hp: bool = False):
        """Build `level` and start playing it; HP carries over unless restored"""
        self.level = level
        self.background = roll_biome(level, self.background, self.rng)
        self._install(generate_level(level, self.rng), restore_hp)
        self.status = Status.PLAYING
        if self.verbose > 0:
            print(f"[Game] Level {level}: {len(self.platforms)} platforms, "
                  f"{len(self.coins)} coins, {len(self.enemies)} enemies")

    def start_secret_boss_fight(self):
        self.level = SECRET_LEVEL
        self._install(build_secret_arena(), restore_hp=True)
        self.status = Status.SECRET_BOSS
        if self.verbose > 0:
            print("[Game] Secret boss fight started")

    # ----------------------------
    # Status actions
    # ----------------------------

    def start_game(self) -> bool:
        if self.status != Status.MENU:
            return False
        if self.progress.lives <= 0:
            self.progress.lives = START_LIVES
        self.load_level(1, restore_hp=True)
        return True

    def open_shop(self) -> bool:
        if self.status != Status.MENU:
            return False
        self.status = Status.SHOP
        return True

    def retreat(self) -> bool:
        """Back to the menu from the shop or a paused run; keeps gold"""
        if self.status not in (Status.SHOP, Status.PAUSED):
            return False
        self.status = Status.MENU
        self.save()
        return True

    def toggle_pause(self) -> bool:
        if self.status in RUNNING:
            self.status = Status.PAUSED
            return True
        if self.status == Status.PAUSED:
            rat = any(e.is_rat for e in self.enemies)
            self.status = Status.SECRET_BOSS if rat else Status.PLAYING
            return True
        return False

    def toggle_mute(self) -> bool:
        self.sound.muted = not self.sound.muted
        return self.sound.muted

    # ----------------------------
    # Shop actions
    # ----------------------------

    def buy_upgrade(self, key: str) -> bool:
        if not buy_upgrade(self.progress, key):
            return False
        if key == "maxHp":
            self.player.max_hp += 1
            self.player.hp += 1
        self.sound.play_coin()
        self.save()
        return True

    def buy_life(self) -> bool:
        if not buy_life(self.progress):
            return False
        self.sound.play_coin()
        self.save()
        return True

    def cosmetic_action(self, kind: str, item_id: str) -> bool:
        if not cosmetic_action(self.progress, kind, item_id, self.secret_unlocked):
            return False
        self.sound.play_coin()
        self.save()
        return True

    def cycle_cosmetic(self, kind: str) -> str:
        """Equip the next owned skin/hat"""
        item = cycle_owned(self.progress, kind)
        self.save()
        return item

    def buy_next_cosmetic(self, kind: str) -> bool:
        item = next_for_sale(self.progress, kind, self.secret_unlocked)
        if item is None:
            return False
        return self.cosmetic_action(kind, item)

    # ----------------------------
    # Cheat channel
    # ----------------------------

    def type_char(self, char: str, now: Optional[float] = None) -> Optional[str]:
        code = self.cheats.feed(char)
        if code is None:
            return None
        now = self.clock() if now is None else now
        self.sound.play_coin()

        if code == CHEAT_GOLD:
            self.progress.gold += 100
            self.save()
            self._flash("CHEAT ACTIVATED: +100 GOLD!", now)
        elif code == CHEAT_SKIP:
            self._flash("CHEAT: LEVEL SKIP!", now)
            self.load_level(self.level + 1, restore_hp=self.player.hp <= 0)
        elif code == CHEAT_SECRET:
            self._flash("CHEAT: SECRET BOSS!", now)
            self.start_secret_boss_fight()
        return code

    # ----------------------------
    # Frame
    # ----------------------------

    def update(self, inputs: Optional[InputState] = None, now: Optional[float] = None):
        """Advance one frame"""
        inputs = inputs or InputState()
        now = self.clock() if now is None else now
        self.frame_events = dict.fromkeys(EVENT_KEYS, 0.0)

        if self.status != Status.PAUSED:
            self.events.drain(now)

        if self.status in RUNNING:
            self._simulate(inputs, now)
            self.frame += 1

        self._prev_up = inputs.up
        self._prev_attack = inputs.attack

    def _simulate(self, inputs: InputState, now: float):
        player = self.player

        if player.hp <= 0 or player.y > CANVAS_HEIGHT:
            self._on_death(now)
            return

        invulnerable = now < player.invulnerable_until

        self.effects.update()
        deltas = move_platforms(self.platforms, now)

        self._control(inputs, invulnerable)

        if player.grounded and player.platform_id in deltas:
            dx, dy = deltas[player.platform_id]
            player.x += dx
            player.y += dy

        if inputs.attack and not self._prev_attack:
            player.attack_timer = ATTACK_DURATION
            self.sound.play_attack()
        if player.attack_timer > 0:
            player.attack_timer -= 1

        apply_gravity_and_collision(player, self.platforms)
        self._bound_player()

        self._update_loot()
        self._update_enemies(inputs, now)
        self._update_coins_and_door(now)

    def _control(self, inputs: InputState, invulnerable: bool):
        player = self.player
        factor = INVULNERABLE_CONTROL if invulnerable else 1.0
        if inputs.left:
            player.vx -= MOVE_SPEED * factor
            player.facing = -1
        if inputs.right:
            player.vx += MOVE_SPEED * factor
            player.facing = 1
        player.vx = clamp(player.vx * FRICTION, -MAX_SPEED, MAX_SPEED)

        if player.land_timer > 0:
            player.land_timer -= 1

        if inputs.up and not self._prev_up:
            self.jump()

    def jump(self) -> bool:
        """Ground jump, or an air jump while jumps remain"""
        player = self.player
        if player.grounded:
            player.vy = JUMP_FORCE
            player.grounded = False
            player.jump_count = 1
        elif player.jump_count < self.max_jumps:
            player.vy = DOUBLE_JUMP_FORCE
            player.jump_count += 1
        else:
            return False
        player.platform_id = None
        self.sound.play_jump()
        self.effects.dust(player.x + player.w / 2, player.y + player.h)
        return True

    def _bound_player(self):
        player = self.player
        if player.x < 0:
            player.x = 0.0
            player.vx = 0.0
        if self.arena and player.x > CANVAS_WIDTH - player.w:
            player.x = CANVAS_WIDTH - player.w
            player.vx = 0.0

    def _update_loot(self):
        px, py = center_of(self.player)
        kept = []
        for yc in self.yellow_coins:
            step_loot(yc, self.platforms)
            cx, cy = center_of(yc)
            if vec_len(px - cx, py - cy) < PICKUP_RADIUS:
                yc.collected = True
                self.progress.gold += 1
                self.frame_events["gold"] += 1
                self.save()
                self.sound.play_coin()
                self.effects.sparkles(yc.x, yc.y)
                continue
            yc.lifetime -= 1
            if yc.lifetime > 0:
                kept.append(yc)
        self.yellow_coins = kept

    def _update_enemies(self, inputs: InputState, now: float):
        player = self.player
        upgrades = self.progress.upgrades
        damage = attack_damage(upgrades.sharp_sword)
        pogo = pogo_rect(player, upgrades.down_strike, inputs.down, inputs.attack)
        sword = sword_rect(player)

        for enemy in self.enemies:
            if enemy.dead:
                continue
            update_enemy(enemy, player, self.platforms, now, self.rng)

            if resolve_hit(player, enemy, pogo, sword, damage):
                self.sound.play_attack()
                if enemy.dead:
                    self._on_enemy_killed(enemy, now)

            if apply_contact_damage(player, enemy, now):
                self.frame_events["damage"] += 1
                self.sound.play_damage()
                self.effects.shake(3, 10)

    def _on_enemy_killed(self, enemy: Enemy, now: float):
        self.frame_events["kill"] += 1
        self.sound.play_enemy_death()
        cx, cy = center_of(enemy)
        self.effects.explosion(cx, cy, enemy.color)
        self.yellow_coins.extend(spawn_loot(enemy, self.rng))

        if enemy.is_rat:
            self.effects.shake(10, 20)
            self.victory_text = "CAÇA RATO!"
            self.secret_unlocked = True
            self.store.save_secret_unlocked(True)
            self._flash("NEW SKIN UNLOCKED IN SHOP!", now)
            epoch = self.epoch
            self.events.schedule(
                now, SECRET_VICTORY_DELAY_MS, self._return_to_menu,
                guard=lambda: self.status == Status.SECRET_BOSS and self.epoch == epoch,
            )
        elif enemy.kind == "boss":
            self.effects.shake(5, 10)

    def _return_to_menu(self):
        self.status = Status.MENU
        self.save()

    def _update_coins_and_door(self, now: float):
        player = self.player
        px, py = center_of(player)
        for coin in self.coins:
            if coin.collected:
                continue
            if vec_len(px - coin.x, py - coin.y) < PICKUP_RADIUS:
                coin.collected = True
                self.coins_collected += 1
                self.frame_events["coin"] += 1
                self.sound.play_coin()
                self.effects.sparkles(coin.x, coin.y)

        if self.coins_collected < len(self.coins):
            return

        # All mandatory coins: unlock (never re-locks) and the boss falls
        for enemy in self.enemies:
            if enemy.kind == "boss" and not enemy.dead:
                enemy.dead = True
        door = self.door
        if door is None:
            return
        door.locked = False
        if self.status == Status.PLAYING and rects_overlap(rect_of(player), rect_of(door)):
            self._begin_transition(now)

    def _begin_transition(self, now: float):
        self.status = Status.TRANSITION
        self.frame_events["level_clear"] += 1
        next_level = self.level + 1
        epoch = self.epoch
        self.events.schedule(
            now, TRANSITION_DELAY_MS, lambda: self.load_level(next_level),
            guard=lambda: self.status == Status.TRANSITION and self.epoch == epoch,
        )

    def _on_death(self, now: float):
        self.progress.lives -= 1
        self.frame_events["life_lost"] += 1
        self.sound.play_damage()

        if self.progress.lives > 0:
            self.save()
            if self.status == Status.SECRET_BOSS:
                self.start_secret_boss_fight()
            else:
                self.load_level(self.level, restore_hp=True)
            return

        self.progress.lives = 0
        self.status = Status.GAMEOVER
        self.save()
        if self.verbose > 0:
            print(f"[Game] Game over on level {self.level}")
        self.events.schedule(
            now, GAMEOVER_DELAY_MS, self._gameover_to_shop,
            guard=lambda: self.status == Status.GAMEOVER,
        )

    def _gameover_to_shop(self):
        self.status = Status.SHOP
        self.progress.lives = START_LIVES
        self.save()
