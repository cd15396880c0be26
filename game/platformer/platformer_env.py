"""
PlatformerEnv - Gymnasium wrapper around the platformer simulation
------------------------------------------------------------------
- Drives `Game` at a fixed simulated 60 Hz clock (one step = one frame)
- MultiDiscrete action space: [move(3), jump(2), attack(2), down(2)]
- Vector observation: player state + top-K nearest enemies + top-M nearest
  coins + door
- Reward built from the frame's gameplay events (coins, loot, kills, damage,
  level clears, lives lost)

Quick test:
    python -m game.platformer.platformer_env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from game.configs.platformer_config import ENV_CONFIG, REWARD_CONFIG

from .audio import SoundManager
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, MAX_JUMPS, MAX_SPEED
from .simulation import Game
from .state import InputState, Status
from .storage import SaveStore
from .utils import center_of, clamp


class PlatformerEnv(gym.Env):
    """Side-scrolling platformer environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        fps: int = ENV_CONFIG["fps"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        m_coins: int = ENV_CONFIG["m_coins"],
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.fps = fps
        self.frame_ms = 1000.0 / fps
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_coins = m_coins
        self.reward_config = dict(REWARD_CONFIG, **(reward_config or {}))

        # move: 0 none, 1 left, 2 right; jump / attack / down: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2, 2, 2])

        # Player: pos(2) vel(2) hp(1) grounded(1) jumps(1) facing(1) attack(1)
        # Each enemy: rel pos(2) hp fraction(1)
        # Each coin: rel pos(2)
        # Door: rel pos(2) locked(1)
        obs_dim = 9 + (self.k_enemies * 3) + (self.m_coins * 2) + 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.game: Game = None  # type: ignore
        self._now = 0.0
        self._step_count = 0
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._now = 0.0
        self._step_count = 0
        self.game = Game(
            store=SaveStore(),
            sound=SoundManager(muted=True),
            clock=lambda: self._now,
            seed=seed,
        )
        self.game.start_game()

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, jump, attack, down = (int(a) for a in action)
        inputs = InputState(
            left=move == 1,
            right=move == 2,
            up=bool(jump),
            down=bool(down),
            attack=bool(attack),
        )

        self._now += self.frame_ms
        self.game.update(inputs, now=self._now)

        reward = self._compute_reward()
        terminated = self.game.status == Status.GAMEOVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        game = self.game
        p = game.player
        px, py = center_of(p)
        camera_x = 0.0 if game.arena else max(0.0, p.x - CANVAS_WIDTH / 2)

        obs_parts = [
            clamp((px - camera_x) / CANVAS_WIDTH * 2 - 1, -1, 1),
            clamp(py / CANVAS_HEIGHT * 2 - 1, -1, 1),
            clamp(p.vx / MAX_SPEED, -1, 1),
            clamp(p.vy / 20.0, -1, 1),
            clamp(p.hp / max(1, p.max_hp), 0, 1) * 2 - 1,
            1.0 if p.grounded else -1.0,
            clamp(p.jump_count / (MAX_JUMPS + 1), 0, 1) * 2 - 1,
            float(p.facing),
            1.0 if p.attack_timer > 0 else -1.0,
        ]

        def rel(x: float, y: float):
            return [clamp((x - px) / CANVAS_WIDTH, -1, 1), clamp((y - py) / CANVAS_HEIGHT, -1, 1)]

        # Enemies: top-K nearest live
        enemies = sorted(
            (e for e in game.enemies if not e.dead),
            key=lambda e: (center_of(e)[0] - px) ** 2 + (center_of(e)[1] - py) ** 2,
        )
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                obs_parts += rel(*center_of(e)) + [e.hp / max(1, e.max_hp)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Coins: top-M nearest uncollected
        coins = sorted(
            (c for c in game.coins if not c.collected),
            key=lambda c: (c.x - px) ** 2 + (c.y - py) ** 2,
        )
        for i in range(self.m_coins):
            if i < len(coins):
                obs_parts += rel(coins[i].x, coins[i].y)
            else:
                obs_parts += [0.0, 0.0]

        door = game.door
        if door is not None:
            obs_parts += rel(*center_of(door)) + [1.0 if door.locked else -1.0]
        else:
            obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        cfg = self.reward_config
        ev = self.game.frame_events

        reward = 0.0
        reward += cfg["R_COIN"] * ev["coin"]
        reward += cfg["R_GOLD"] * ev["gold"]
        reward += cfg["R_KILL"] * ev["kill"]
        reward += cfg["R_LEVEL"] * ev["level_clear"]
        reward -= cfg["R_DAMAGE"] * ev["damage"]
        reward -= cfg["R_LIFE"] * ev["life_lost"]
        reward -= cfg["R_TIME"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        game = self.game
        return {
            "level": game.level,
            "lives": game.lives,
            "gold": game.gold,
            "hp": game.player.hp,
            "status": game.status.value,
            "coins": game.coins_collected,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import PlatformerWindow
            self._window = PlatformerWindow(self.game, human_input=False)

        self._window.game = self.game
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random-agent episode; returns the episode return"""
    env = PlatformerEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} "
          f"(level {info['level']}, lives {info['lives']}, gold {info['gold']})")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
