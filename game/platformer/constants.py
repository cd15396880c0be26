"""
Gameplay constants: physics, combat, loot, prices, colors and entity sizes.

All physics values are per-frame quantities at ~60 FPS (no delta-time scaling).
"""

CANVAS_WIDTH = 1024
CANVAS_HEIGHT = 600

# Movement
GRAVITY = 0.6
FRICTION = 0.85
MOVE_SPEED = 1.0
MAX_SPEED = 7.0
JUMP_FORCE = -14.0
DOUBLE_JUMP_FORCE = -12.0
MAX_JUMPS = 2
ATTACK_DURATION = 18  # frames
MOVING_PLATFORM_RANGE = 100.0
MOVING_PLATFORM_SPEED = 2.5  # rad/s
LANDING_TOLERANCE = 10.0
LAND_ANIM_FRAMES = 10
INVULNERABLE_CONTROL = 0.3

# Combat
PLAYER_MAX_HP = 5
ENEMY_HP = 2
BOSS_HP = 20
RAT_BOSS_HP = 40
INVULNERABILITY_MS = 1000
KNOCKBACK_FORCE_X = 10.0
KNOCKBACK_FORCE_Y = -8.0
SWORD_KNOCKBACK = 20.0
POGO_BOUNCE_FORCE = -15.0
POGO_DEPTH = 40.0

# Loot
YELLOW_COIN_BOUNCE = 0.6
YELLOW_COIN_GRAVITY = 0.4
YELLOW_COIN_LIFETIME = 600  # ~10s at 60fps
RAT_COIN_LIFETIME = 1000
PICKUP_RADIUS = 30.0
NORMAL_LOOT = 1
BOSS_LOOT = 5
RAT_LOOT = 50

# Enemy speeds
SPEED_PATROLLER = 2.0
SPEED_CHASER = 0.9
SPEED_BOSS = 3.5
SPEED_RAT = 5.5
BOSS_ACCEL = 0.2
VERTICAL_AMPLITUDE = 120.0
VERTICAL_FREQUENCY = 3.0  # rad/s

# Run rules
START_LIVES = 3
SECRET_LEVEL = 666
BOSS_LEVEL_EVERY = 10

# Deferred actions (ms)
TRANSITION_DELAY_MS = 500
GAMEOVER_DELAY_MS = 3000
SECRET_VICTORY_DELAY_MS = 5000
BANNER_MS = 2000

PRICES = {
    "maxHp": 10,
    "sharpSword": 20,
    "tripleJump": 30,
    "downStrike": 40,
    "cosmetic": 5,
    "extraLife": 10,
    "legendSkin": 7,
}

COLORS = {
    "player": "#22c55e",
    "platform": "#475569",
    "platform_moving": "#8b5cf6",
    "platform_top": "#94a3b8",
    "coin": "#ef4444",
    "yellow_coin": "#facc15",
    "door_locked": "#6b7280",
    "door_unlocked": "#fbbf24",
    "background": "#0f172a",
    "enemy_vertical": "#dc2626",
    "enemy_patroller": "#9333ea",
    "enemy_chaser": "#eab308",
    "boss": "#7f1d1d",
    "rat": "#9ca3af",
    "sword": "#ffffff",
    "hp_bar_bg": "#1e293b",
    "hp_bar_player": "#22c55e",
    "hp_bar_enemy": "#ef4444",
}

BIOME_COLORS = [
    "#0f172a",  # slate
    "#2e1065",  # purple
    "#064e3b",  # green
    "#450a0a",  # maroon
    "#1c1917",  # stone
    "#0c4a6e",  # ocean
    "#312e81",  # indigo
]

SKIN_COLORS = {
    "default": "#22c55e",
    "midnight": "#1e3a8a",
    "crimson": "#991b1b",
    "golden": "#fbbf24",
    "legend": "#000000",
}

SKINS = ("default", "midnight", "crimson", "golden", "legend")
HATS = ("none", "tophat", "crown", "halo")

ENTITY_SIZE = {
    "player": 32,
    "coin": 20,
    "yellow_coin": 14,
    "door_w": 40,
    "door_h": 60,
    "platform_h": 20,
    "enemy": 32,
    "boss": 96,
    "sword_reach": 50,
    "sword_height": 40,
}
