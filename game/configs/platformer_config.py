"""
Runtime configuration for the platformer frame drivers
(agent environment and human window) plus agent reward shaping.
"""

import os

# Agent environment parameters
ENV_CONFIG = {
    "fps": 60,
    "max_steps": 6000,  # 100s at 60 FPS
    "k_enemies": 3,
    "m_coins": 3,
}

# Human window parameters
WINDOW_CONFIG = {
    "title": "Adventure in the Void",
    "update_rate": 1 / 60,
    "save_dir": os.path.join(os.path.expanduser("~"), ".void_platformer"),
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_COIN": 1.0,       # Mandatory coin collected
    "R_GOLD": 0.1,       # Loot coin picked up
    "R_KILL": 1.0,       # Enemy killed
    "R_DAMAGE": 1.0,     # Contact damage taken
    "R_LEVEL": 5.0,      # Door reached
    "R_LIFE": 5.0,       # Life lost
    "R_TIME": 0.001,     # Small time penalty
}
