"""Platformer module - side-scrolling simulation core and frame drivers"""

from .simulation import Game
from .state import GameState, InputState, Status
from .storage import SaveStore
from .audio import SoundManager
from .level_gen import generate_level
from .platformer_env import PlatformerEnv, run_random_episode

__all__ = [
    'Game',
    'GameState',
    'InputState',
    'Status',
    'SaveStore',
    'SoundManager',
    'generate_level',
    'PlatformerEnv',
    'run_random_episode',
]
