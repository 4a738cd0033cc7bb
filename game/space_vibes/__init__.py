"""Space Vibes - real-time 2D arcade shooter core"""

from .config import ConfigError, PlayerConfig, load_player_config
from .entities import InputState
from .hooks import GameHooks, SessionSummary
from .world import GameWorld
from .env import SpaceVibesEnv, run_random_episode

__all__ = [
    'ConfigError',
    'PlayerConfig',
    'load_player_config',
    'InputState',
    'GameHooks',
    'SessionSummary',
    'GameWorld',
    'SpaceVibesEnv',
    'run_random_episode',
]
