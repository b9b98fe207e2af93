"""Data models for the game page renderers."""

from .config import AppConfig
from .game import GameAlt, GameRecord, HashRecord, HubRecord, PlayerActivity
from .metadata import MetadataValue
from .permissions import Permissions
from .progress import BadgeTier, GameProgress

__all__ = [
    "AppConfig",
    "BadgeTier",
    "GameAlt",
    "GameProgress",
    "GameRecord",
    "HashRecord",
    "HubRecord",
    "MetadataValue",
    "Permissions",
    "PlayerActivity",
]
