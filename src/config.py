"""
Configuration parameters for the Reversi engine.
"""
import os
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, Any, Optional
import json

from .errors import ConfigError


class PlayerType(Enum):
    """Who controls a side."""
    HUMAN = "human"
    AI_MINIMAX = "ai_minimax"
    AI_MCTS = "ai_mcts"  # Selectable in UIs, but has no strategy behind it

    @property
    def is_ai(self) -> bool:
        return self is not PlayerType.HUMAN

    @classmethod
    def parse(cls, value) -> 'PlayerType':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ConfigError(f"Unknown player type {value!r} (expected one of: {names})") from None


@dataclass
class GameConfig:
    """Configuration for the game controller."""
    black_player: PlayerType = PlayerType.HUMAN
    white_player: PlayerType = PlayerType.AI_MINIMAX
    ai_enabled: bool = True
    ai_delay: float = 0.5  # Seconds to wait before the AI starts thinking

    def __post_init__(self):
        self.black_player = PlayerType.parse(self.black_player)
        self.white_player = PlayerType.parse(self.white_player)


@dataclass
class SearchConfig:
    """Configuration for the minimax search."""
    depth: int = 5  # 5-6 is the ceiling for interactive play
    seed: Optional[int] = None  # Seed for tie-breaking; None means unseeded


@dataclass
class ArenaConfig:
    """Configuration for engine-vs-engine matches."""
    games: int = 10
    depth_player1: int = 3  # colours alternate between games
    depth_player2: int = 3
    output_dir: str = "match_results"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Reversi-Minimax"
    game: GameConfig = field(default_factory=GameConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> 'Config':
        """Raise ConfigError if any value is out of range."""
        if self.search.depth < 1:
            raise ConfigError(f"search.depth must be >= 1, got {self.search.depth}")
        if self.arena.depth_player1 < 1 or self.arena.depth_player2 < 1:
            raise ConfigError("arena depths must be >= 1")
        if self.arena.games < 1:
            raise ConfigError(f"arena.games must be >= 1, got {self.arena.games}")
        if self.game.ai_delay < 0:
            raise ConfigError(f"game.ai_delay must be >= 0, got {self.game.ai_delay}")
        if self.logging.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown log level {self.logging.log_level!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        data = asdict(self)
        data['game']['black_player'] = self.game.black_player.value
        data['game']['white_player'] = self.game.white_player.value
        return data

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        try:
            config = cls(
                project_name=config_dict.get('project_name', 'Reversi-Minimax'),
                game=GameConfig(**config_dict.get('game', {})),
                search=SearchConfig(**config_dict.get('search', {})),
                arena=ArenaConfig(**config_dict.get('arena', {})),
                logging=LoggingConfig(**config_dict.get('logging', {}))
            )
        except TypeError as e:
            raise ConfigError(f"Invalid config: {e}") from e
        return config.validate()

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
