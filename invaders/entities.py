"""
Plain records for everything that lives on the play field.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .settings import (
    WIDTH, HEIGHT, PLAYER_SIZE, PLAYER_SPEED, PLAYER_LIVES, ENEMY_SIZE,
)


@dataclass
class Bullet:
    x: float
    y: float
    width: int
    height: int
    speed: float
    hit: bool = False


@dataclass
class Player:
    x: float = WIDTH / 2 - PLAYER_SIZE[0] / 2
    y: float = HEIGHT - 50
    width: int = PLAYER_SIZE[0]
    height: int = PLAYER_SIZE[1]
    speed: float = PLAYER_SPEED
    bullets: List[Bullet] = field(default_factory=list)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Enemy:
    x: float
    y: float
    width: int = ENEMY_SIZE[0]
    height: int = ENEMY_SIZE[1]
    active: bool = True

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Particle:
    """Explosion spark. Position stays put; the renderer offsets it by velocity."""
    x: float
    y: float
    vx: float
    vy: float
    life: int
    color: Tuple[int, int, int]


@dataclass
class GameSettings:
    """Difficulty scalars, derived from the level at the start of each wave."""
    enemy_speed: float = 1.0
    enemy_fire_rate: float = 0.01
    enemy_spawn_rate: float = 0.95

    @classmethod
    def for_level(cls, level: int) -> "GameSettings":
        return cls(
            enemy_speed=1 + (level - 1) * 0.5,
            enemy_fire_rate=0.01 + (level - 1) * 0.003,
            enemy_spawn_rate=0.95 - (level - 1) * 0.02,
        )


@dataclass
class GameState:
    level: int = 1
    score: int = 0
    miss_count: int = 0
    lives: int = PLAYER_LIVES
    paused: bool = False
    game_over: bool = False
    player_name: str = "Player"
    shots_fired: int = 0
    start_time: Optional[float] = None
    duration: int = 0

    def summary(self) -> dict:
        """Stats sent along with a finished session's score."""
        return {
            "missCount": self.miss_count,
            "level": self.level,
            "shotsFired": self.shots_fired,
            "duration": self.duration,
        }
