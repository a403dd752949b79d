"""
Game session: the state of one play-through and the per-frame update step.

Everything the update step touches hangs off a Session, so tests can build
one with a seeded random source and a fake clock and drive it frame by frame.
Side effects the update step cannot perform itself (sounds, score submission)
are queued as event names and drained by whoever runs the loop.
"""
from __future__ import annotations
import colorsys
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .entities import Bullet, Enemy, GameSettings, GameState, Particle, Player
from .settings import (
    WIDTH, HEIGHT, BULLET_SIZE, ENEMY_BULLET_SPEED, ENEMY_MAX_BULLETS,
    ENEMY_OFFSET_X, ENEMY_OFFSET_Y, ENEMY_SPACING_X, ENEMY_SPACING_Y,
    ENEMY_STEP_DOWN, MISS_PENALTY, PARTICLE_COUNT, PARTICLE_LIFE,
    PLAYER_BULLET_SPEED, PLAYER_MAX_BULLETS, POINTS_PER_LEVEL, GameOptions,
)
from .utils import clamp, collides

log = logging.getLogger(__name__)

# Event names emitted by the update step
EVENT_SHOOT = "shoot"
EVENT_HIT = "hit"
EVENT_MISS = "miss"
EVENT_DAMAGE = "damage"
EVENT_GAME_OVER = "game_over"


@dataclass
class InputState:
    left: bool = False
    right: bool = False
    # Latched on key press, cleared once a bullet actually leaves the ship
    fire: bool = False


def wave_shape(level: int):
    """Rows and columns of the formation for a level."""
    rows = min(3 + level // 3, 5)
    cols = min(6 + level // 2, 10)
    return rows, cols


class Session:
    def __init__(self, options: Optional[GameOptions] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time,
                 width: int = WIDTH, height: int = HEIGHT):
        self.options = options or GameOptions()
        self.rng = rng or random.Random()
        self.clock = clock
        self.width = width
        self.height = height

        self.state = GameState()
        self.settings = GameSettings()
        self.player = Player()
        self.enemies: List[Enemy] = []
        self.enemy_bullets: List[Bullet] = []
        self.particles: List[Particle] = []
        self.direction = 1
        self.events: List[str] = []

    # ============================
    # LIFECYCLE
    # ============================
    def start(self, player_name: str = ""):
        self.state.player_name = player_name.strip() or "Player"
        self.reset()

    def reset(self):
        """Put everything back to level 1, keeping the player's name."""
        self.state = GameState(player_name=self.state.player_name, start_time=self.clock())
        self.direction = 1
        self.player = Player(x=self.width / 2 - 25, y=self.height - 50)
        self.enemies = []
        self.enemy_bullets = []
        self.particles = []
        self.events = []
        self.spawn_enemies()
        log.info("New game for %s", self.state.player_name)

    def spawn_enemies(self):
        rows, cols = wave_shape(self.state.level)
        self.enemies = [
            Enemy(x=col * ENEMY_SPACING_X + ENEMY_OFFSET_X, y=row * ENEMY_SPACING_Y + ENEMY_OFFSET_Y)
            for row in range(rows)
            for col in range(cols)
        ]
        self.update_settings()

    def update_settings(self):
        self.settings = GameSettings.for_level(self.state.level)

    def toggle_pause(self):
        self.state.paused = not self.state.paused

    def open_options(self):
        self.state.paused = True

    def close_options(self):
        self.state.paused = False

    def drain_events(self) -> List[str]:
        events, self.events = self.events, []
        return events

    @property
    def miss_penalty(self) -> int:
        return self.state.miss_count * MISS_PENALTY

    @property
    def total_score(self) -> int:
        if self.options.misses_cost_points:
            return self.state.score - self.miss_penalty
        return self.state.score

    # ============================
    # UPDATE
    # ============================
    def update(self, inp: InputState):
        if self.state.paused or self.state.game_over:
            return

        self._move_player(inp)
        self._fire(inp)
        self._update_player_bullets()
        self._march_enemies()
        self._enemy_fire()
        self._update_enemy_bullets()
        self._resolve_player_hits()
        self._resolve_enemy_hits()

        if not self.enemies:
            self.state.level += 1
            log.info("Wave cleared, advancing to level %d", self.state.level)
            self.spawn_enemies()

        for p in self.particles:
            p.life -= 1
        self.particles = [p for p in self.particles if p.life > 0]

        if self.state.lives <= 0 or any(e.y + e.height >= self.height for e in self.enemies):
            self._end_game()

    def _move_player(self, inp: InputState):
        p = self.player
        if inp.left:
            p.x -= p.speed
        if inp.right:
            p.x += p.speed
        p.x = clamp(p.x, 0, self.width - p.width)

    def _fire(self, inp: InputState):
        if not inp.fire or len(self.player.bullets) >= PLAYER_MAX_BULLETS:
            return
        p = self.player
        w, h = BULLET_SIZE
        p.bullets.append(Bullet(p.x + p.width / 2 - w / 2, p.y, w, h, PLAYER_BULLET_SPEED))
        self.state.shots_fired += 1
        self._emit(EVENT_SHOOT)
        inp.fire = False

    def _update_player_bullets(self):
        kept = []
        for b in self.player.bullets:
            b.y -= b.speed
            if b.y < 0 and not b.hit and self.options.misses_cost_points:
                self.state.miss_count += 1
                self._emit(EVENT_MISS)
            if b.y > 0:
                kept.append(b)
        self.player.bullets = kept

    def _march_enemies(self):
        edge = False
        for e in self.enemies:
            e.x += self.direction * self.settings.enemy_speed
            if e.x <= 0 or e.x + e.width >= self.width:
                edge = True
        if edge:
            self.direction *= -1
            for e in self.enemies:
                e.y += ENEMY_STEP_DOWN

    def _enemy_fire(self):
        w, h = BULLET_SIZE
        for e in self.enemies:
            if self.rng.random() < self.settings.enemy_fire_rate and e.active:
                if len(self.enemy_bullets) >= ENEMY_MAX_BULLETS:
                    continue
                self.enemy_bullets.append(
                    Bullet(e.x + e.width / 2 - w / 2, e.y + e.height, w, h, ENEMY_BULLET_SPEED))

    def _update_enemy_bullets(self):
        for b in self.enemy_bullets:
            b.y += b.speed
        self.enemy_bullets = [b for b in self.enemy_bullets if b.y < self.height]

    def _resolve_player_hits(self):
        # Mark first, remove after: two bullets landing on the same frame both count.
        destroyed = set()
        for b in self.player.bullets:
            for i, e in enumerate(self.enemies):
                if i in destroyed or not collides(b, e):
                    continue
                b.hit = True
                destroyed.add(i)
                self.state.score += POINTS_PER_LEVEL * self.state.level
                self._emit(EVENT_HIT)
                self.create_explosion(*e.center)
                break
        if destroyed:
            self.player.bullets = [b for b in self.player.bullets if not b.hit]
            self.enemies = [e for i, e in enumerate(self.enemies) if i not in destroyed]

    def _resolve_enemy_hits(self):
        kept = []
        for b in self.enemy_bullets:
            if collides(b, self.player):
                self.state.lives -= 1
                self._emit(EVENT_DAMAGE)
                self.create_explosion(*self.player.center)
            else:
                kept.append(b)
        self.enemy_bullets = kept

    def _end_game(self):
        if self.state.game_over:
            return
        self.state.game_over = True
        if self.state.start_time is not None:
            self.state.duration = int(self.clock() - self.state.start_time)
        self._emit(EVENT_GAME_OVER)
        log.info("Game over for %s: score=%d level=%d misses=%d",
                 self.state.player_name, self.state.score, self.state.level, self.state.miss_count)

    # ============================
    # EFFECTS
    # ============================
    def create_explosion(self, x: float, y: float):
        for _ in range(PARTICLE_COUNT):
            hue = (self.rng.random() * 60 + 20) / 360.0
            r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=(self.rng.random() - 0.5) * 4,
                vy=(self.rng.random() - 0.5) * 4,
                life=PARTICLE_LIFE,
                color=(int(r * 255), int(g * 255), int(b * 255)),
            ))

    def _emit(self, event: str):
        self.events.append(event)
