"""Constants and runtime options for the game client."""
import os
from dataclasses import dataclass

# ============================
# DISPLAY
# ============================
WIDTH, HEIGHT = 800, 600
HUD_HEIGHT = 64
FPS = 60
TITLE = "Space Invaders"

PROFILE_PATH = os.path.join(os.path.expanduser("~"), ".invaders_profile.json")
LEADERBOARD_URL = os.environ.get("INVADERS_LEADERBOARD_URL") or "http://localhost:3000/api/leaderboard"
LEADERBOARD_TIMEOUT = 5  # seconds

# Colors
COLOR_BG = (10, 10, 10)          # #0a0a0a
COLOR_PLAYER = (0, 255, 0)
COLOR_ENEMY_EYE = (255, 170, 0)  # #ffaa00
COLOR_ENEMY_SHADE = (204, 0, 0)  # #cc0000
COLOR_ENEMY_BODY = (255, 0, 0)
COLOR_BULLET_ENEMY = (255, 0, 0)
COLOR_UI = (230, 235, 255)
COLOR_DIM = (110, 120, 140)
COLOR_HIGHLIGHT = (255, 215, 0)

# ============================
# GAMEPLAY
# ============================
PLAYER_SIZE = (50, 40)
PLAYER_SPEED = 5
PLAYER_LIVES = 3
PLAYER_MAX_BULLETS = 5
PLAYER_BULLET_SPEED = 7

ENEMY_SIZE = (40, 30)
ENEMY_SPACING_X = 70
ENEMY_SPACING_Y = 60
ENEMY_OFFSET_X = 40
ENEMY_OFFSET_Y = 30
ENEMY_STEP_DOWN = 30
ENEMY_MAX_BULLETS = 3
ENEMY_BULLET_SPEED = 4

BULLET_SIZE = (4, 10)

POINTS_PER_LEVEL = 10
MISS_PENALTY = 5

PARTICLE_COUNT = 10
PARTICLE_LIFE = 20
PARTICLE_RADIUS = 3

# Pixel art for the enemy sprite (8 columns x 6 rows)
INVADER_PATTERN = (
    (0, 0, 1, 1, 1, 1, 0, 0),
    (0, 1, 1, 1, 1, 1, 1, 0),
    (1, 1, 0, 1, 1, 0, 1, 1),
    (1, 1, 1, 1, 1, 1, 1, 1),
    (0, 1, 0, 1, 1, 0, 1, 0),
    (0, 0, 1, 0, 0, 1, 0, 0),
)


@dataclass
class GameOptions:
    sound_enabled: bool = True
    misses_cost_points: bool = True
