"""
Invaders: a pygame Space Invaders clone with a small leaderboard service.

How to run:
  pip install -e .
  invaders-server        # leaderboard on http://localhost:3000
  invaders               # the game
"""

__version__ = "1.0.0"
