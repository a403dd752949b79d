"""Small helpers shared by the update and render steps."""
from __future__ import annotations


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def collides(a, b) -> bool:
    """Axis-aligned overlap test for anything with x, y, width and height.

    Rectangles that only share an edge do not collide.
    """
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def format_duration(seconds: int) -> str:
    if not seconds:
        return "-"
    return f"{seconds // 60}m {seconds % 60}s"
