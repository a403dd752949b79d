"""
HTTP client for the leaderboard service, plus helpers for listing it on screen.

Every call is single-attempt. On any failure the last good list is returned,
so the game never has to care whether the server is up.
"""
from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional, Tuple

import requests

from .settings import LEADERBOARD_TIMEOUT, LEADERBOARD_URL
from .utils import format_duration

log = logging.getLogger(__name__)

TOP_SCORE_BANNER = "NEW TOP SCORE!"
CROWN = "♛ "


class LeaderboardClient:
    def __init__(self, url: str = LEADERBOARD_URL, timeout: float = LEADERBOARD_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self.cached: List[dict] = []

    @property
    def high_score(self) -> int:
        return self.cached[0].get("score", 0) if self.cached else 0

    def fetch(self) -> List[dict]:
        """Full sorted leaderboard, or the cached copy if the server can't be reached."""
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
        except (requests.exceptions.RequestException, ValueError) as exc:
            log.error("Error fetching leaderboard: %s", exc)
            return self.cached
        self.cached = data
        return data

    def submit(self, player_name: str, score: int, stats: Optional[dict] = None) -> List[dict]:
        """Post a finished session; returns the server's top 10, or the cache on failure."""
        stats = stats or {}
        payload = {
            "playerName": player_name,
            "score": score,
            "missCount": stats.get("missCount") or 0,
            "level": stats.get("level") or 1,
            "shotsFired": stats.get("shotsFired") or 0,
            "duration": stats.get("duration") or 0,
        }
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
        except (requests.exceptions.RequestException, ValueError) as exc:
            log.error("Error saving to leaderboard: %s", exc)
            return self.cached
        self.cached = data
        return data

    def record_and_fetch(self, player_name: str, score: int, stats: Optional[dict] = None) -> List[dict]:
        """Game-over sequence: save the score if there is one, then reload the list."""
        if score > 0:
            self.submit(player_name, score, stats)
        return self.fetch()

    # ============================
    # BACKGROUND VARIANTS
    # ============================
    def fetch_async(self, callback: Callable[[List[dict]], None]) -> threading.Thread:
        return self._spawn(lambda: callback(self.fetch()))

    def record_and_fetch_async(self, player_name: str, score: int, stats: Optional[dict],
                               callback: Callable[[List[dict]], None]) -> threading.Thread:
        return self._spawn(lambda: callback(self.record_and_fetch(player_name, score, stats)))

    def _spawn(self, target) -> threading.Thread:
        thread = threading.Thread(target=target, daemon=True)
        thread.start()
        return thread


def rank_lines(entries: List[dict], highlight: Optional[str] = None) -> List[Tuple[str, str]]:
    """Text rows for a leaderboard listing, each tagged normal, highlight or top."""
    lines = []
    for index, entry in enumerate(entries):
        mine = highlight is not None and entry.get("name") == highlight
        top = mine and index == 0
        crown = CROWN if top else ""
        text = (f"{crown}#{index + 1}  {entry.get('name', '?')}  {entry.get('score', 0)}"
                f"  Lvl: {entry.get('level') or 1}  {format_duration(entry.get('duration') or 0)}")
        lines.append((text, "top" if top else "highlight" if mine else "normal"))
    return lines


def is_new_top_score(entries: List[dict], player_name: Optional[str]) -> bool:
    return bool(entries) and player_name is not None and entries[0].get("name") == player_name
