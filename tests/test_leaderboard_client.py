import pytest
import requests

from invaders import leaderboard
from invaders.leaderboard import LeaderboardClient, is_new_top_score, rank_lines
from invaders.utils import format_duration

URL = "http://scores.test/api/leaderboard"


class FakeResponse:
    def __init__(self, data, status=200):
        self.data = data
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.data


@pytest.fixture()
def http(monkeypatch):
    calls = {"get": [], "post": [], "get_result": [], "post_result": []}

    def fake_get(url, timeout=None):
        calls["get"].append(url)
        result = calls["get_result"]
        if isinstance(result, Exception):
            raise result
        return result if isinstance(result, FakeResponse) else FakeResponse(result)

    def fake_post(url, json=None, timeout=None):
        calls["post"].append(json)
        result = calls["post_result"]
        if isinstance(result, Exception):
            raise result
        return result if isinstance(result, FakeResponse) else FakeResponse(result)

    monkeypatch.setattr(leaderboard.requests, "get", fake_get)
    monkeypatch.setattr(leaderboard.requests, "post", fake_post)
    return calls


def test_fetch_caches_result(http):
    http["get_result"] = [{"name": "Ada", "score": 100}]
    client = LeaderboardClient(URL)
    assert client.fetch() == [{"name": "Ada", "score": 100}]
    assert client.cached == [{"name": "Ada", "score": 100}]
    assert client.high_score == 100
    assert http["get"] == [URL]


def test_fetch_falls_back_to_cache_when_unreachable(http):
    client = LeaderboardClient(URL)
    client.cached = [{"name": "Bo", "score": 50}]
    http["get_result"] = requests.exceptions.ConnectionError("refused")
    assert client.fetch() == [{"name": "Bo", "score": 50}]


def test_fetch_falls_back_on_http_error(http):
    client = LeaderboardClient(URL)
    http["get_result"] = FakeResponse({"error": "boom"}, status=500)
    assert client.fetch() == []


def test_fetch_rejects_non_list_body(http):
    client = LeaderboardClient(URL)
    client.cached = [{"name": "Bo", "score": 50}]
    http["get_result"] = {"unexpected": True}
    assert client.fetch() == [{"name": "Bo", "score": 50}]


def test_submit_sends_full_summary(http):
    http["post_result"] = [{"name": "Ada", "score": 100}]
    client = LeaderboardClient(URL)
    result = client.submit("Ada", 100, {"missCount": 2, "level": 3, "shotsFired": 14, "duration": 61})
    assert result == [{"name": "Ada", "score": 100}]
    assert http["post"] == [{
        "playerName": "Ada", "score": 100, "missCount": 2,
        "level": 3, "shotsFired": 14, "duration": 61,
    }]


def test_submit_fills_in_missing_stats(http):
    client = LeaderboardClient(URL)
    client.submit("Ada", 10)
    assert http["post"][0] == {
        "playerName": "Ada", "score": 10, "missCount": 0,
        "level": 1, "shotsFired": 0, "duration": 0,
    }


def test_submit_failure_returns_cache(http):
    client = LeaderboardClient(URL)
    client.cached = [{"name": "Bo", "score": 50}]
    http["post_result"] = FakeResponse({"error": "Invalid score or player name"}, status=400)
    assert client.submit("Ada", 10) == [{"name": "Bo", "score": 50}]


def test_record_and_fetch_skips_zero_score(http):
    http["get_result"] = [{"name": "Bo", "score": 50}]
    client = LeaderboardClient(URL)
    assert client.record_and_fetch("Ada", 0) == [{"name": "Bo", "score": 50}]
    assert http["post"] == []
    assert http["get"] == [URL]


def test_record_and_fetch_async_calls_back(http):
    http["post_result"] = [{"name": "Ada", "score": 30}]
    http["get_result"] = [{"name": "Ada", "score": 30}]
    client = LeaderboardClient(URL)
    received = []
    thread = client.record_and_fetch_async("Ada", 30, {"level": 1}, received.append)
    thread.join(timeout=5)
    assert received == [[{"name": "Ada", "score": 30}]]
    assert len(http["post"]) == 1


def test_rank_lines_marks_current_player():
    entries = [
        {"name": "Ada", "score": 100, "level": 3, "duration": 125},
        {"name": "Bo", "score": 50, "duration": 0},
        {"name": "Ada", "score": 20, "level": 1, "duration": 30},
    ]
    lines = rank_lines(entries, highlight="Ada")
    assert [style for _, style in lines] == ["top", "normal", "highlight"]
    assert lines[0][0].startswith(leaderboard.CROWN + "#1  Ada  100")
    assert lines[0][0].endswith("Lvl: 3  2m 5s")
    assert lines[1][0] == "#2  Bo  50  Lvl: 1  -"
    assert is_new_top_score(entries, "Ada")
    assert not is_new_top_score(entries, "Bo")
    assert not is_new_top_score([], "Ada")


def test_format_duration():
    assert format_duration(0) == "-"
    assert format_duration(59) == "0m 59s"
    assert format_duration(600) == "10m 0s"
