import pygame
import pytest

from invaders.app import (
    MAX_NAME_LEN, SCENE_GAME_OVER, SCENE_MENU, SCENE_PLAYING, App, load_profile, save_profile,
)


def test_profile_round_trip(tmp_path):
    path = str(tmp_path / "profile.json")
    save_profile({"lastPlayerName": "Ada"}, path)
    assert load_profile(path) == {"lastPlayerName": "Ada"}


def test_missing_profile(tmp_path):
    assert load_profile(str(tmp_path / "nope.json")) == {}


def test_unreadable_profile(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("[oops")
    assert load_profile(str(path)) == {}
    path.write_text("[1, 2]")
    assert load_profile(str(path)) == {}


class StubClient:
    high_score = 0

    def __init__(self):
        self.fetches = 0
        self.recorded = []

    def fetch_async(self, callback):
        self.fetches += 1
        callback([{"name": "Bo", "score": 50}])

    def record_and_fetch_async(self, player_name, score, stats, callback):
        self.recorded.append((player_name, score, stats))
        callback([{"name": player_name, "score": score}])


@pytest.fixture()
def app(tmp_path):
    application = App(client=StubClient(), profile_path=str(tmp_path / "profile.json"))
    yield application
    pygame.quit()


@pytest.fixture()
def playing(app):
    app.name = "Ada"
    app.start_game()
    return app


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_app_loads_leaderboard_on_start(app):
    assert app.scene == SCENE_MENU
    assert app.client.fetches == 1
    assert app.entries == [{"name": "Bo", "score": 50}]


def test_menu_name_entry(app):
    app._menu_event(pygame.event.Event(pygame.TEXTINPUT, text="Adx"))
    app._menu_event(key(pygame.K_BACKSPACE))
    app._menu_event(pygame.event.Event(pygame.TEXTINPUT, text="a"))
    assert app.name == "Ada"
    app._menu_event(pygame.event.Event(pygame.TEXTINPUT, text="x" * 40))
    assert len(app.name) == MAX_NAME_LEN


def test_enter_starts_game_and_remembers_name(app):
    app.name = "  Ada "
    app._menu_event(key(pygame.K_RETURN))
    assert app.scene == SCENE_PLAYING
    assert app.session.state.player_name == "Ada"
    assert app.loop.running
    assert app.loop.frames == 1
    assert load_profile(app.profile_path) == {"lastPlayerName": "Ada"}


def test_remembered_name_prefills_menu(tmp_path):
    path = str(tmp_path / "profile.json")
    save_profile({"lastPlayerName": "Cy"}, path)
    application = App(client=StubClient(), profile_path=path)
    try:
        assert application.name == "Cy"
    finally:
        pygame.quit()


def test_space_latches_fire_and_p_pauses(playing):
    playing._playing_key(pygame.K_SPACE)
    assert playing.input.fire
    playing._playing_key(pygame.K_p)
    assert playing.session.state.paused
    playing._playing_key(pygame.K_p)
    assert not playing.session.state.paused


def test_options_screen_pauses_and_toggles(playing):
    playing._playing_key(pygame.K_o)
    assert playing.show_options
    assert playing.session.state.paused

    playing._playing_key(pygame.K_s)
    assert playing.options.sound_enabled is False
    assert playing.sound.enabled is False
    playing._playing_key(pygame.K_m)
    assert playing.options.misses_cost_points is False
    assert playing.session.options.misses_cost_points is False

    # Game keys are ignored while the options screen is up
    playing._playing_key(pygame.K_SPACE)
    assert not playing.input.fire

    playing._playing_key(pygame.K_o)
    assert not playing.show_options
    assert not playing.session.state.paused

    playing._playing_key(pygame.K_o)
    playing._playing_key(pygame.K_s)
    playing._playing_key(pygame.K_ESCAPE)
    assert playing.options.sound_enabled is True
    assert playing.sound.enabled is True
    assert not playing.show_options


def test_restart_mid_game_keeps_one_frame_chain(playing):
    playing.scheduler.tick()
    playing.session.state.level = 3
    playing.session.state.score = 50
    frames = playing.loop.frames
    playing._playing_key(pygame.K_r)
    assert playing.session.state.level == 1
    assert playing.session.state.score == 0
    assert playing.loop.frames == frames
    assert playing.scheduler.has_pending
    assert playing.scheduler.tick()
    assert playing.loop.frames == frames + 1


def test_game_over_event_submits_summary(playing):
    playing.session.state.score = 40
    playing.session.state.level = 2
    playing.on_event("game_over")
    assert playing.scene == SCENE_GAME_OVER
    assert playing.client.recorded == [("Ada", 40, playing.session.state.summary())]
    assert playing.entries == [{"name": "Ada", "score": 40}]


def test_game_over_from_loop_then_restart(playing):
    playing.session.state.lives = 0
    playing.scheduler.tick()
    assert playing.session.state.game_over
    assert playing.scene == SCENE_GAME_OVER
    assert not playing.loop.running
    assert len(playing.client.recorded) == 1

    playing._game_over_key(pygame.K_r)
    assert playing.scene == SCENE_PLAYING
    assert playing.loop.running
    assert not playing.session.state.game_over
    assert playing.session.state.lives == 3


def test_game_over_enter_returns_to_menu(playing):
    playing.session.state.lives = 0
    playing.scheduler.tick()
    playing._game_over_key(pygame.K_RETURN)
    assert playing.scene == SCENE_MENU
    assert playing.client.fetches == 2
