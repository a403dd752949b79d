"""
pygame front end: menu with name entry, the game itself, pause and options
overlays, and the game-over screen with the leaderboard.
"""
from __future__ import annotations
import json
import logging
import os
from typing import List

import pygame

from .game import EVENT_GAME_OVER, InputState, Session
from .leaderboard import LeaderboardClient
from .loop import GameLoop, PygameScheduler
from .render import Renderer
from .settings import WIDTH, HEIGHT, HUD_HEIGHT, PROFILE_PATH, TITLE, GameOptions
from .sound import SAMPLE_RATE, SoundManager

log = logging.getLogger(__name__)

SCENE_MENU = "MENU"
SCENE_PLAYING = "PLAYING"
SCENE_GAME_OVER = "GAME_OVER"

MAX_NAME_LEN = 20


# ============================
# PROFILE
# ============================
def load_profile(path: str = PROFILE_PATH) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable profile %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_profile(profile: dict, path: str = PROFILE_PATH):
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(profile, f, indent=2)
    except OSError as exc:
        # The game keeps going without a remembered name
        log.warning("Could not save profile %s: %s", path, exc)


# ============================
# APP
# ============================
class App:
    def __init__(self, client: LeaderboardClient = None, profile_path: str = PROFILE_PATH):
        # Mixer format has to be requested before pygame.init() opens it
        pygame.mixer.pre_init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT + HUD_HEIGHT))
        self.options = GameOptions()
        self.sound = SoundManager(self.options.sound_enabled)
        self.renderer = Renderer(self.screen)
        self.client = client or LeaderboardClient()

        self.session = Session(self.options)
        self.input = InputState()
        self.scheduler = PygameScheduler()
        self.loop = GameLoop(self.session, self.scheduler, render=self.render_frame,
                             on_event=self.on_event, inp=self.input)

        self.scene = SCENE_MENU
        self.show_options = False
        self.running = True
        self.profile_path = profile_path
        self.name = load_profile(profile_path).get("lastPlayerName", "")
        self.entries: List[dict] = []
        self.client.fetch_async(self._set_entries)

    def _set_entries(self, entries: List[dict]):
        self.entries = entries

    # ============================
    # FLOW
    # ============================
    def start_game(self):
        name = self.name.strip() or "Player"
        save_profile({"lastPlayerName": name}, self.profile_path)
        self.session.start(name)
        self._begin()

    def restart_game(self):
        self.session.reset()
        self._begin()

    def _begin(self):
        self.show_options = False
        self.input.fire = False
        self.scene = SCENE_PLAYING
        self.loop.start()

    def back_to_menu(self):
        self.scene = SCENE_MENU
        self.client.fetch_async(self._set_entries)

    def on_event(self, event: str):
        self.sound.play(event)
        if event == EVENT_GAME_OVER:
            state = self.session.state
            self.scene = SCENE_GAME_OVER
            self.client.record_and_fetch_async(state.player_name, state.score, state.summary(),
                                               self._set_entries)

    def set_sound(self, enabled: bool):
        self.options.sound_enabled = enabled
        self.sound.enabled = enabled

    # ============================
    # MAIN LOOP
    # ============================
    def run(self):
        while self.running:
            self.handle_events()
            if self.scene == SCENE_PLAYING:
                keys = pygame.key.get_pressed()
                self.input.left = bool(keys[pygame.K_LEFT])
                self.input.right = bool(keys[pygame.K_RIGHT])
            if not self.scheduler.tick():
                self.draw_idle()
        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif self.scene == SCENE_MENU:
                self._menu_event(event)
            elif event.type == pygame.KEYDOWN:
                if self.scene == SCENE_PLAYING:
                    self._playing_key(event.key)
                elif self.scene == SCENE_GAME_OVER:
                    self._game_over_key(event.key)

    def _menu_event(self, event):
        if event.type == pygame.TEXTINPUT:
            self.name = (self.name + event.text)[:MAX_NAME_LEN]
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_RETURN:
                self.start_game()
            elif event.key == pygame.K_BACKSPACE:
                self.name = self.name[:-1]
            elif event.key == pygame.K_ESCAPE:
                self.running = False

    def _playing_key(self, key: int):
        if self.show_options:
            if key == pygame.K_s:
                self.set_sound(not self.options.sound_enabled)
            elif key == pygame.K_m:
                self.options.misses_cost_points = not self.options.misses_cost_points
            elif key in (pygame.K_o, pygame.K_ESCAPE):
                self.show_options = False
                self.session.close_options()
            return
        if key == pygame.K_SPACE:
            self.input.fire = True
        elif key in (pygame.K_p, pygame.K_ESCAPE):
            self.session.toggle_pause()
        elif key == pygame.K_o:
            self.show_options = True
            self.session.open_options()
        elif key == pygame.K_r:
            self.restart_game()

    def _game_over_key(self, key: int):
        if key == pygame.K_r:
            self.restart_game()
        elif key in (pygame.K_RETURN, pygame.K_ESCAPE):
            self.back_to_menu()

    # ============================
    # RENDERING
    # ============================
    def render_frame(self, session: Session):
        self.renderer.draw(session, self.client.high_score)
        if self.show_options:
            self.renderer.draw_options(session)
        elif session.state.paused:
            self.renderer.draw_paused()
        pygame.display.flip()

    def draw_idle(self):
        if self.scene == SCENE_MENU:
            self.renderer.draw_menu(self.name, self.entries)
        elif self.scene == SCENE_GAME_OVER:
            self.renderer.draw(self.session, self.client.high_score)
            self.renderer.draw_game_over(self.session, self.entries)
        else:
            self.render_frame(self.session)
            return
        pygame.display.flip()


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    App().run()


if __name__ == "__main__":
    main()
