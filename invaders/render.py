"""
Drawing. Nothing here changes game state; the renderer only reads a session.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

import pygame

from .game import Session
from .leaderboard import TOP_SCORE_BANNER, is_new_top_score, rank_lines
from .settings import (
    WIDTH, HEIGHT, HUD_HEIGHT, TITLE, COLOR_BG, COLOR_PLAYER, COLOR_ENEMY_BODY,
    COLOR_ENEMY_EYE, COLOR_ENEMY_SHADE, COLOR_BULLET_ENEMY, COLOR_UI, COLOR_DIM,
    COLOR_HIGHLIGHT, INVADER_PATTERN, PARTICLE_LIFE, PARTICLE_RADIUS,
)

LINE_COLORS = {"normal": COLOR_UI, "highlight": COLOR_PLAYER, "top": COLOR_HIGHLIGHT}


def invader_cell_color(row: int, col: int) -> Tuple[int, int, int]:
    """Eyes orange, lower body and side edges darker red, the rest bright red."""
    if col in (2, 5) and row in (1, 2):
        return COLOR_ENEMY_EYE
    if row == 3 or (row == 2 and col in (0, 7)):
        return COLOR_ENEMY_SHADE
    return COLOR_ENEMY_BODY


def particle_draw_state(p) -> Tuple[float, float, float]:
    """Screen x, y and alpha (0..1) of a particle at its current age."""
    age = (PARTICLE_LIFE - p.life) / PARTICLE_LIFE
    return p.x + p.vx * age, p.y + p.vy * age, p.life / PARTICLE_LIFE


class Renderer:
    def __init__(self, screen: pygame.Surface):
        if not pygame.font.get_init():
            pygame.font.init()
        self.screen = screen
        self.field = screen.subsurface(pygame.Rect(0, 0, WIDTH, HEIGHT))
        self.font = pygame.font.SysFont(None, 26)
        self.smallfont = pygame.font.SysFont(None, 22)
        self.bigfont = pygame.font.SysFont(None, 48)

    # ============================
    # PLAY FIELD
    # ============================
    def draw(self, session: Session, high_score: int = 0):
        surf = self.field
        surf.fill(COLOR_BG)
        self.draw_player(surf, session)
        for enemy in session.enemies:
            if enemy.active:
                self.draw_invader(surf, enemy.x, enemy.y, enemy.width)
        for b in session.enemy_bullets:
            pygame.draw.rect(surf, COLOR_BULLET_ENEMY, (int(b.x), int(b.y), b.width, b.height))
        self.draw_particles(surf, session)
        label = self.font.render(f"Wave: {session.state.level}", True, COLOR_PLAYER)
        surf.blit(label, (10, 10))
        if self.screen.get_height() >= HEIGHT + HUD_HEIGHT:
            self.draw_hud(session, high_score)

    def draw_player(self, surf: pygame.Surface, session: Session):
        p = session.player
        pygame.draw.rect(surf, COLOR_PLAYER, (int(p.x), int(p.y), p.width, p.height))
        tri = [
            (p.x + p.width / 2, p.y - 10),
            (p.x, p.y),
            (p.x + p.width, p.y),
        ]
        pygame.draw.polygon(surf, COLOR_PLAYER, tri)
        for b in p.bullets:
            pygame.draw.rect(surf, COLOR_PLAYER, (int(b.x), int(b.y), b.width, b.height))

    def draw_invader(self, surf: pygame.Surface, x: float, y: float, width: float):
        cell = width / 8
        size = max(1, int(round(cell)))
        for row, cells in enumerate(INVADER_PATTERN):
            for col, on in enumerate(cells):
                if on:
                    rect = (int(x + col * cell), int(y + row * cell), size, size)
                    pygame.draw.rect(surf, invader_cell_color(row, col), rect)

    def draw_particles(self, surf: pygame.Surface, session: Session):
        r = PARTICLE_RADIUS
        for p in session.particles:
            px, py, alpha = particle_draw_state(p)
            dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*p.color, int(255 * alpha)), (r, r), r)
            surf.blit(dot, (int(px) - r, int(py) - r))

    def draw_hud(self, session: Session, high_score: int):
        state = session.state
        top = HEIGHT
        pygame.draw.rect(self.screen, (20, 24, 20), (0, top, WIDTH, HUD_HEIGHT))
        pygame.draw.line(self.screen, COLOR_PLAYER, (0, top), (WIDTH, top), 1)
        row1 = [
            f"Player: {state.player_name}",
            f"High: {high_score}",
            f"Level: {state.level}",
            f"Lives: {state.lives}",
        ]
        row2 = [
            f"Hits: {state.score}",
            f"Misses: {state.miss_count}",
            f"Penalty: {session.miss_penalty}",
            f"Score: {session.total_score}",
        ]
        col_w = WIDTH // 4
        for i, text in enumerate(row1):
            self.screen.blit(self.font.render(text, True, COLOR_UI), (10 + i * col_w, top + 8))
        for i, text in enumerate(row2):
            self.screen.blit(self.font.render(text, True, COLOR_UI), (10 + i * col_w, top + 34))

    # ============================
    # OVERLAYS
    # ============================
    def _dim(self, alpha: int = 140):
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        self.screen.blit(overlay, (0, 0))

    def _center(self, surf: pygame.Surface, y: int):
        self.screen.blit(surf, (WIDTH // 2 - surf.get_width() // 2, y))

    def draw_leaderboard(self, entries: List[dict], y: int, highlight: Optional[str] = None, limit: int = 10):
        if not entries:
            self._center(self.font.render("No scores yet. Be the first!", True, COLOR_DIM), y)
            return
        if is_new_top_score(entries, highlight):
            self._center(self.font.render(TOP_SCORE_BANNER, True, COLOR_HIGHLIGHT), y)
            y += 28
        for i, (text, style) in enumerate(rank_lines(entries[:limit], highlight)):
            self._center(self.smallfont.render(text, True, LINE_COLORS[style]), y + i * 22)

    def draw_menu(self, name: str, entries: List[dict]):
        self.screen.fill(COLOR_BG)
        self._center(self.bigfont.render(TITLE, True, COLOR_PLAYER), 80)
        self._center(self.font.render(f"Name: {name}_", True, COLOR_UI), 160)
        self._center(self.font.render("Type your name, Enter to start, Esc to quit", True, COLOR_DIM), 192)
        tips = "Left/Right move   Space shoot   P pause   O options   R restart"
        self._center(self.smallfont.render(tips, True, COLOR_DIM), 222)
        self._center(self.font.render("Leaderboard", True, COLOR_UI), 270)
        self.draw_leaderboard(entries, 300)

    def draw_paused(self):
        self._dim(120)
        self._center(self.bigfont.render("Paused", True, COLOR_UI), HEIGHT // 2 - 40)
        self._center(self.font.render("Press P to resume, R to restart", True, COLOR_HIGHLIGHT), HEIGHT // 2 + 10)

    def draw_options(self, session: Session):
        self._dim(160)
        opts = session.options
        self._center(self.bigfont.render("Options", True, COLOR_UI), HEIGHT // 2 - 90)
        lines = [
            f"[S] Sound: {'on' if opts.sound_enabled else 'off'}",
            f"[M] Misses cost points: {'on' if opts.misses_cost_points else 'off'}",
            "[O] Close",
        ]
        for i, text in enumerate(lines):
            self._center(self.font.render(text, True, COLOR_HIGHLIGHT), HEIGHT // 2 - 30 + i * 30)

    def draw_game_over(self, session: Session, entries: List[dict]):
        self._dim(160)
        state = session.state
        self._center(self.bigfont.render("Game Over!", True, COLOR_UI), 60)
        self._center(self.font.render("Better luck next time!", True, COLOR_DIM), 105)
        summary = f"{state.player_name}   Score: {state.score}   Level: {state.level}"
        self._center(self.font.render(summary, True, COLOR_UI), 140)
        self.draw_leaderboard(entries, 190, highlight=state.player_name)
        self._center(self.font.render("R to play again, Enter for menu", True, COLOR_DIM), HEIGHT - 40)
