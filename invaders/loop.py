"""
Frame scheduling.

The driver never loops by itself: each frame asks the scheduler for the next
one, and stops asking once the game is over. Pausing does not stop the chain;
the update step simply does nothing while paused.
"""
from __future__ import annotations
import abc
import logging
from typing import Callable, List, Optional

import pygame

from .game import InputState, Session
from .settings import FPS

log = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(abc.ABC):
    """Runs a callback once on the next display tick."""

    @abc.abstractmethod
    def request_frame(self, callback: FrameCallback):
        ...


class ManualScheduler(FrameScheduler):
    """Scheduler advanced by hand, one tick at a time."""

    def __init__(self):
        self.pending: List[FrameCallback] = []

    def request_frame(self, callback: FrameCallback):
        self.pending.append(callback)

    def tick(self) -> int:
        """Run everything scheduled for this tick; returns how many callbacks ran."""
        callbacks, self.pending = self.pending, []
        for cb in callbacks:
            cb()
        return len(callbacks)

    def run(self, max_ticks: int) -> int:
        ticks = 0
        while self.pending and ticks < max_ticks:
            self.tick()
            ticks += 1
        return ticks


class PygameScheduler(FrameScheduler):
    """Paces callbacks with a pygame clock at a fixed frame rate."""

    def __init__(self, fps: int = FPS, clock: Optional[pygame.time.Clock] = None):
        self.fps = fps
        self.clock = clock or pygame.time.Clock()
        self._pending: Optional[FrameCallback] = None

    def request_frame(self, callback: FrameCallback):
        self._pending = callback

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def tick(self) -> bool:
        """Wait for the next tick and run the scheduled frame, if any."""
        self.clock.tick(self.fps)
        cb, self._pending = self._pending, None
        if cb is None:
            return False
        cb()
        return True


class GameLoop:
    """Calls update then render for a session once per scheduled frame."""

    def __init__(self, session: Session, scheduler: FrameScheduler,
                 render: Optional[Callable[[Session], None]] = None,
                 on_event: Optional[Callable[[str], None]] = None,
                 inp: Optional[InputState] = None):
        self.session = session
        self.scheduler = scheduler
        self.render = render
        self.on_event = on_event
        self.input = inp or InputState()
        self.running = False
        self.frames = 0

    def start(self):
        """Begin the frame chain. Does nothing if one is already running."""
        if self.running:
            return
        self.running = True
        self._frame()

    def _frame(self):
        self.session.update(self.input)
        if self.on_event is not None:
            for event in self.session.drain_events():
                self.on_event(event)
        if self.render is not None:
            self.render(self.session)
        self.frames += 1

        if self.session.state.game_over:
            self.running = False
            log.debug("Frame chain stopped after %d frames", self.frames)
            return
        self.scheduler.request_frame(self._frame)
