"""The terminal screen: setup, teardown, layout and the drawing loop."""

from __future__ import annotations

import copy
import curses
import threading
from dataclasses import dataclass
from typing import Any

from wherehouse.state import State
from wherehouse.widgets import (
    COLOR_PAIRS,
    ContextPane,
    InfoPane,
    SearchInputPane,
    SearchResultsPane,
    StatusBar,
)

FRAME_INTERVAL = 1 / 30
_SIDEBAR_PERCENT = 40
_SIDEBAR_BOX_HEIGHT = 3
_STATUS_HEIGHT = 1


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int


def compute_layout(width: int, height: int) -> dict[str, Rect]:
    """Split the screen into the areas of the interface, keyed by pane name."""
    status_height = min(_STATUS_HEIGHT, height)
    main_height = height - status_height
    sidebar_width = width * _SIDEBAR_PERCENT // 100

    info_height = min(_SIDEBAR_BOX_HEIGHT, main_height)
    input_height = min(_SIDEBAR_BOX_HEIGHT, main_height - info_height)
    results_height = main_height - info_height - input_height

    return {
        "info": Rect(0, 0, sidebar_width, info_height),
        "search_input": Rect(0, info_height, sidebar_width, input_height),
        "search_results": Rect(0, info_height + input_height, sidebar_width, results_height),
        "context": Rect(sidebar_width, 0, width - sidebar_width, main_height),
        "status_bar": Rect(0, main_height, width, status_height),
    }


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        default_background = -1
    except curses.error:
        default_background = curses.COLOR_BLACK
    for pair, (foreground, background) in COLOR_PAIRS.items():
        curses.init_pair(
            pair, foreground, default_background if background is None else background
        )


def init() -> Any:
    """Take over the terminal and return the screen window."""
    screen = curses.initscr()
    try:
        curses.noecho()
        curses.cbreak()
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        _init_colors()
    except BaseException:
        curses.endwin()
        raise
    return screen


def restore(screen: Any) -> None:
    """Give the terminal back to the shell."""
    screen.keypad(False)
    curses.nocbreak()
    curses.echo()
    curses.endwin()


class Tui:
    """Redraws the interface from the shared state until asked to quit."""

    def __init__(self, state: State, lock: threading.Lock | None = None) -> None:
        self.state = state
        self.lock = lock if lock is not None else threading.Lock()

    def run(self, screen: Any) -> None:
        """Draw frames until the application should quit."""
        while True:
            self.draw(screen)
            if self.state.should_quit.wait(FRAME_INTERVAL):
                break

    def draw(self, screen: Any) -> None:
        """Draw one frame."""
        state = self.state
        with self.lock:
            height, width = screen.getmaxyx()
            layout = compute_layout(width, height)
            screen.erase()

            InfoPane(state).render(screen, layout["info"])
            SearchInputPane(state).render(screen, layout["search_input"])
            with state.lock:
                list_state = copy.copy(state.search.list_state)
            SearchResultsPane(state).render(screen, layout["search_results"], list_state)
            ContextPane(state).render(screen, layout["context"])
            StatusBar(state).render(screen, layout["status_bar"])

            screen.refresh()