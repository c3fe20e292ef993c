"""Panes drawn by the terminal interface."""

from __future__ import annotations

import curses
from typing import Any, Protocol

from wherehouse.state import ListState, Pane, State

FOCUSED_PAIR = 1
UNFOCUSED_PAIR = 2
TEXT_PAIR = 3
STATUS_PAIR = 4
SELECTED_PAIR = 5

# Colour pair number -> (foreground, background); ``None`` means the terminal default.
COLOR_PAIRS: dict[int, tuple[int, int | None]] = {
    FOCUSED_PAIR: (curses.COLOR_RED, None),
    UNFOCUSED_PAIR: (curses.COLOR_BLUE, None),
    TEXT_PAIR: (curses.COLOR_WHITE, None),
    STATUS_PAIR: (curses.COLOR_GREEN, None),
    SELECTED_PAIR: (curses.COLOR_BLACK, curses.COLOR_WHITE),
}

HIGHLIGHT_SYMBOL = ">"

_Inner = tuple[int, int, int, int]


class _Area(Protocol):
    x: int
    y: int
    width: int
    height: int


def _style(pair: int, extra: int = 0) -> int:
    """Attribute for a colour pair, or only ``extra`` when colours are unavailable."""
    try:
        return curses.color_pair(pair) | extra
    except curses.error:
        return extra


def _put(window: Any, y: int, x: int, text: str, attr: int) -> None:
    if not text:
        return
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        # Writing the bottom-right cell of a screen reports an error after drawing it.
        pass


def _draw_block(window: Any, area: _Area, title: str, attr: int) -> _Inner | None:
    """Draw a rounded border with a left-aligned title; return the inner area."""
    width, height = area.width, area.height
    if width < 2 or height < 2:
        return None
    span = width - 2
    _put(window, area.y, area.x, "╭" + (title + "─" * span)[:span] + "╮", attr)
    for row in range(1, height - 1):
        _put(window, area.y + row, area.x, "│", attr)
        _put(window, area.y + row, area.x + width - 1, "│", attr)
    _put(window, area.y + height - 1, area.x, "╰" + "─" * span + "╯", attr)
    return area.x + 1, area.y + 1, span, height - 2


def _draw_lines(window: Any, inner: _Inner, lines: list[str], attr: int) -> None:
    x, y, width, height = inner
    if width <= 0:
        return
    for row, line in zip(range(height), lines):
        _put(window, y + row, x, line[:width], attr)


class _BorderedPane:
    """Shared drawing for panes whose border is highlighted while they have focus."""

    pane: Pane
    title = ""

    def __init__(self, state: State) -> None:
        self.state = state

    def _has_focus(self) -> bool:
        with self.state.lock:
            return self.state.current_pane is self.pane

    def _border_style(self) -> int:
        if self._has_focus():
            return _style(FOCUSED_PAIR, curses.A_BOLD)
        return _style(UNFOCUSED_PAIR)

    def _text_lines(self) -> list[str]:
        raise NotImplementedError

    def _render_text(self, window: Any, area: _Area) -> None:
        inner = _draw_block(window, area, self.title, self._border_style())
        if inner is not None:
            _draw_lines(window, inner, self._text_lines(), _style(TEXT_PAIR))


class ContextPane(_BorderedPane):
    """Shows details for whatever the user is looking at."""

    pane = Pane.CONTEXT

    def focused(self) -> bool:
        """Whether this pane currently has focus."""
        return self._has_focus()

    def lines(self) -> list[str]:
        """The context text, split into lines."""
        with self.state.lock:
            return self.state.context_content.splitlines()

    def _text_lines(self) -> list[str]:
        return self.lines()

    def render(self, window: Any, area: _Area) -> None:
        """Draw the pane into ``area`` of ``window``."""
        self._render_text(window, area)


class InfoPane(_BorderedPane):
    """Shows which package manager is in use."""

    pane = Pane.INFO
    title = "1"

    def focused(self) -> bool:
        """Whether this pane currently has focus."""
        return self._has_focus()

    def lines(self) -> list[str]:
        """The package manager's name."""
        with self.state.lock:
            return [str(self.state.config.package_manager)]

    def _text_lines(self) -> list[str]:
        return self.lines()

    def render(self, window: Any, area: _Area) -> None:
        """Draw the pane into ``area`` of ``window``."""
        self._render_text(window, area)


class SearchInputPane(_BorderedPane):
    """Shows the search query being typed."""

    pane = Pane.SEARCH_INPUT
    title = "2"

    def focused(self) -> bool:
        """Whether this pane currently has focus."""
        return self._has_focus()

    def lines(self) -> list[str]:
        """The current search query."""
        with self.state.lock:
            return [self.state.search.query]

    def _text_lines(self) -> list[str]:
        return self.lines()

    def render(self, window: Any, area: _Area) -> None:
        """Draw the pane into ``area`` of ``window``."""
        self._render_text(window, area)


class SearchResultsPane(_BorderedPane):
    """Lists the search results with the selected one highlighted."""

    pane = Pane.SEARCH_RESULTS
    title = "3"

    def focused(self) -> bool:
        """Whether this pane currently has focus."""
        return self._has_focus()

    def lines(self) -> list[str]:
        """The search results."""
        with self.state.lock:
            return list(self.state.search.results)

    def _text_lines(self) -> list[str]:
        return self.lines()

    def render(self, window: Any, area: _Area, list_state: ListState) -> None:
        """Draw the results, clamping and scrolling ``list_state`` to fit."""
        inner = _draw_block(window, area, self.title, self._border_style())
        items = self.lines()

        selected = list_state.selected
        if not items:
            selected = None
        elif selected is not None:
            selected = min(selected, len(items) - 1)
        list_state.selected = selected

        if inner is None:
            return
        x, y, width, height = inner
        offset = min(list_state.offset, max(len(items) - 1, 0))
        if selected is not None:
            if selected < offset:
                offset = selected
            elif selected >= offset + height:
                offset = selected - height + 1
        list_state.offset = offset

        if width <= 0:
            return
        text_attr = _style(TEXT_PAIR)
        selected_attr = _style(SELECTED_PAIR, curses.A_BOLD)
        for row, item in enumerate(items[offset : offset + height]):
            if offset + row == selected:
                line = (HIGHLIGHT_SYMBOL + item).ljust(width)[:width]
                _put(window, y + row, x, line, selected_attr)
            else:
                line = (" " * len(HIGHLIGHT_SYMBOL) + item)[:width]
                _put(window, y + row, x, line, text_attr)


class StatusBar:
    """One-line bar with the input mode on the left and versions on the right."""

    def __init__(self, state: State) -> None:
        self.state = state

    def left_text(self) -> str:
        """Input mode, plus the search source while a search pane has focus."""
        with self.state.lock:
            mode = self.state.input_mode
            if self.state.current_pane in (Pane.SEARCH_INPUT, Pane.SEARCH_RESULTS):
                return f" {mode} | {self.state.search.source} "
            return f" {mode} "

    def right_text(self) -> str:
        """Application and package-manager names with their versions."""
        with self.state.lock:
            config = self.state.config
            return (
                f" {config.app_name} {config.app_version} | "
                f"{config.package_manager} {config.package_manager_version} "
            )

    def render(self, window: Any, area: _Area) -> None:
        """Draw the bar on the first row of ``area``."""
        if area.height < 1 or area.width < 1:
            return
        left_width = area.width * 70 // 100
        right_width = area.width - left_width
        _put(
            window,
            area.y,
            area.x,
            self.left_text()[:left_width],
            _style(STATUS_PAIR, curses.A_BOLD),
        )
        if right_width <= 0:
            return
        right = self.right_text()
        right = right[-right_width:] if len(right) > right_width else right.rjust(right_width)
        _put(window, area.y, area.x + left_width, right, _style(STATUS_PAIR))