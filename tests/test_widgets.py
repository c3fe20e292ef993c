import curses
import sys

from wherehouse.package_manager import PackageLocality
from wherehouse.state import InputMode, ListState, Pane, State
from wherehouse.tui import Rect
from wherehouse.widgets import (
    ContextPane,
    InfoPane,
    SearchInputPane,
    SearchResultsPane,
    StatusBar,
)


class FakeWindow:
    def __init__(self, height, width):
        self.height = height
        self.width = width
        self.cells = [[" "] * width for _ in range(height)]

    def addstr(self, y, x, text, attr=0):
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise curses.error("out of range")
        for offset, char in enumerate(text):
            if x + offset >= self.width:
                raise curses.error("out of range")
            self.cells[y][x + offset] = char

    def row(self, y):
        return "".join(self.cells[y])

    def text(self):
        return "\n".join(self.row(y) for y in range(self.height))


def test_focused_follows_current_pane():
    state = State()
    state.current_pane = Pane.INFO
    assert InfoPane(state).focused() is True
    assert ContextPane(state).focused() is False
    state.current_pane = Pane.CONTEXT
    assert ContextPane(state).focused() is True
    assert SearchInputPane(state).focused() is False


def test_info_pane_shows_package_manager():
    assert InfoPane(State()).lines() == ["Homebrew"]


def test_search_input_pane_shows_query():
    state = State()
    state.search.query = "wget"
    assert SearchInputPane(state).lines() == ["wget"]


def test_context_pane_splits_lines():
    state = State()
    state.update_context("alpha\nbeta\n")
    assert ContextPane(state).lines() == ["alpha", "beta"]


def test_results_pane_lines_are_results():
    state = State()
    state.search.results = ["a", "b", "c"]
    assert SearchResultsPane(state).lines() == ["a", "b", "c"]


def test_info_pane_render_draws_border_title_and_content():
    window = FakeWindow(3, 20)
    InfoPane(State()).render(window, Rect(0, 0, 20, 3))
    assert window.row(0).startswith("╭1─")
    assert window.row(0).endswith("╮")
    assert window.row(1).startswith("│Homebrew")
    assert window.row(1).endswith("│")
    assert window.row(2).startswith("╰─")
    assert window.row(2).endswith("╯")


def test_render_truncates_to_inner_width():
    state = State()
    state.search.query = "abcdefghij"
    window = FakeWindow(3, 6)
    SearchInputPane(state).render(window, Rect(0, 0, 6, 3))
    assert window.row(1) == "│abcd│"


def test_render_respects_area_offset():
    state = State()
    state.update_context("alpha\nbeta")
    window = FakeWindow(6, 20)
    ContextPane(state).render(window, Rect(5, 1, 12, 4))
    assert window.row(0).strip() == ""
    assert window.row(2)[5:].startswith("│alpha")
    assert window.row(3)[5:].startswith("│beta")


def test_render_in_too_small_area_draws_nothing():
    window = FakeWindow(3, 3)
    InfoPane(State()).render(window, Rect(0, 0, 1, 3))
    assert window.text().strip() == ""


def test_results_render_marks_selected_item():
    state = State()
    state.search.results = ["a", "b"]
    list_state = ListState(selected=1)
    window = FakeWindow(5, 10)
    SearchResultsPane(state).render(window, Rect(0, 0, 10, 5), list_state)
    assert window.row(1).startswith("│ a")
    assert window.row(2).startswith("│>b")


def test_results_render_clamps_selection_past_end():
    state = State()
    state.search.results = ["a", "b"]
    list_state = ListState(selected=sys.maxsize)
    window = FakeWindow(5, 10)
    SearchResultsPane(state).render(window, Rect(0, 0, 10, 5), list_state)
    assert list_state.selected == len(state.search.results) - 1
    assert "│>b" in window.text()


def test_results_render_scrolls_selection_into_view():
    state = State()
    state.search.results = [f"item{n}" for n in range(10)]
    list_state = ListState(selected=7)
    window = FakeWindow(5, 12)
    SearchResultsPane(state).render(window, Rect(0, 0, 12, 5), list_state)
    visible_rows = 3
    assert list_state.offset <= 7 < list_state.offset + visible_rows
    assert ">item7" in window.text()
    assert "item0" not in window.text()


def test_results_render_without_results_clears_selection():
    list_state = ListState(selected=2)
    window = FakeWindow(5, 10)
    SearchResultsPane(State()).render(window, Rect(0, 0, 10, 5), list_state)
    assert list_state.selected is None
    assert ">" not in window.text()


def test_status_bar_left_text_in_search_pane():
    state = State()
    state.current_pane = Pane.SEARCH_INPUT
    state.input_mode = InputMode.INSERT
    state.search.source = PackageLocality.REMOTE
    assert StatusBar(state).left_text() == f" {InputMode.INSERT} | {PackageLocality.REMOTE} "


def test_status_bar_left_text_outside_search():
    state = State()
    state.current_pane = Pane.INFO
    state.input_mode = InputMode.NORMAL
    assert StatusBar(state).left_text() == " NORMAL "


def test_status_bar_right_text_includes_versions():
    state = State()
    state.config.app_version = "1.0"
    state.config.package_manager_version = "4.2"
    text = StatusBar(state).right_text()
    assert text == " WhereHouse 1.0 | Homebrew 4.2 "


def test_status_bar_render_places_both_sides():
    state = State()
    window = FakeWindow(1, 80)
    bar = StatusBar(state)
    bar.render(window, Rect(0, 0, 80, 1))
    row = window.row(0)
    assert row.startswith(bar.left_text())
    assert row.endswith(bar.right_text())