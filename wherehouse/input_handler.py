"""Turning key presses into state changes and background commands."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto

from wherehouse.package_manager import Command, PackageLocality
from wherehouse.state import InputMode, Pane, State
from wherehouse.task_manager import TaskManager

POLL_TIMEOUT = 0.3


class Key(Enum):
    """Keys that do not produce a character."""

    BACKSPACE = auto()
    ESCAPE = auto()


KeyPress = "str | Key"
KeyReader = Callable[[float], "str | Key | None"]


class InputHandler:
    """Reacts to keys read from the terminal.

    A key is a one-character string or a ``Key``. A reader is called with a
    timeout in seconds and returns a key, or ``None`` when none arrived.
    """

    def __init__(self, state: State, task_manager: TaskManager) -> None:
        self.state = state
        self.task_manager = task_manager
        self._update = False

    def run(self, read_key: KeyReader) -> None:
        """Handle keys until the application is asked to quit."""
        while True:
            self.capture_input(read_key)
            if self.state.should_quit.is_set():
                break

    def capture_input(self, read_key: KeyReader) -> None:
        """Handle one key, or refresh the search when the reader timed out."""
        key = read_key(POLL_TIMEOUT)
        if key is None:
            self._update_search()
            return
        self._update = True
        self.handle_key_press(key)

    def handle_key_press(self, key: str | Key) -> None:
        """Apply one key press according to the focused pane and input mode."""
        state = self.state
        with state.lock:
            mode = state.input_mode
            if mode is InputMode.NORMAL:
                self._switch_pane(key)

            pane = state.current_pane
            if pane is Pane.INFO:
                if mode is InputMode.NORMAL:
                    if key == "I":
                        state.update_context(state.config.system_config)
                    elif key == "C":
                        self.task_manager.execute(Command.CHECK_HEALTH, True)
            elif pane is Pane.SEARCH_INPUT:
                if mode is InputMode.NORMAL:
                    self._search_input_normal(key)
                else:
                    self._search_input_insert(key)
            elif pane is Pane.SEARCH_RESULTS and mode is InputMode.NORMAL:
                if key == "q":
                    self._quit()
                elif key == "k":
                    self._select_previous_search_result()
                elif key == "j":
                    self._select_next_search_result()

    def _switch_pane(self, key: str | Key) -> None:
        state = self.state
        if key == "1":
            state.current_pane = Pane.INFO
            state.update_context(state.config.system_config)
        elif key == "2":
            state.current_pane = Pane.SEARCH_INPUT
            state.update_context("")
        elif key == "3":
            state.current_pane = Pane.SEARCH_RESULTS
            state.update_context(state.search.selected_result_info)
        elif key == "q":
            self._quit()

    def _search_input_normal(self, key: str | Key) -> None:
        state = self.state
        if key == "i":
            state.input_mode = InputMode.INSERT
        elif key == "l":
            state.search.source = PackageLocality.LOCAL
            self.task_manager.execute(Command.FILTER_PACKAGES, True)
        elif key == "r":
            state.search.source = PackageLocality.REMOTE
            self.task_manager.execute(Command.FILTER_PACKAGES, True)

    def _search_input_insert(self, key: str | Key) -> None:
        if key is Key.BACKSPACE:
            self.state.search.query = self.state.search.query[:-1]
            self._reset_selected_search_result()
        elif key is Key.ESCAPE:
            self.state.input_mode = InputMode.NORMAL
        elif isinstance(key, str):
            self.state.search.query += key
            self._reset_selected_search_result()

    def _quit(self) -> None:
        self.state.should_quit.set()

    def _reset_selected_search_result(self) -> None:
        with self.state.lock:
            self.state.search.selected_result = 0
            self.state.search.list_state.select(None)
        self.task_manager.execute(Command.PACKAGE_INFO, True)

    def _select_previous_search_result(self) -> None:
        with self.state.lock:
            search = self.state.search
            search.selected_result = max(search.selected_result - 1, 0)
            search.list_state.select_previous()
        self.task_manager.execute(Command.PACKAGE_INFO, True)

    def _select_next_search_result(self) -> None:
        with self.state.lock:
            search = self.state.search
            if not search.results:
                return
            search.selected_result = (search.selected_result + 1) % len(search.results)
            search.list_state.select_next()
        self.task_manager.execute(Command.PACKAGE_INFO, True)

    def _update_search(self) -> None:
        if not self._update:
            return
        self._update = False
        with self.state.lock:
            searching = self.state.current_pane is Pane.SEARCH_INPUT
        if searching:
            self.task_manager.execute(Command.FILTER_PACKAGES, True)