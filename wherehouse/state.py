"""Shared application state read by the interface and written by workers."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from enum import Enum, auto

from wherehouse.commands import PackageManagerKind
from wherehouse.package_manager import PackageLocality

_LAST_INDEX = sys.maxsize


class InputMode(Enum):
    """How key presses are interpreted."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"

    def __str__(self) -> str:
        return self.value


class Pane(Enum):
    """The panes of the interface that can hold focus."""

    SEARCH_INPUT = auto()
    SEARCH_RESULTS = auto()
    INFO = auto()
    CONTEXT = auto()


@dataclass
class ListState:
    """Selection and scroll position of a list view.

    Moving before the first entry stays on it; moving back from no selection
    selects past the end, which a renderer clamps to the last entry.
    """

    selected: int | None = None
    offset: int = 0

    def select(self, index: int | None) -> None:
        """Select ``index``; selecting nothing also resets the scroll position."""
        self.selected = index
        if index is None:
            self.offset = 0

    def select_next(self) -> None:
        """Move the selection one entry down, starting at the first."""
        self.selected = 0 if self.selected is None else min(self.selected + 1, _LAST_INDEX)

    def select_previous(self) -> None:
        """Move the selection one entry up, starting at the last."""
        self.selected = _LAST_INDEX if self.selected is None else max(self.selected - 1, 0)


@dataclass
class SearchState:
    """The search query, its results and which one is selected."""

    query: str = ""
    results: list[str] = field(default_factory=list)
    selected_result: int = 0
    selected_result_info: str = ""
    list_state: ListState = field(default_factory=ListState)
    source: PackageLocality = PackageLocality.LOCAL


@dataclass
class Config:
    """Facts about the application and the package manager in use."""

    package_manager: PackageManagerKind = PackageManagerKind.HOMEBREW
    package_manager_version: str = ""
    system_config: str = ""
    app_version: str = ""
    app_name: str = "WhereHouse"


class State:
    """Everything the threads of the application share.

    Hold ``lock`` while reading or changing more than a single attribute.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.current_pane = Pane.SEARCH_INPUT
        self.input_mode = InputMode.INSERT
        self.search = SearchState()
        self.should_quit = threading.Event()
        self.config = Config()
        self.healthcheck_results = ""
        self.context_content = ""

    def update_context(self, content: str) -> None:
        """Replace what the context pane shows."""
        with self.lock:
            self.context_content = content