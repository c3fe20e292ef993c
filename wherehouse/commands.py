"""Direct calls to the brew program for searching and reporting."""

from __future__ import annotations

import subprocess
import threading
from enum import Enum, auto

from wherehouse.package_manager import handle_spawned_command

BREW = "brew"


class CommandType(Enum):
    """Kinds of work the interface can request."""

    SEARCH = auto()
    CONFIG = auto()
    INFO = auto()
    GENERAL_INFO = auto()
    HEALTHCHECK = auto()
    INSTALL = auto()
    UNINSTALL = auto()
    UPDATE = auto()


class SearchSource(Enum):
    """Whether a search looks at installed or available packages."""

    REMOTE = "Remote"
    LOCAL = "Local"

    def __str__(self) -> str:
        return self.value


class PackageManagerKind(Enum):
    """Supported package managers."""

    HOMEBREW = "Homebrew"

    def __str__(self) -> str:
        return self.value


def _run(stop: threading.Event, args: list[str], *, read_stderr: bool = False) -> str | None:
    """Run brew with ``args`` and return one captured stream, or ``None``."""
    try:
        child = subprocess.Popen(
            [BREW, *args],
            stdout=subprocess.DEVNULL if read_stderr else subprocess.PIPE,
            stderr=subprocess.PIPE if read_stderr else subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError:
        return None
    output = handle_spawned_command(stop, child)
    if output is None:
        return None
    return (output.err if read_stderr else output.out) or ""


def search(stop: threading.Event, query: str, source: SearchSource) -> list[str] | None:
    """Search available packages, or list installed ones, for a non-empty query."""
    if not query:
        return None
    args = ["search", query] if source is SearchSource.REMOTE else ["ls"]
    output = _run(stop, args)
    if output is None:
        return None
    return [line for line in output.split("\n") if line]


def info(stop: threading.Event, package_name: str) -> str | None:
    """Return the information brew gives for a package."""
    if not package_name:
        return None
    return _run(stop, ["info", package_name])


def check_health(stop: threading.Event) -> str | None:
    """Return the diagnostics brew doctor writes to its error stream."""
    return _run(stop, ["doctor"], read_stderr=True)


def config(stop: threading.Event) -> str | None:
    """Return the brew configuration report."""
    return _run(stop, ["config"])