"""Running package-manager programs and the interface every backend provides."""

from __future__ import annotations

import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import IO

_POLL_INTERVAL = 0.02


class PackageManagerError(Exception):
    """A package-manager operation could not be carried out."""


@dataclass
class SpawnedCommandOutput:
    """What a finished command wrote to its output streams."""

    out: str | None = None
    err: str | None = None


class PackageLocality(Enum):
    """Where packages are looked up."""

    LOCAL = "LOCAL"
    REMOTE = "REMOTE"

    def __str__(self) -> str:
        return self.value


class Command(Enum):
    """Operations that can be dispatched to a package manager."""

    FILTER_PACKAGES = auto()
    CONFIG = auto()
    PACKAGE_INFO = auto()
    GENERAL_INFO = auto()
    CHECK_HEALTH = auto()
    INSTALL_PACKAGE = auto()
    UNINSTALL_PACKAGE = auto()
    UPDATE_PACKAGE = auto()
    CLEAN = auto()


def spawn_command(alias: str, args: Iterable[str]) -> subprocess.Popen:
    """Start ``alias`` with ``args`` without waiting, capturing stdout and stderr.

    Raises ``OSError`` when the program cannot be started.
    """
    return subprocess.Popen(
        [alias, *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


def _collect_lines(stream: IO[str], name: str, sink: dict[str, str]) -> None:
    parts = []
    with stream:
        for line in stream:
            parts.append(line[:-1] if line.endswith("\n") else line)
            parts.append("\n")
    sink[name] = "".join(parts)


def handle_spawned_command(
    stop: threading.Event, child: subprocess.Popen
) -> SpawnedCommandOutput | None:
    """Wait for ``child`` and return its output, or kill it once ``stop`` is set.

    Returns ``None`` when the command was stopped before it finished.
    """
    collected: dict[str, str] = {}
    readers = [
        threading.Thread(target=_collect_lines, args=(stream, name, collected), daemon=True)
        for name, stream in (("out", child.stdout), ("err", child.stderr))
        if stream is not None
    ]
    for reader in readers:
        reader.start()

    while True:
        try:
            child.wait(timeout=_POLL_INTERVAL)
        except subprocess.TimeoutExpired:
            if stop.is_set():
                child.kill()
                child.wait()
                for reader in readers:
                    reader.join()
                return None
            continue
        for reader in readers:
            reader.join()
        return SpawnedCommandOutput(out=collected.get("out"), err=collected.get("err"))


def command(alias: str, args: Iterable[str]) -> subprocess.CompletedProcess:
    """Run ``alias`` with ``args`` to completion and return its captured output.

    Raises ``OSError`` when the program cannot be started.
    """
    return subprocess.run(
        [alias, *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=False,
    )


class PackageManager(ABC):
    """Operations a package-manager backend offers.

    Every operation takes a ``threading.Event``; setting it asks a running
    command to stop. Failures raise ``PackageManagerError``.
    """

    @abstractmethod
    def alias(self) -> str:
        """Name of the program that is run."""

    @abstractmethod
    def filter_packages(
        self, stop: threading.Event, locality: PackageLocality, pattern: str
    ) -> list[str]:
        """Return package names matching ``pattern``."""

    @abstractmethod
    def package_manager_config(self, stop: threading.Event) -> str:
        """Return the package manager's configuration report."""

    @abstractmethod
    def package_info(self, stop: threading.Event, package_name: str) -> str:
        """Return information about one package."""

    @abstractmethod
    def check_health(self, stop: threading.Event) -> str:
        """Return the result of the package manager's self-check."""

    @abstractmethod
    def clean(self, stop: threading.Event) -> str:
        """Remove stale files and return the report."""

    @abstractmethod
    def install_package(self, stop: threading.Event, package_name: str) -> None:
        """Install a package."""

    @abstractmethod
    def update_package(self, stop: threading.Event, package_name: str) -> None:
        """Upgrade a package."""

    @abstractmethod
    def uninstall_package(self, stop: threading.Event, package_name: str) -> None:
        """Remove a package."""