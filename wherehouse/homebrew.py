"""Homebrew backend: building brew command lines and running them."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from wherehouse.fuzzy import fuzz
from wherehouse.package_manager import (
    PackageLocality,
    PackageManager,
    PackageManagerError,
    SpawnedCommandOutput,
    command,
    handle_spawned_command,
    spawn_command,
)

HOMEBREW_ALIAS = "brew"
_LOCAL_MATCH_THRESHOLD = 3


class _Flag(Enum):
    """An option whose value is the text passed on the command line."""

    def __str__(self) -> str:
        return self.value


class AutoremoveOption(_Flag):
    DRY_RUN = "--dry-run"


class CleanupOption(_Flag):
    PRUNE = "--prune"
    DRY_RUN = "--dry-run"
    SCRUB = "--scrub"
    PRUNE_PREFIX = "--prune-prefix"


class CompletionsSubcommand(_Flag):
    LINK = "link"
    UNLINK = "unlink"


class DescOption(_Flag):
    SEARCH = "--search"
    NAME = "--name"
    DESCRIPTION = "--description"
    EVAL_ALL = "--eval-all"
    FORMULA = "--formula"
    CASK = "--cask"


class DoctorOption(_Flag):
    LIST_CHECKS = "--list-checks"
    AUDIT_DEBUG = "--audit-debug"


class HomeOption(_Flag):
    FORMULA = "--formula"
    CASK = "--cask"


class InfoOption(_Flag):
    ANALYTICS = "--analytics"
    DAYS = "--days"
    CATEGORY = "--category"
    GITHUB = "--github"
    FETCH_MANIFEST = "--fetch-manifest"
    JSON = "--json"
    INSTALLED = "--installed"
    EVAL_ALL = "--eval-all"
    VARIATIONS = "--variations"
    VERBOSE = "--verbose"
    FORMULA = "--formula"
    CASK = "--cask"


class InstallOption(_Flag):
    DEBUG = "--debug"
    DISPLAY_TIMES = "--display-times"
    FORCE = "--force"
    VERBOSE = "--verbose"
    DRY_RUN = "--dry-run"
    ASK = "--ask"
    FORMULA = "--formula"
    IGNORE_DEPENDENCIES = "--ignore-dependencies"
    ONLY_DEPENDENCIES = "--only-dependencies"
    CC = "--cc"
    BUILD_FROM_SOURCE = "--build-from-source"
    FORCE_BOTTLE = "--force-bottle"
    INCLUDE_TEST = "--include-test"
    HEAD = "--HEAD"
    FETCH_HEAD = "--fetch-head"
    KEEP_TMP = "--keep-tmp"
    DEBUG_SYMBOLS = "--debug-symbols"
    BUILD_BOTTLE = "--build-bottle"
    SKIP_POST_INSTALL = "--skip-post-install"
    SKIP_LINK = "--skip-link"
    AS_DEPENDENCY = "--as-dependency"
    BOTTLE_ARCH = "--bottle-arch"
    INTERACTIVE = "--interactive"
    GIT = "--git"
    OVERWRITE = "--overwrite"
    CASK = "--cask"
    NO_BINARIES = "--no-binaries"
    BINARIES = "--binaries"
    REQUIRE_SHA = "--require-sha"
    QUARANTINE = "--quarantine"
    ADOPT = "--adopt"
    SKIP_CASK_DEPS = "--skip-cask-deps"
    ZAP = "--zap"


class UninstallOption(_Flag):
    FORCE = "--force"
    ZAP = "--zap"
    IGNORE_DEPENDENCIES = "--ignore-dependencies"
    FORMULA = "--formula"
    CASK = "--cask"


def _build(
    subcommand: str,
    options: Iterable[_Flag] | None = None,
    operands: Iterable[str] | None = None,
) -> list[str]:
    args = [subcommand]
    if options is not None:
        args.extend(option.value for option in options)
    if operands is not None:
        args.extend(operands)
    return args


def install_args(
    packages: Iterable[str], options: Iterable[InstallOption] | None = None
) -> list[str]:
    """Arguments that install the given casks or formulae."""
    return _build("install", options, packages)


def upgrade_args(packages: Iterable[str] | None = None) -> list[str]:
    """Arguments that upgrade installed packages, or only the given ones."""
    return _build("upgrade", None, packages)


def uninstall_args(
    packages: Iterable[str], options: Iterable[UninstallOption] | None = None
) -> list[str]:
    """Arguments that uninstall the given casks or formulae."""
    return _build("uninstall", options, packages)


def autoremove_args(dry_run: AutoremoveOption | None = None) -> list[str]:
    """Arguments that remove formulae installed only as unneeded dependencies."""
    return _build("autoremove", None if dry_run is None else [dry_run])


def cleanup_args(
    options: Iterable[CleanupOption] | None = None,
    packages: Iterable[str] | None = None,
) -> list[str]:
    """Arguments that remove stale lock files, old downloads and old versions."""
    return _build("cleanup", options, packages)


def completions_args(subcommand: CompletionsSubcommand | None = None) -> list[str]:
    """Arguments that control linking of external tap shell completions."""
    return _build("completions", None if subcommand is None else [subcommand])


def desc_args(
    options: Iterable[DescOption] | None = None, query: Iterable[str] | None = None
) -> list[str]:
    """Arguments that show a formula's name and one-line description."""
    return _build("desc", options, query)


def doctor_args(options: Iterable[DoctorOption] | None = None) -> list[str]:
    """Arguments that check the system for potential problems."""
    return _build("doctor", options)


def home_args(
    option: HomeOption | None = None, query: Iterable[str] | None = None
) -> list[str]:
    """Arguments that open a formula's, a cask's or Homebrew's homepage."""
    return _build("home", None if option is None else [option], query)


def info_args(
    options: Iterable[InfoOption] | None = None, query: Iterable[str] | None = None
) -> list[str]:
    """Arguments that show statistics, or a summary of the given packages."""
    return _build("info", options, query)


@dataclass(frozen=True)
class Homebrew(PackageManager):
    """Package manager backed by the ``brew`` program."""

    program: str = HOMEBREW_ALIAS

    def _run(self, args: list[str], description: str) -> str:
        try:
            completed = command(self.program, args)
        except OSError as exc:
            raise PackageManagerError(f"failed to execute command {description}: {exc}") from exc
        return completed.stdout

    def _spawn(self, stop: threading.Event, args: list[str]) -> SpawnedCommandOutput:
        try:
            child = spawn_command(self.program, args)
        except OSError as exc:
            raise PackageManagerError(str(exc)) from exc
        output = handle_spawned_command(stop, child)
        if output is None:
            raise PackageManagerError("could not execute command")
        return output

    def alias(self) -> str:
        return self.program

    def filter_packages(
        self, stop: threading.Event, locality: PackageLocality, pattern: str
    ) -> list[str]:
        if locality is PackageLocality.LOCAL:
            installed = self._run(["list"], "brew list").split("\n")
            return fuzz(installed, pattern, _LOCAL_MATCH_THRESHOLD)
        found = self._run(["search", pattern], "brew search")
        return [item for item in found.split("\n") if item]

    def package_manager_config(self, stop: threading.Event) -> str:
        return self._run(["config"], "brew config")

    def package_info(self, stop: threading.Event, package_name: str) -> str:
        output = self._spawn(stop, info_args([InfoOption.JSON], [package_name]))
        return output.out or ""

    def check_health(self, stop: threading.Event) -> str:
        return self._spawn(stop, doctor_args()).err or ""

    def clean(self, stop: threading.Event) -> str:
        return self._run(cleanup_args(), "brew cleanup")

    def install_package(self, stop: threading.Event, package_name: str) -> None:
        self._spawn(stop, install_args([package_name]))

    def update_package(self, stop: threading.Event, package_name: str) -> None:
        self._spawn(stop, upgrade_args([package_name]))

    def uninstall_package(self, stop: threading.Event, package_name: str) -> None:
        self._spawn(stop, uninstall_args([package_name]))