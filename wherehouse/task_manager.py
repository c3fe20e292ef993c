"""Background workers that run package-manager operations and store the results."""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum, auto
from functools import partial

from wherehouse.package_manager import Command, PackageManager, PackageManagerError
from wherehouse.state import State

Job = Callable[[threading.Event], None]


class TaskEvent(Enum):
    """Signals sent to a running task."""

    STOP = auto()


class Worker:
    """A thread running one job, with an event that asks the job to stop.

    A worker made without a job holds no thread; it only records that the
    command was requested.
    """

    def __init__(self, job: Job | None = None) -> None:
        self.stop_event = threading.Event()
        self.thread: threading.Thread | None = None
        if job is not None:
            self.thread = threading.Thread(target=job, args=(self.stop_event,), daemon=True)
            self.thread.start()

    def stop(self) -> None:
        """Ask the job to stop; it may still be finishing when this returns."""
        self.stop_event.set()


class TaskManager:
    """Runs at most one current worker per command, stopping the one it replaces."""

    def __init__(self, state: State, package_manager: PackageManager) -> None:
        self.state = state
        self.package_manager = package_manager
        self.pool: dict[Command, Worker] = {}
        self._lock = threading.Lock()

    def execute(self, command: Command, update_context: bool) -> None:
        """Start ``command`` in the background, stopping an earlier run of it."""
        jobs: dict[Command, Callable[[threading.Event, bool], None]] = {
            Command.FILTER_PACKAGES: self._filter_packages,
            Command.PACKAGE_INFO: self._package_info,
            Command.CHECK_HEALTH: self._check_health,
            Command.CONFIG: self._config,
        }
        job = jobs.get(command)
        worker = Worker(None if job is None else partial(_bind_flag, job, update_context))
        with self._lock:
            previous = self.pool.get(command)
            self.pool[command] = worker
        if previous is not None:
            previous.stop()

    def _filter_packages(self, stop: threading.Event, update_context: bool) -> None:
        state = self.state
        with state.lock:
            query = state.search.query
            source = state.search.source
        try:
            results = self.package_manager.filter_packages(stop, source, query)
        except PackageManagerError:
            results = []
        with state.lock:
            state.search.results = results

    def _package_info(self, stop: threading.Event, update_context: bool) -> None:
        state = self.state
        with state.lock:
            search = state.search
            in_range = 0 <= search.selected_result < len(search.results)
            package_name = search.results[search.selected_result] if in_range else ""
        try:
            output = self.package_manager.package_info(stop, package_name)
        except PackageManagerError:
            output = ""
        with state.lock:
            if update_context:
                state.update_context(output)
            state.search.selected_result_info = output

    def _check_health(self, stop: threading.Event, update_context: bool) -> None:
        try:
            output = self.package_manager.check_health(stop)
        except PackageManagerError:
            output = ""
        with self.state.lock:
            if update_context:
                self.state.update_context(output)
            self.state.healthcheck_results = output

    def _config(self, stop: threading.Event, update_context: bool) -> None:
        try:
            output = self.package_manager.package_manager_config(stop)
        except PackageManagerError:
            output = ""
        with self.state.lock:
            if update_context:
                self.state.update_context(output)
            self.state.config.system_config = output


def _bind_flag(
    job: Callable[[threading.Event, bool], None], update_context: bool, stop: threading.Event
) -> None:
    job(stop, update_context)