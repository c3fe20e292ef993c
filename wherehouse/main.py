"""Entry point of the package browser."""

from __future__ import annotations

import argparse
import curses
import sys
import threading
import time
from collections.abc import Callable, Sequence
from typing import Any

from wherehouse.homebrew import Homebrew
from wherehouse.input_handler import InputHandler, Key
from wherehouse.logs import initialize_logging, logger
from wherehouse.package_manager import Command
from wherehouse.state import State
from wherehouse.task_manager import TaskManager
from wherehouse.tui import Tui, init, restore

_KEY_POLL_INTERVAL = 0.01
_INPUT_JOIN_TIMEOUT = 1.0


def _translate(char: Any) -> str | Key | None:
    """Map a curses key to what the input handler understands, or ``None``."""
    if char == "\x1b":
        return Key.ESCAPE
    if char in ("\x7f", "\b") or char == curses.KEY_BACKSPACE:
        return Key.BACKSPACE
    if isinstance(char, str) and char.isprintable():
        return char
    return None


def _key_reader(screen: Any, lock: threading.Lock) -> Callable[[float], str | Key | None]:
    """Build a reader that polls ``screen`` without holding up drawing."""

    def read_key(timeout: float) -> str | Key | None:
        deadline = time.monotonic() + timeout
        while True:
            with lock:
                try:
                    char = screen.get_wch()
                except curses.error:
                    char = None
            if char is not None:
                key = _translate(char)
                if key is not None:
                    return key
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            time.sleep(min(_KEY_POLL_INTERVAL, remaining))

    return read_key


def _run_input(
    handler: InputHandler, read_key: Callable[[float], str | Key | None], state: State
) -> None:
    try:
        handler.run(read_key)
    except Exception:
        logger.exception("input handler failed")
        state.should_quit.set()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interface and run it until the user quits."""
    parser = argparse.ArgumentParser(
        prog="wherehouse", description="Browse, search and inspect Homebrew packages."
    )
    parser.parse_args(argv)

    initialize_logging()
    logger.info("initialized logging")

    state = State()
    task_manager = TaskManager(state, Homebrew())
    task_manager.execute(Command.CONFIG, False)

    screen = init()
    try:
        screen.nodelay(True)
        lock = threading.Lock()
        handler = InputHandler(state, task_manager)
        input_thread = threading.Thread(
            target=_run_input,
            args=(handler, _key_reader(screen, lock), state),
            daemon=True,
        )
        input_thread.start()
        logger.info("Input handler thread initiated")

        Tui(state, lock).run(screen)
        input_thread.join(_INPUT_JOIN_TIMEOUT)
    finally:
        try:
            restore(screen)
        except (curses.error, OSError) as err:
            print(f"failed to restore terminal {err}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())