# wherehouse

A small terminal user interface for Homebrew. It lets you search installed
or remote packages, read package details, view the Homebrew configuration
and run a health check, all from the keyboard.

## Requirements

- Python 3.10 or later
- `brew` available on your `PATH`
- A terminal supported by Python's `curses` module

## Installation

```
pip install .
```

## Usage

Start the interface:

```
wherehouse
```

The screen is split into a sidebar on the left (40% of the width) holding
three numbered panes, a context pane on the right that shows details for
whatever you are looking at, and a one-line status bar at the bottom. The
status bar shows the input mode (and, while a search pane has focus, the
search source `LOCAL` or `REMOTE`) on the left, and the application and
package-manager names on the right.

At start-up `brew config` is run in the background; its report is what the
info pane shows in the context pane. The interface starts with the search
input pane focused, in insert mode, searching installed packages.

### Keys

Pane switching works in normal mode only:

| Key | Action |
| --- | --- |
| `1` | Focus the info pane and show the Homebrew configuration |
| `2` | Focus the search input pane and clear the context pane |
| `3` | Focus the search results pane and show the selected package's details |
| `q` | Quit |

In the info pane (normal mode):

| Key | Action |
| --- | --- |
| `I` | Show the Homebrew configuration |
| `C` | Run `brew doctor` and show what it reports |

In the search input pane:

| Key | Action |
| --- | --- |
| `i` | Enter insert mode (normal mode) |
| `l` | Search installed packages (normal mode) |
| `r` | Search remote packages (normal mode) |
| any character | Add it to the query (insert mode) |
| Backspace | Remove the last character of the query (insert mode) |
| Esc | Return to normal mode (insert mode) |

After a key press in the search input pane the search is run again once no
key has been pressed for 0.3 seconds.

In the search results pane (normal mode):

| Key | Action |
| --- | --- |
| `j` | Select the next result (wraps to the first) |
| `k` | Select the previous result |

Selecting a result runs `brew info --json` for it and shows the output in
the context pane.

A local search runs `brew list` and keeps the installed package names whose
edit distance to the query is less than 3. A remote search passes the query
to `brew search` and shows every non-empty line it prints.

## Using it as a library

- `wherehouse.fuzzy.levenshtein_distance(s, t)` and
  `wherehouse.fuzzy.fuzz(word_list, query, threshold)` do the name matching.
- `wherehouse.homebrew.Homebrew` implements the
  `wherehouse.package_manager.PackageManager` interface: `filter_packages`,
  `package_manager_config`, `package_info`, `check_health`, `clean`,
  `install_package`, `update_package` and `uninstall_package`. Each takes a
  `threading.Event`; setting it kills a running command. Failures raise
  `PackageManagerError`.
- `wherehouse.homebrew` also has argument builders such as `install_args`,
  `cleanup_args` and `info_args`, with enums for the brew flags they accept.

## What it does not do

The interface only searches and shows information. It has no keys for
installing, upgrading, uninstalling or cleaning packages; those operations
exist only on the `Homebrew` class. Homebrew is the only supported package
manager.

## Logging

Logs are written to `.data/wherehouse.log` in the current directory; the
file is replaced on each start. The level comes from `WHEREHOUSE_LOGLEVEL`,
given either as a level (`debug`, `info`, ...) or as `wherehouse=<level>`,
and defaults to `info`.

## Running the tests

```
pip install ".[test]"
pytest
```