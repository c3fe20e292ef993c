"""Terminal user interface for searching and inspecting Homebrew packages."""

__version__ = "0.1.0"