[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wherehouse"
version = "0.1.0"
description = "A terminal user interface for searching and inspecting Homebrew packages"
requires-python = ">=3.10"
dependencies = []
keywords = ["homebrew", "brew", "package-manager", "tui", "curses", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wherehouse = "wherehouse.main:main"

[tool.hatch.build.targets.wheel]
packages = ["wherehouse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
