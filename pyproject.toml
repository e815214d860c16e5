[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neovide"
version = "0.1.0"
description = "Editor core of a graphical Neovim front-end: command-line settings, redraw event parsing and the editor grid state."
requires-python = ">=3.10"
dependencies = [
    "regex",
]
keywords = ["neovim", "nvim", "gui", "editor", "redraw", "grid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["neovide"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
