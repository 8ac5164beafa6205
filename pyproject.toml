[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "drawguess"
version = "0.1.0"
description = "A networked draw-and-guess party game: one player draws a secret word, the others guess it in chat."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "drawing", "guessing", "multiplayer", "tcp", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
drawguess = "drawguess.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["drawguess"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
