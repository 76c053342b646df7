[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audius_tui"
version = "0.1.0"
description = "Terminal music player for browsing and streaming Audius tracks"
requires-python = ">=3.10"
keywords = ["audius", "music", "player", "terminal", "tui", "mp3"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players :: MP3",
]
dependencies = [
    "requests",
    "pygame",
    "rich",
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
audius-tui = "audius_tui.app:main"

[tool.hatch.build.targets.wheel]
packages = ["audius_tui"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
