[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuiapps"
version = "0.1.0"
description = "Small terminal user interface applications: counters, a JSON pair editor and a stopwatch"
requires-python = ">=3.10"
dependencies = [
    "blessed",
]
keywords = ["terminal", "tui", "console", "counter", "stopwatch", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
tuiapps-hello = "tuiapps.hello:main"
tuiapps-counter-basic = "tuiapps.counter_basic:main"
tuiapps-counter-checked = "tuiapps.counter_checked:main"
tuiapps-json-editor = "tuiapps.json_editor:main"
tuiapps-counter = "tuiapps.counter_app:main"
tuiapps-counter-async = "tuiapps.counter_async:main"
tuiapps-stopwatch = "tuiapps.stopwatch:main"

[tool.hatch.build.targets.wheel]
packages = ["tuiapps"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
