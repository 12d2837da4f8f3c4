[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textedit"
version = "0.1.0"
description = "Editing engine for multi-line and single-line text widgets: cursor, selection, keyboard handling and undo/redo"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "editor", "widget", "undo", "redo", "cursor", "selection", "immediate-mode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Widget Sets",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["textedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
