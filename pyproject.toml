[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pedit"
version = "0.0.3"
description = "A small modal terminal text editor with vim-like key bindings"
requires-python = ">=3.10"
keywords = ["editor", "terminal", "curses", "modal", "text"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pedit = "pedit.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["pedit"]

[tool.pytest.ini_options]
addopts = "-ra"
