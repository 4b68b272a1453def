[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clipcat"
version = "0.1.0"
description = "Clipboard history building blocks: clip storage, persistent history, editor support, finder I/O and configuration"
requires-python = ">=3.11"
keywords = ["clipboard", "clipboard-manager", "history", "primary-selection", "rofi", "dmenu", "fzf"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
    "Typing :: Typed",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["clipcat"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
