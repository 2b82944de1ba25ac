[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "homegoing"
version = "0.1.1"
description = "A terminal interface for linking and unlinking dotfiles described in a TOML file"
requires-python = ">=3.11"
dependencies = [
    "blessed",
]
keywords = ["dotfiles", "symlink", "tui", "terminal", "configuration", "toml"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
homegoing = "homegoing.app:main"

[tool.hatch.build.targets.wheel]
packages = ["homegoing"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
