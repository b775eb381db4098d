[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "comtool"
version = "0.1.0"
description = "Building blocks for a serial port assistant: line settings, configuration, read buffering and error texts"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "uart", "com port", "settings", "configuration"]
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
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["comtool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
