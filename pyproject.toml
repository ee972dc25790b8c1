[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "relaytourney"
version = "1.0.0"
description = "Run a timed knockout race tournament (heats, quarter-finals, semi-finals, final) stored in a JSON file"
requires-python = ">=3.10"
dependencies = []
keywords = ["tournament", "race", "timing", "knockout", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
relaytourney = "relaytourney.session:main"

[tool.setuptools.packages.find]
include = ["relaytourney*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
