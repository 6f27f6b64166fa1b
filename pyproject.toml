[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hskine"
version = "0.1.0"
description = "Kinematics building blocks and a model store for tree-structured robot models"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "kinematics",
    "inverse kinematics",
    "forward kinematics",
    "adjacency matrix",
    "path tracing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hskine = "hskine.cli:main"
hskine-checkadj = "hskine.adjacency:main"

[tool.hatch.build.targets.wheel]
packages = ["hskine"]

[tool.hatch.build.targets.sdist]
include = ["hskine", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
