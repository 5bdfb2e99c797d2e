[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphkit"
version = "0.1.0"
description = "Graph editor data model: nodes, ports, polyline edges, attributes, undo history and bounding-box transforms"
requires-python = ">=3.10"
keywords = ["graph", "editor", "nodes", "edges", "geometry", "undo"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["graphkit"]

[tool.pytest.ini_options]
addopts = "-ra"
