[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilescan"
version = "0.1.0"
description = "Tiled two-dimensional prefix sums computed across a simulated grid of cooperating ranks"
requires-python = ">=3.10"
dependencies = []
keywords = ["prefix-sum", "scan", "summed-area-table", "tiling", "parallel", "message-passing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tilescan = "tilescan.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tilescan"]

[tool.pytest.ini_options]
addopts = "-ra"
