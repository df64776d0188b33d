[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bytekernels"
version = "0.1.0"
description = "Classic CPU benchmark kernels: bitfield runs, Huffman coding, the IDEA cipher, a back-propagation neural net, Fourier and LU solving, and shortest paths."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "bitfield",
    "huffman",
    "idea",
    "neural-network",
    "fourier",
    "lu-decomposition",
    "dijkstra",
]
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
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bytekernels-dijkstra = "bytekernels.dijkstra:main"

[tool.hatch.build.targets.wheel]
packages = ["bytekernels"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
