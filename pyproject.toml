[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wowstudio"
version = "0.1.0"
description = "Building blocks for a game-world editing toolkit: string hashing, memory-mapped files, a thread-safe queue, entity components, a window manager, a skyline rectangle packer and a text-editing engine."
requires-python = ">=3.10"
dependencies = []
keywords = ["hashing", "mmap", "queue", "rectangle-packing", "text-editing", "undo", "components"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wowstudio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
