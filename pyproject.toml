[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procsim"
version = "0.1.0"
description = "Simulate a parent process that spawns, feeds and terminates child processes on a timeline, synchronised with semaphores and shared memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["processes", "semaphores", "shared-memory", "simulation", "ipc", "multiprocessing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
procsim = "procsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["procsim"]

[tool.pytest.ini_options]
addopts = "-ra"
