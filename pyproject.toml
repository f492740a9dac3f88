[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codexion"
version = "0.1.0"
description = "Threaded simulation of coders sharing dongles under FIFO or EDF scheduling"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "concurrency", "scheduling", "edf", "fifo", "threads"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
codexion = "codexion.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["codexion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
