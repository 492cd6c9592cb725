[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wordvm"
version = "0.1.0"
description = "A small signed 16-bit word virtual machine with addressing modes, a register file and a text bitmap view of memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual machine", "emulator", "cpu", "interpreter", "16-bit"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wordvm = "wordvm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["wordvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
