[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yume6502"
version = "0.1.0"
description = "A cycle-counting MOS 6502 CPU core in the style of the NES Ricoh 2A03"
requires-python = ">=3.10"
dependencies = []
keywords = ["6502", "emulator", "nes", "cpu", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yume6502"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
