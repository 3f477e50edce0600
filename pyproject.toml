[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "greatescape"
version = "0.1.0"
description = "Building blocks for a first-person raycasting game: tile worlds, textures, sprites, a software raycaster and simple UI widgets."
requires-python = ">=3.10"
keywords = ["game", "raycaster", "raycasting", "pygame", "first-person"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["greatescape"]

[tool.pytest.ini_options]
addopts = "-ra"
