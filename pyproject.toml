[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deckframe"
version = "0.2.1"
description = "An asyncio framework for Stream Deck style button-grid applications"
requires-python = ">=3.10"
dependencies = [
    "pillow>=10.1",
]
keywords = ["streamdeck", "buttons", "ui", "framework", "asyncio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["deckframe"]

[tool.pytest.ini_options]
addopts = "-ra"
