[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zerobotkit"
version = "0.1.0"
description = "Protocol-independent building blocks for chat-bot plugins: request handling, drift bottles, emoji mixing, gacha draws, fortune slips, song guessing and more"
requires-python = ">=3.10"
keywords = ["chatbot", "bot", "plugins", "gacha", "emoji", "fortune", "base16384"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zerobotkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
