[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zbplugins"
version = "0.1.0"
description = "Chat-bot plugin logic: tarot, sign-in scores, sleep tracking, confession wall, voice quotations and more"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["chatbot", "plugins", "tarot", "sign-in", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zbplugins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
