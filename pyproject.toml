[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "balboaspa"
version = "0.1.0"
description = "Protocol client and state model for Balboa spa controllers on an RS-485 bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["balboa", "spa", "hot tub", "rs485", "home automation", "thermostat"]
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
    "Topic :: Home Automation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["balboaspa"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
