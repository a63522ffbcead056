[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "buda"
version = "0.1.0"
description = "Client for the Buda cryptocurrency exchange REST API"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["buda", "exchange", "cryptocurrency", "trading", "api", "client"]
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
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["buda"]

[tool.pytest.ini_options]
addopts = "-ra"
