[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oraproto"
version = "0.1.0"
description = "Wire-protocol building blocks for Oracle database servers: TTC message codec, negotiation and network security"
requires-python = ">=3.10"
keywords = ["oracle", "ttc", "database", "protocol", "codec", "rowid"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["oraproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
