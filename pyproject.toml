[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "multitest"
version = "0.20.0"
description = "Building blocks for testing smart contracts on a simulated chain"
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "smart-contracts", "blockchain", "simulation", "bech32"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["multitest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
