[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voterstake"
version = "0.1.0"
description = "Account state and rules for a token-staking registrar that grants voting weight, with an encoder for rewards program instructions."
requires-python = ">=3.10"
dependencies = []
keywords = ["staking", "governance", "dao", "lockup", "voting", "rewards"]
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
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voterstake"]

[tool.pytest.ini_options]
addopts = "-ra"
