[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "teeshard"
version = "0.1.0"
description = "Building blocks for a TEE-backed sharded cross-chain protocol: data model, configuration, messaging and liveness verification"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "tee",
    "sharding",
    "cross-chain",
    "atomic-swap",
    "liveness",
    "ed25519",
    "asyncio",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
teeshard = "teeshard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["teeshard"]

[tool.hatch.build.targets.sdist]
include = [
    "teeshard",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
