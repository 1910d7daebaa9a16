[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cwdaemon"
version = "0.1.0"
description = "Building blocks for CosmWasm chain tooling: Cosmos keys and bech32 addresses, secp256k1 signature checks, locked JSON state files, coin helpers and in-memory reference contracts"
requires-python = ">=3.10"
keywords = ["cosmos", "cosmwasm", "bech32", "secp256k1", "blockchain", "state"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
    "pycryptodome",
    "portalocker",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cwdaemon"]

[tool.pytest.ini_options]
addopts = "-ra"
