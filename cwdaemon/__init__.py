"""Cosmos keys and bech32, signature checks, locked JSON state files, coin helpers and in-memory reference contracts."""

__version__ = "0.1.0"

__all__ = [
    "bech32",
    "coins",
    "contract_env",
    "counter",
    "env",
    "errors",
    "json_lock",
    "mock_contract",
    "mock_contract_u64",
    "public_key",
    "signature",
]