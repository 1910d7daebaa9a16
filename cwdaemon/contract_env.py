"""A small in-memory execution environment for contract entry points."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from cwdaemon.coins import Coin

CONTRACT_INFO_KEY = "contract_info"


class ContractStdError(Exception):
    """Generic failure raised by contract code or its storage."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Generic error: {message}")


@dataclass
class Response:
    """Result of a contract entry point: attributes and sub-messages."""

    attributes: List[Tuple[str, str]] = field(default_factory=list)
    messages: List[Any] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> "Response":
        """Append an attribute and return the response for chaining."""
        self.attributes.append((str(key), str(value)))
        return self


@dataclass(frozen=True)
class MessageInfo:
    """Who sent a message and which funds came with it."""

    sender: str
    funds: Tuple[Coin, ...] = ()


class Storage:
    """Key-value contract storage; values are copied in and out."""

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        self._items[key] = copy.deepcopy(value)

    def load(self, key: str) -> Any:
        """Return the value under ``key``; raise if there is none."""
        if key not in self._items:
            raise ContractStdError(f"{key} not found")
        return copy.deepcopy(self._items[key])

    def may_load(self, key: str) -> Optional[Any]:
        """Return the value under ``key``, or ``None``."""
        return copy.deepcopy(self._items.get(key))

    def update(self, key: str, action: Callable[[Any], Any]) -> Any:
        """Load, transform with ``action`` and save; nothing is saved if it raises."""
        new_value = action(self.load(key))
        self.save(key, new_value)
        return copy.deepcopy(new_value)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


def set_contract_version(storage: Storage, contract: str, version: str) -> None:
    """Record the contract's name and version."""
    storage.save(CONTRACT_INFO_KEY, {"contract": str(contract), "version": str(version)})


def get_contract_version(storage: Storage) -> Dict[str, str]:
    """Return the recorded contract name and version."""
    return storage.load(CONTRACT_INFO_KEY)