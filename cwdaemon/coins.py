"""Coin conversion, upload access rules and wasm compression for transactions."""

from __future__ import annotations

import gzip
import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Tuple, Union

from cwdaemon import bech32
from cwdaemon.errors import CoinParseError, StdErr

INSTANTIATE_2_TYPE_URL = "/cosmwasm.wasm.v1.MsgInstantiateContract2"

_U128_LIMIT = 2**128
_DENOM_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789/:._-"
)
_DENOM_MIN_LENGTH = 3
_DENOM_MAX_LENGTH = 128
_MAX_ADDRESS_BYTES = 255
_GZIP_LEVEL = 6


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination, as used by contracts."""

    amount: int
    denom: str

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class ProtoCoin:
    """A coin as carried in protobuf messages, with a decimal string amount."""

    amount: str
    denom: str


class AccessType(IntEnum):
    """Who may instantiate an uploaded code."""

    UNSPECIFIED = 0
    NOBODY = 1
    EVERYBODY = 3
    ANY_OF_ADDRESSES = 4


@dataclass(frozen=True)
class AccessConfig:
    """Instantiation permission together with the addresses it names."""

    permission: AccessType
    addresses: Tuple[str, ...] = field(default=())


def _validate_denom(denom: str) -> str:
    if (
        not isinstance(denom, str)
        or not _DENOM_MIN_LENGTH <= len(denom) <= _DENOM_MAX_LENGTH
        or any(char not in _DENOM_CHARS for char in denom)
    ):
        raise CoinParseError(str(denom))
    return denom


def _validate_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount < _U128_LIMIT:
        raise CoinParseError(str(amount))
    return amount


def parse_cw_coins(coins: Iterable[Coin]) -> List[Coin]:
    """Validate contract coins for use in a transaction message."""
    return [Coin(_validate_amount(coin.amount), _validate_denom(coin.denom)) for coin in coins]


def proto_parse_cw_coins(coins: Iterable[Coin]) -> List[ProtoCoin]:
    """Turn contract coins into protobuf coins with string amounts."""
    return [ProtoCoin(amount=str(coin.amount), denom=coin.denom) for coin in coins]


def _parse_account_id(address: str) -> str:
    try:
        _, data = bech32.decode(address)
    except ValueError as exc:
        raise StdErr(f"invalid account id `{address}`: {exc}") from exc
    if len(data) > _MAX_ADDRESS_BYTES:
        raise StdErr(f"invalid account id `{address}`: address too long")
    return address


def access_config_to_cosmrs(access_config: AccessConfig) -> AccessConfig:
    """Normalise an access config, checking that every named address is valid."""
    if access_config.permission is AccessType.ANY_OF_ADDRESSES:
        addresses = tuple(_parse_account_id(address) for address in access_config.addresses)
        return AccessConfig(AccessType.ANY_OF_ADDRESSES, addresses)
    return AccessConfig(AccessType(access_config.permission), ())


def compress_wasm(path: Union[str, "os.PathLike[str]"]) -> bytes:
    """Read a wasm file and return its gzip-compressed bytes."""
    with open(path, "rb") as handle:
        contents = handle.read()
    return gzip.compress(contents, compresslevel=_GZIP_LEVEL, mtime=0)