"""Bech32 encoding and decoding of byte strings.

Decoding accepts both the original bech32 checksum and bech32m, and
encoding always produces lower-case bech32.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
SEPARATOR = "1"
CHECKSUM_LENGTH = 6
MAX_HRP_LENGTH = 83
MAX_CODE_LENGTH = 1023

_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> List[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _is_mixed_case(text: str) -> bool:
    return text.lower() != text and text.upper() != text


def _validate_hrp(hrp: str) -> str:
    if not 1 <= len(hrp) <= MAX_HRP_LENGTH:
        raise ValueError(f"invalid human-readable part length: {len(hrp)}")
    if any(not 33 <= ord(char) <= 126 for char in hrp):
        raise ValueError("invalid character in human-readable part")
    if _is_mixed_case(hrp):
        raise ValueError("human-readable part has mixed case")
    return hrp.lower()


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> List[int]:
    accumulator = 0
    bits = 0
    result: List[int] = []
    mask = (1 << to_bits) - 1
    for value in data:
        accumulator = (accumulator << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & mask)
    if pad and bits:
        result.append((accumulator << (to_bits - bits)) & mask)
    return result


def encode(hrp: str, data: bytes) -> str:
    """Encode ``data`` under the prefix ``hrp`` with a bech32 checksum."""
    hrp = _validate_hrp(hrp)
    values = _convert_bits(bytes(data), 8, 5, pad=True)
    if len(values) + CHECKSUM_LENGTH > MAX_CODE_LENGTH:
        raise ValueError("encoded data is too long")
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * CHECKSUM_LENGTH) ^ _BECH32_CONST
    checksum = [(polymod >> 5 * (CHECKSUM_LENGTH - 1 - i)) & 31 for i in range(CHECKSUM_LENGTH)]
    return hrp + SEPARATOR + "".join(CHARSET[value] for value in values + checksum)


def decode(text: str) -> Tuple[str, bytes]:
    """Split a bech32 or bech32m string into its prefix and its bytes."""
    if _is_mixed_case(text):
        raise ValueError("string has mixed case")
    lowered = text.lower()
    position = lowered.rfind(SEPARATOR)
    if position < 0:
        raise ValueError("missing separator")
    hrp = _validate_hrp(lowered[:position]) if position else _validate_hrp("")
    data_part = lowered[position + 1 :]
    if len(data_part) < CHECKSUM_LENGTH:
        raise ValueError("data part is too short to hold a checksum")
    if len(data_part) > MAX_CODE_LENGTH:
        raise ValueError("data part is too long")
    try:
        values = [CHARSET.index(char) for char in data_part]
    except ValueError:
        raise ValueError("invalid character in data part") from None
    if _polymod(_hrp_expand(hrp) + values) not in (_BECH32_CONST, _BECH32M_CONST):
        raise ValueError("invalid checksum")
    return hrp, bytes(_convert_bits(values[:-CHECKSUM_LENGTH], 5, 8, pad=False))