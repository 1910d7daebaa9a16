"""Public keys and the bech32 addresses derived from them."""

from __future__ import annotations

import binascii
import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from Crypto.Hash import RIPEMD160

from cwdaemon import bech32
from cwdaemon.errors import (
    Bech32DecodeError,
    Bech32DecodeExpandedError,
    ConversionEd25519Error,
    ConversionError,
    ConversionLengthEd25519HexError,
    ConversionLengthError,
    ConversionPrefixEd25519Error,
    ConversionSecp256k1Error,
    Ed25519Error,
    HexError,
    ImplementationError,
)

logger = logging.getLogger(__name__)

BECH32_PUBKEY_DATA_PREFIX_SECP256K1 = bytes([0xEB, 0x5A, 0xE9, 0x87, 0x21])
BECH32_PUBKEY_DATA_PREFIX_ED25519 = bytes([0x16, 0x24, 0xDE, 0x64, 0x20])

_ED25519_KEY_LENGTH = 32
_P = 2**255 - 19
_D = -121665 * pow(121666, _P - 2, _P) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)


def _is_valid_ed25519_point(data: bytes) -> bool:
    """Whether the compressed Edwards point decompresses onto the curve."""
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    if x2 == 0:
        return True
    x = pow(x2, (_P + 3) // 8, _P)
    if x * x % _P != x2:
        x = x * _SQRT_M1 % _P
    return x * x % _P == x2


def _hex_decode(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise HexError(exc) from exc


def _key_to_addr(data: bytes, prefix: str) -> str:
    try:
        return bech32.encode(prefix, data)
    except ValueError as exc:
        raise Bech32DecodeError() from exc


def _check_prefix_and_length(prefix: str, data: str, length: int) -> bytes:
    try:
        hrp, decoded = bech32.decode(data)
    except ValueError as exc:
        raise ConversionError(data, exc) from exc
    if hrp == prefix and len(data) == length:
        return decoded
    raise Bech32DecodeExpandedError(hrp, len(data), prefix, length)


@dataclass(frozen=True)
class PublicKey:
    """Key material from which cosmos-style addresses are derived."""

    raw_pub_key: Optional[bytes] = None
    raw_address: Optional[bytes] = None

    @classmethod
    def from_public_key(cls, bpub: bytes) -> "PublicKey":
        """Build from a compressed secp256k1 public key."""
        bpub = bytes(bpub)
        return cls(
            raw_pub_key=cls.pubkey_from_public_key(bpub),
            raw_address=cls.address_from_public_key(bpub),
        )

    @classmethod
    def from_account(cls, acc_address: str, prefix: str) -> "PublicKey":
        """Build from a 44-character account address with the given prefix."""
        return cls(raw_address=_check_prefix_and_length(prefix, acc_address, 44))

    @classmethod
    def from_tendermint_key(cls, tendermint_public_key: str) -> "PublicKey":
        """Build from a ``terravalconspub`` key of 83 (secp256k1) or 82 (ed25519) characters."""
        length = len(tendermint_public_key)
        if length == 83:
            decoded = _check_prefix_and_length("terravalconspub", tendermint_public_key, length)
            logger.debug("%s", decoded.hex())
            if not decoded.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
                raise ConversionSecp256k1Error()
            public_key = cls.public_key_from_pubkey(decoded)
            return cls(
                raw_pub_key=decoded,
                raw_address=cls.address_from_public_key(public_key),
            )
        if length == 82:
            decoded = _check_prefix_and_length("terravalconspub", tendermint_public_key, length)
            logger.error("ED25519 public keys are not fully supported")
            if not decoded.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
                raise ConversionEd25519Error()
            return cls(
                raw_pub_key=decoded,
                raw_address=cls.address_from_public_ed25519_key(decoded),
            )
        raise ConversionLengthError(length)

    @classmethod
    def from_tendermint_address(cls, tendermint_hex_address: str) -> "PublicKey":
        """Build from a 40-character hex tendermint address."""
        length = len(tendermint_hex_address)
        if length != 40:
            raise ConversionLengthEd25519HexError(length)
        return cls(raw_address=_hex_decode(tendermint_hex_address))

    @classmethod
    def from_operator_address(cls, valoper_address: str) -> "PublicKey":
        """Build from a 51-character ``terravaloper`` operator address."""
        return cls(raw_address=_check_prefix_and_length("terravaloper", valoper_address, 51))

    @classmethod
    def from_raw_address(cls, raw_address: str) -> "PublicKey":
        """Build from a hex-encoded raw address."""
        return cls(raw_address=_hex_decode(raw_address))

    @staticmethod
    def pubkey_from_public_key(public_key: bytes) -> bytes:
        """Prefix a compressed secp256k1 key with its amino marker."""
        return BECH32_PUBKEY_DATA_PREFIX_SECP256K1 + bytes(public_key)

    @staticmethod
    def pubkey_from_ed25519_public_key(public_key: bytes) -> bytes:
        """Prefix an ed25519 key with its amino marker."""
        return BECH32_PUBKEY_DATA_PREFIX_ED25519 + bytes(public_key)

    @staticmethod
    def public_key_from_pubkey(pub_key: bytes) -> bytes:
        """Strip the amino marker from a prefixed key."""
        pub_key = bytes(pub_key)
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
            return pub_key[len(BECH32_PUBKEY_DATA_PREFIX_SECP256K1) :]
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
            key = pub_key[len(BECH32_PUBKEY_DATA_PREFIX_ED25519) :]
            if len(key) != _ED25519_KEY_LENGTH:
                raise Ed25519Error(f"invalid ed25519 key length {len(key)}")
            if not _is_valid_ed25519_point(key):
                raise Ed25519Error("invalid ed25519 public key")
            return key
        logger.error("pub key does not start with BECH32 PREFIX")
        raise Bech32DecodeError()

    @staticmethod
    def address_from_public_key(public_key: bytes) -> bytes:
        """RIPEMD-160 of the SHA-256 of a compressed public key."""
        sha = hashlib.sha256(bytes(public_key)).digest()
        return RIPEMD160.new(sha).digest()[:20]

    @staticmethod
    def address_from_public_ed25519_key(public_key: bytes) -> bytes:
        """First 20 bytes of the SHA-256 of a prefixed ed25519 key's body."""
        public_key = bytes(public_key)
        if len(public_key) != _ED25519_KEY_LENGTH + len(BECH32_PUBKEY_DATA_PREFIX_ED25519):
            raise ConversionPrefixEd25519Error(len(public_key), public_key.hex())
        logger.debug("address_from_public_ed25519_key public key - %s", public_key.hex())
        address = hashlib.sha256(public_key[5:]).digest()[:20]
        logger.debug("address_from_public_ed25519_key sha result - %s", address.hex())
        return address

    def _encode_address(self, prefix: str) -> str:
        if self.raw_address is None:
            raise ImplementationError()
        return _key_to_addr(self.raw_address, prefix)

    def _encode_pub_key(self, prefix: str) -> str:
        if self.raw_pub_key is None:
            raise ImplementationError()
        return _key_to_addr(self.raw_pub_key, prefix)

    def account(self, prefix: str) -> str:
        """The main account address."""
        return self._encode_address(prefix)

    def operator_address(self, prefix: str) -> str:
        """The validator operator address."""
        return self._encode_address(f"{prefix}valoper")

    def application_public_key(self, prefix: str) -> str:
        """The application public key."""
        return self._encode_pub_key(f"{prefix}pub")

    def operator_address_public_key(self, prefix: str) -> str:
        """The validator operator public key."""
        return self._encode_pub_key(f"{prefix}valoperpub")

    def tendermint(self, prefix: str) -> str:
        """The consensus address used to sign blocks."""
        return self.account(f"{prefix}valcons")

    def tendermint_pubkey(self, prefix: str) -> str:
        """The consensus public key."""
        return self._encode_pub_key(f"{prefix}valconspub")