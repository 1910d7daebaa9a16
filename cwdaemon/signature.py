"""Verification of secp256k1 signatures over SHA-256 digests."""

from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from cwdaemon.errors import DecodeError, Secp256k1Error

_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_HALF_ORDER = _CURVE_ORDER // 2


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(exc) from exc


def verify(pub_key: str, signature: str, blob: str) -> None:
    """Check a compact base64 signature of ``blob`` against a base64 public key.

    Returns ``None`` when the signature is valid and raises otherwise.
    High-S signatures are rejected, as secp256k1 requires normalised ones.
    """
    public_bytes = _b64decode(pub_key)
    signature_bytes = _b64decode(signature)

    try:
        public = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_bytes)
    except ValueError as exc:
        raise Secp256k1Error("malformed public key") from exc

    if len(signature_bytes) != 64:
        raise Secp256k1Error("malformed signature")
    r = int.from_bytes(signature_bytes[:32], "big")
    s = int.from_bytes(signature_bytes[32:], "big")
    if not (0 < r < _CURVE_ORDER and 0 < s < _CURVE_ORDER):
        raise Secp256k1Error("malformed signature")
    if s > _HALF_ORDER:
        raise Secp256k1Error("signature failed verification")

    try:
        public.verify(
            encode_dss_signature(r, s),
            blob.encode("utf-8"),
            ec.ECDSA(hashes.SHA256()),
        )
    except InvalidSignature as exc:
        raise Secp256k1Error("signature failed verification") from exc