"""Exception hierarchy raised by the daemon and its helpers."""

from __future__ import annotations

from typing import Any


class DaemonError(Exception):
    """Base class of every error raised by the daemon."""

    @classmethod
    def ibc_err(cls, msg: Any) -> "IbcError":
        """Build an IBC error from anything that can be turned into text."""
        return IbcError(str(msg))


class Bech32DecodeError(DaemonError):
    """A bech32 string or prefix could not be decoded or encoded."""

    def __init__(self) -> None:
        super().__init__("Bech32 Decode Error")


class Bech32DecodeExpandedError(DaemonError):
    """A bech32 key had the wrong prefix or the wrong length."""

    def __init__(self, hrp: str, length: int, wanted_prefix: str, wanted_length: int) -> None:
        self.hrp = hrp
        self.length = length
        self.wanted_prefix = wanted_prefix
        self.wanted_length = wanted_length
        super().__init__(
            f"Bech32 Decode Error: Key Failed prefix {hrp} or length {length} "
            f"Wanted:{wanted_prefix}/{wanted_length}"
        )


class ConversionError(DaemonError):
    """A key string could not be turned into a public key."""

    def __init__(self, key: str, source: Any) -> None:
        self.key = key
        self.source = source
        super().__init__(f"Unable to convert into public key `{key}`: {source}")


class ImplementationError(DaemonError):
    """A component needed for the operation is missing."""

    def __init__(self) -> None:
        super().__init__("Bad Implementation. Missing Component")


class ConversionSecp256k1Error(DaemonError):
    """An 83-character key lacked the secp256k1 prefix."""

    def __init__(self) -> None:
        super().__init__("83 length-missing SECP256K1 prefix")


class ConversionEd25519Error(DaemonError):
    """An 82-character key lacked the ed25519 prefix."""

    def __init__(self) -> None:
        super().__init__("82 length-missing ED25519 prefix")


class ConversionLengthError(DaemonError):
    """A tendermint key had neither of the accepted lengths."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Expected Key length of 82 or 83 length was {length}")


class ConversionLengthEd25519HexError(DaemonError):
    """A tendermint hex address was not 40 characters long."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Expected Key length of 40 length was {length}")


class ConversionPrefixEd25519Error(DaemonError):
    """A prefixed ed25519 key did not have the expected size."""

    def __init__(self, length: int, hex_key: str) -> None:
        self.length = length
        self.hex_key = hex_key
        super().__init__(
            "Expected ED25519 key of length 32 with a BECH32 ED25519 prefix of 5 chars"
            f" - Len {length} - Hex {hex_key}"
        )


class _TransparentError(DaemonError):
    """Error whose message is that of the underlying failure."""

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        super().__init__(str(detail))


class Secp256k1Error(_TransparentError):
    """A secp256k1 key, message or signature was invalid."""


class Ed25519Error(_TransparentError):
    """An ed25519 key was invalid."""


class DecodeError(_TransparentError):
    """Base64 data could not be decoded."""


class HexError(_TransparentError):
    """Hex data could not be decoded."""


class CoinParseError(DaemonError):
    """A string could not be parsed into a coin."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Can't parse `{text}` into a coin")


class TxResultError(DaemonError):
    """Submitting a transaction returned an error code."""

    def __init__(self, code: int, codespace: str, raw_log: str) -> None:
        self.code = code
        self.codespace = codespace
        self.raw_log = raw_log
        super().__init__(f"TX submit returned `{code}` - {codespace} '{raw_log}'")


class TxNotFoundError(DaemonError):
    """A transaction could not be found after the allowed attempts."""

    def __init__(self, txhash: str, attempts: int) -> None:
        self.txhash = txhash
        self.attempts = attempts
        super().__init__(f"Transaction {txhash} not found after {attempts} attempts")


class StdErr(DaemonError):
    """Generic error carrying a free-form message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Generic Error {message}")


class CannotConnectGrpcError(DaemonError):
    """None of the configured gRPC endpoints could be reached."""

    def __init__(self) -> None:
        super().__init__("Can not connect to any grpc endpoint that was provided.")


class GrpcListIsEmptyError(DaemonError):
    """No gRPC endpoint was configured."""

    def __init__(self) -> None:
        super().__init__("The list of grpc endpoints is empty")


class TxFailedError(DaemonError):
    """A transaction was executed but failed."""

    def __init__(self, code: int, reason: str) -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"tx failed: {reason} with code {code}")


class IbcError(DaemonError):
    """An error related to IBC."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"ibc error: {message}")


class NotEnoughBalanceError(DaemonError):
    """The sender's balance does not cover what is needed."""

    def __init__(self, expected: Any, current: Any) -> None:
        self.expected = expected
        self.current = current
        super().__init__(f"Not enough balance, expected {expected}, found {current}")


class OpenFileError(DaemonError):
    """A file could not be opened."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Error opening file {filename},err: ({reason})")


class StateAlreadyLockedError(DaemonError):
    """The state file is locked by someone else."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"State file {path} already locked, use another state file, clone daemon "
            "which holds the lock, or use `state` method of Builder"
        )


class JsonError(DaemonError):
    """JSON could not be read or written."""

    def __init__(self, detail: Any = None) -> None:
        self.detail = detail
        super().__init__("JSON Conversion Error")