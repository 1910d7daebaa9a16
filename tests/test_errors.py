import pytest

from cwdaemon import errors
from cwdaemon.errors import DaemonError


def test_ibc_err_builds_ibc_error():
    err = DaemonError.ibc_err("channel closed")
    assert isinstance(err, errors.IbcError)
    assert err.message == "channel closed"
    assert str(err) == "ibc error: channel closed"


def test_ibc_err_converts_to_text():
    err = DaemonError.ibc_err(42)
    assert err.message == "42"


def test_fixed_messages():
    assert str(errors.Bech32DecodeError()) == "Bech32 Decode Error"
    assert str(errors.ImplementationError()) == "Bad Implementation. Missing Component"
    assert str(errors.ConversionSecp256k1Error()) == "83 length-missing SECP256K1 prefix"
    assert str(errors.ConversionEd25519Error()) == "82 length-missing ED25519 prefix"
    assert (
        str(errors.CannotConnectGrpcError())
        == "Can not connect to any grpc endpoint that was provided."
    )
    assert str(errors.GrpcListIsEmptyError()) == "The list of grpc endpoints is empty"
    assert str(errors.JsonError()) == "JSON Conversion Error"


def test_length_errors_carry_length():
    err = errors.ConversionLengthError(81)
    assert err.length == 81
    assert str(err).endswith("was 81")
    hex_err = errors.ConversionLengthEd25519HexError(12)
    assert hex_err.length == 12
    assert str(hex_err).startswith("Expected Key length of 40 length was")


def test_expanded_bech32_error_fields():
    err = errors.Bech32DecodeExpandedError("cosmos", 45, "terra", 44)
    assert (err.hrp, err.length, err.wanted_prefix, err.wanted_length) == ("cosmos", 45, "terra", 44)
    assert "cosmos" in str(err) and "terra/44" in str(err)


def test_transparent_errors_use_detail_message():
    for cls in (errors.Secp256k1Error, errors.Ed25519Error, errors.DecodeError, errors.HexError):
        err = cls(ValueError("bad input"))
        assert str(err) == "bad input"
        assert isinstance(err.detail, ValueError)


def test_tx_errors_keep_fields():
    err = errors.TxFailedError(code=5, reason="out of gas")
    assert err.code == 5
    assert err.reason == "out of gas"
    assert "out of gas" in str(err)
    nf = errors.TxNotFoundError("ABC", 50)
    assert nf.txhash == "ABC" and nf.attempts == 50


def test_open_file_and_lock_errors():
    err = errors.OpenFileError("state.json", "missing")
    assert err.filename == "state.json"
    assert "state.json" in str(err) and "missing" in str(err)
    lock = errors.StateAlreadyLockedError("state.json")
    assert lock.path == "state.json"
    assert str(lock).startswith("State file state.json already locked")


@pytest.mark.parametrize(
    "err, fragments",
    [
        (
            errors.StdErr("Unknown account type returned from QueryAccountRequest"),
            ["Unknown account type returned from QueryAccountRequest"],
        ),
        (
            errors.NotEnoughBalanceError("10ujuno", "5ujuno"),
            ["Not enough balance", "10ujuno", "5ujuno"],
        ),
        (errors.TxFailedError(code=5, reason="out of gas"), ["out of gas"]),
        (errors.OpenFileError("state.json", "missing"), ["state.json", "missing"]),
    ],
)
def test_all_errors_are_daemon_errors(err, fragments):
    assert isinstance(err, DaemonError)
    text = str(err)
    for fragment in fragments:
        assert fragment in text


def test_not_enough_balance_message_start():
    err = errors.NotEnoughBalanceError("10ujuno", "5ujuno")
    assert str(err).startswith("Not enough balance")


def test_std_err_message():
    err = errors.StdErr("boom")
    assert err.message == "boom"
    assert "boom" in str(err)