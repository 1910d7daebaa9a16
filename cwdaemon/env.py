"""Environment variables read by the daemon, parsed in one place."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional, TypeVar

from cwdaemon.errors import StdErr

DEFAULT_TX_QUERY_RETRIES = 50

# Deprecated: use BLOCK_TIME_MIN_ENV_NAME.
MIN_BLOCK_SPEED_ENV_NAME = "CW_ORCH_MIN_BLOCK_SPEED"

BLOCK_TIME_MIN_ENV_NAME = "CW_ORCH_MIN_BLOCK_TIME"
BLOCK_TIME_MAX_ENV_NAME = "CW_ORCH_MAX_BLOCK_TIME"
STATE_FILE_ENV_NAME = "STATE_FILE"
GAS_BUFFER_ENV_NAME = "CW_ORCH_GAS_BUFFER"
MIN_GAS_ENV_NAME = "CW_ORCH_MIN_GAS"
MAX_TX_QUERIES_RETRY_ENV_NAME = "CW_ORCH_MAX_TX_QUERY_RETRIES"
WALLET_BALANCE_ASSERTION_ENV_NAME = "CW_ORCH_WALLET_BALANCE_ASSERTION"
LOGS_ACTIVATION_MESSAGE_ENV_NAME = "CW_ORCH_LOGS_ACTIVATION_MESSAGE"

MAIN_MNEMONIC_ENV_NAME = "MAIN_MNEMONIC"
TEST_MNEMONIC_ENV_NAME = "TEST_MNEMONIC"
LOCAL_MNEMONIC_ENV_NAME = "LOCAL_MNEMONIC"

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

T = TypeVar("T")


def _parse_u64(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _U64_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError("invalid float literal")
    return float(text)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError("provided string was not `true` or `false`")


def _parse_with_log(value: str, env_var_name: str, parser: Callable[[str], T]) -> T:
    try:
        return parser(value)
    except ValueError as exc:
        raise ValueError(
            f"Couldn't parse content of env var {env_var_name}, error : {exc}"
        ) from exc


class DaemonEnvVars:
    """Typed accessors for the daemon's environment variables."""

    @staticmethod
    def state_file() -> Path:
        """Path of the state file; defaults to ``state.json``."""
        return Path(os.environ.get(STATE_FILE_ENV_NAME, "state.json"))

    @staticmethod
    def gas_buffer() -> Optional[float]:
        """Gas buffer applied after simulation, if set."""
        value = os.environ.get(GAS_BUFFER_ENV_NAME)
        if value is None:
            return None
        return _parse_with_log(value, GAS_BUFFER_ENV_NAME, _parse_float)

    @staticmethod
    def min_gas() -> int:
        """Minimum gas amount; defaults to 150 000."""
        value = os.environ.get(MIN_GAS_ENV_NAME)
        if value is None:
            return 150_000
        return _parse_with_log(value, MIN_GAS_ENV_NAME, _parse_u64)

    @staticmethod
    def max_tx_query_retries() -> int:
        """Number of tx queries before giving up."""
        value = os.environ.get(MAX_TX_QUERIES_RETRY_ENV_NAME)
        if value is None:
            return DEFAULT_TX_QUERY_RETRIES
        return _parse_with_log(value, MAX_TX_QUERIES_RETRY_ENV_NAME, _parse_u64)

    @staticmethod
    def min_block_time() -> timedelta:
        """Minimum block time; defaults to one second."""
        value = os.environ.get(BLOCK_TIME_MIN_ENV_NAME)
        if value is None:
            value = os.environ.get(MIN_BLOCK_SPEED_ENV_NAME)
        if value is None:
            return timedelta(seconds=1)
        return parse_block_time_duration(value)

    @staticmethod
    def max_block_time() -> Optional[timedelta]:
        """Maximum block time, if set."""
        value = os.environ.get(BLOCK_TIME_MAX_ENV_NAME)
        if value is None:
            return None
        return parse_block_time_duration(value)

    @staticmethod
    def wallet_balance_assertion() -> bool:
        """Whether to check the sender's balance before sending; defaults to true."""
        value = os.environ.get(WALLET_BALANCE_ASSERTION_ENV_NAME)
        if value is None:
            return True
        return _parse_with_log(value, WALLET_BALANCE_ASSERTION_ENV_NAME, _parse_bool)

    @staticmethod
    def logs_message() -> bool:
        """Whether to print the "enable logs" message; defaults to true."""
        value = os.environ.get(LOGS_ACTIVATION_MESSAGE_ENV_NAME)
        if value is None:
            return True
        return _parse_with_log(value, LOGS_ACTIVATION_MESSAGE_ENV_NAME, _parse_bool)

    @staticmethod
    def main_mnemonic() -> Optional[str]:
        """Mnemonic used on mainnets."""
        return os.environ.get(MAIN_MNEMONIC_ENV_NAME)

    @staticmethod
    def test_mnemonic() -> Optional[str]:
        """Mnemonic used on testnets."""
        return os.environ.get(TEST_MNEMONIC_ENV_NAME)

    @staticmethod
    def local_mnemonic() -> Optional[str]:
        """Mnemonic used on local networks."""
        return os.environ.get(LOCAL_MNEMONIC_ENV_NAME)


def default_state_folder() -> Path:
    """Return ``~/.cw-orchestrator``; raise if there is no home folder."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise StdErr(
            "Your machine doesn't have a home folder. You can't use relative path for "
            "the state file such as 'state.json'. Please use an absolute path "
            "('/home/root/state.json') or a dot-prefixed-relative path ('./state.json') "
            f"in the {STATE_FILE_ENV_NAME} env variable."
        ) from exc
    return home / ".cw-orchestrator"


def parse_block_time_duration(raw_duration: str) -> timedelta:
    """Parse ``{integer}{s|ms}`` into a duration; a bare integer means seconds."""
    split_at = next(
        (index for index, char in enumerate(raw_duration) if char not in "0123456789"),
        None,
    )
    if split_at is None:
        digits, specifier = raw_duration, "s"
    else:
        digits, specifier = raw_duration[:split_at], raw_duration[split_at:].strip()

    try:
        amount = _parse_u64(digits)
    except ValueError as exc:
        raise ValueError(f"Couldn't parse content of block time, error: {exc}") from exc

    if specifier == "s":
        return timedelta(seconds=amount)
    if specifier == "ms":
        return timedelta(milliseconds=amount)
    raise ValueError(
        "Couldn't parse content of block time, error: unexpected token after digits"
    )