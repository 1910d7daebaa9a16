from datetime import timedelta
from pathlib import Path

import pytest

from cwdaemon import env
from cwdaemon.env import DaemonEnvVars, default_state_folder, parse_block_time_duration

ALL_VARS = [
    env.MIN_BLOCK_SPEED_ENV_NAME,
    env.BLOCK_TIME_MIN_ENV_NAME,
    env.BLOCK_TIME_MAX_ENV_NAME,
    env.STATE_FILE_ENV_NAME,
    env.GAS_BUFFER_ENV_NAME,
    env.MIN_GAS_ENV_NAME,
    env.MAX_TX_QUERIES_RETRY_ENV_NAME,
    env.WALLET_BALANCE_ASSERTION_ENV_NAME,
    env.LOGS_ACTIVATION_MESSAGE_ENV_NAME,
    env.MAIN_MNEMONIC_ENV_NAME,
    env.TEST_MNEMONIC_ENV_NAME,
    env.LOCAL_MNEMONIC_ENV_NAME,
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ALL_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123s", timedelta(seconds=123)),
        ("321ms", timedelta(milliseconds=321)),
        ("42", timedelta(seconds=42)),
        ("12345 s", timedelta(seconds=12345)),
        ("54321 ms ", timedelta(milliseconds=54321)),
    ],
)
def test_parse_block_time_duration(raw, expected):
    assert parse_block_time_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "45d", "s54"])
def test_parse_block_time_duration_invalid(raw):
    with pytest.raises(ValueError):
        parse_block_time_duration(raw)


def test_defaults(clean_env):
    assert DaemonEnvVars.state_file() == Path("state.json")
    assert DaemonEnvVars.gas_buffer() is None
    assert DaemonEnvVars.min_gas() == 150_000
    assert DaemonEnvVars.max_tx_query_retries() == 50
    assert DaemonEnvVars.min_block_time() == timedelta(seconds=1)
    assert DaemonEnvVars.max_block_time() is None
    assert DaemonEnvVars.wallet_balance_assertion() is True
    assert DaemonEnvVars.logs_message() is True
    assert DaemonEnvVars.main_mnemonic() is None
    assert DaemonEnvVars.test_mnemonic() is None
    assert DaemonEnvVars.local_mnemonic() is None


def test_values_are_read(clean_env):
    clean_env.setenv(env.STATE_FILE_ENV_NAME, "./folder/file.json")
    clean_env.setenv(env.GAS_BUFFER_ENV_NAME, "1.3")
    clean_env.setenv(env.MIN_GAS_ENV_NAME, "200000")
    clean_env.setenv(env.MAX_TX_QUERIES_RETRY_ENV_NAME, "7")
    clean_env.setenv(env.BLOCK_TIME_MAX_ENV_NAME, "500ms")
    clean_env.setenv(env.WALLET_BALANCE_ASSERTION_ENV_NAME, "false")
    clean_env.setenv(env.LOGS_ACTIVATION_MESSAGE_ENV_NAME, "false")
    clean_env.setenv(env.LOCAL_MNEMONIC_ENV_NAME, "placeholder")
    assert DaemonEnvVars.state_file() == Path("./folder/file.json")
    assert DaemonEnvVars.gas_buffer() == 1.3
    assert DaemonEnvVars.min_gas() == 200000
    assert DaemonEnvVars.max_tx_query_retries() == 7
    assert DaemonEnvVars.max_block_time() == timedelta(milliseconds=500)
    assert DaemonEnvVars.wallet_balance_assertion() is False
    assert DaemonEnvVars.logs_message() is False
    assert DaemonEnvVars.local_mnemonic() == "placeholder"


def test_min_block_time_prefers_new_name(clean_env):
    clean_env.setenv(env.MIN_BLOCK_SPEED_ENV_NAME, "3s")
    assert DaemonEnvVars.min_block_time() == timedelta(seconds=3)
    clean_env.setenv(env.BLOCK_TIME_MIN_ENV_NAME, "2")
    assert DaemonEnvVars.min_block_time() == timedelta(seconds=2)


@pytest.mark.parametrize(
    "name, value, getter",
    [
        (env.MIN_GAS_ENV_NAME, "-5", DaemonEnvVars.min_gas),
        (env.MIN_GAS_ENV_NAME, "abc", DaemonEnvVars.min_gas),
        (env.MAX_TX_QUERIES_RETRY_ENV_NAME, "1.5", DaemonEnvVars.max_tx_query_retries),
        (env.GAS_BUFFER_ENV_NAME, "lots", DaemonEnvVars.gas_buffer),
        (env.WALLET_BALANCE_ASSERTION_ENV_NAME, "yes", DaemonEnvVars.wallet_balance_assertion),
        (env.LOGS_ACTIVATION_MESSAGE_ENV_NAME, "True", DaemonEnvVars.logs_message),
        (env.BLOCK_TIME_MAX_ENV_NAME, "45d", DaemonEnvVars.max_block_time),
    ],
)
def test_invalid_values_raise(clean_env, name, value, getter):
    clean_env.setenv(name, value)
    with pytest.raises(ValueError):
        getter()


def test_parse_error_names_variable(clean_env):
    clean_env.setenv(env.MIN_GAS_ENV_NAME, "abc")
    with pytest.raises(ValueError, match=env.MIN_GAS_ENV_NAME):
        DaemonEnvVars.min_gas()


def test_default_state_folder_is_under_home():
    folder = default_state_folder()
    assert folder.name == ".cw-orchestrator"
    assert folder.parent == Path.home()