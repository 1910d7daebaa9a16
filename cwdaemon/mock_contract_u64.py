"""The mock contract with its generic ``t`` fields typed as u64."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from cwdaemon import mock_contract
from cwdaemon.contract_env import ContractStdError, MessageInfo, Response, Storage
from cwdaemon.mock_contract import (
    FIRST_QUERY,
    SECOND_QUERY,
    THIRD_QUERY,
    ExecuteMsg,
    QueryMsg,
    ThirdReturn,
    _as_u64,
    _handle_execute,
    _parse_execute,
    _parse_query,
    _to_json_binary,
)

CONTRACT_ID = "mock-contract"


def instantiate(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Instantiate without touching storage."""
    return Response().add_attribute("action", "instantiate")


def execute(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Handle an execute message whose ``t`` fields are u64."""
    if not isinstance(msg, ExecuteMsg):
        msg = _parse_execute(msg, parse_t=_as_u64)
    return _handle_execute(info, msg)


def query(storage: Storage, msg: Any) -> bytes:
    """Answer a query whose ``t`` fields are u64, with compact JSON bytes."""
    if not isinstance(msg, QueryMsg):
        msg = _parse_query(msg, parse_t=_as_u64)
    if msg.variant == FIRST_QUERY:
        return _to_json_binary("first query passed")
    if msg.variant == SECOND_QUERY:
        raise ContractStdError("Query not available")
    if msg.variant == THIRD_QUERY:
        return _to_json_binary(asdict(ThirdReturn(t=0)))
    return _to_json_binary("fourth query passed")


def migrate(storage: Storage, msg: Any) -> Response:
    """Succeed only when ``t`` is ``"success"``."""
    return mock_contract.migrate(storage, msg)