"""A counter contract: an owner-resettable count that anyone may increment."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from cwdaemon.contract_env import (
    ContractStdError,
    MessageInfo,
    Response,
    Storage,
    set_contract_version,
)

CONTRACT_NAME = "crates.io:counter"
CONTRACT_VERSION = "0.1.0"
CONTRACT_ID = "counter_contract"
STATE_KEY = "state"

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ContractError(Exception):
    """Base class of the counter contract's errors."""


class Unauthorized(ContractError):
    """The sender is not allowed to perform this action."""

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class CustomError(ContractError):
    """A contract-specific error carrying a value."""

    def __init__(self, val: str) -> None:
        self.val = val
        super().__init__(f"Custom Error val: {json.dumps(val)}")


@dataclass(frozen=True)
class InstantiateMsg:
    """Initial count of the counter."""

    count: int


@dataclass(frozen=True)
class Increment:
    """Increment the count by one."""


@dataclass(frozen=True)
class Reset:
    """Set the count to a new value; owner only."""

    count: int


@dataclass(frozen=True)
class GetCount:
    """Ask for the current count."""


@dataclass(frozen=True)
class GetCountResponse:
    """The current count."""

    count: int


@dataclass(frozen=True)
class MigrateMsg:
    """Migration message."""

    t: str


@dataclass(frozen=True)
class State:
    """The contract's stored state."""

    count: int
    owner: str


ExecuteMsg = Union[Increment, Reset]
QueryMsg = GetCount


def _load_json(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise ContractStdError(f"Error parsing message: {exc}") from exc
    return data


def _single_variant(data: Any) -> tuple:
    message = _load_json(data)
    if not isinstance(message, dict) or len(message) != 1:
        raise ContractStdError("Error parsing message: expected an object with one variant")
    ((name, body),) = message.items()
    if not isinstance(body, dict):
        raise ContractStdError(f"Error parsing message: variant `{name}` must be an object")
    return name, body


def _check_fields(name: str, body: dict, fields: set) -> None:
    unknown = set(body) - fields
    if unknown:
        raise ContractStdError(f"Error parsing message: unknown field `{sorted(unknown)[0]}`")
    missing = fields - set(body)
    if missing:
        raise ContractStdError(f"Error parsing message: missing field `{sorted(missing)[0]}`")


def _as_i32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not _I32_MIN <= value <= _I32_MAX:
        raise ContractStdError(f"Error parsing message: invalid i32 value {value!r}")
    return value


def parse_execute_msg(data: Any) -> ExecuteMsg:
    """Parse ``{"increment": {}}`` or ``{"reset": {"count": n}}``."""
    name, body = _single_variant(data)
    if name == "increment":
        _check_fields(name, body, set())
        return Increment()
    if name == "reset":
        _check_fields(name, body, {"count"})
        return Reset(_as_i32(body["count"]))
    raise ContractStdError(f"Error parsing message: unknown variant `{name}`")


def parse_query_msg(data: Any) -> QueryMsg:
    """Parse ``{"get_count": {}}``."""
    name, body = _single_variant(data)
    if name == "get_count":
        _check_fields(name, body, set())
        return GetCount()
    raise ContractStdError(f"Error parsing message: unknown variant `{name}`")


def instantiate(storage: Storage, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Store the initial count with the sender as owner."""
    state = State(count=msg.count, owner=info.sender)
    set_contract_version(storage, CONTRACT_NAME, CONTRACT_VERSION)
    storage.save(STATE_KEY, state)
    return (
        Response()
        .add_attribute("method", "instantiate")
        .add_attribute("owner", info.sender)
        .add_attribute("count", msg.count)
    )


def execute(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Dispatch an execute message, given typed or as JSON."""
    if not isinstance(msg, (Increment, Reset)):
        msg = parse_execute_msg(msg)
    if isinstance(msg, Increment):
        return increment(storage)
    return reset(storage, info, msg.count)


def query(storage: Storage, msg: Any) -> bytes:
    """Answer a query with compact JSON bytes."""
    if not isinstance(msg, GetCount):
        msg = parse_query_msg(msg)
    response = count(storage)
    return json.dumps({"count": response.count}, separators=(",", ":")).encode("utf-8")


def migrate(storage: Storage, msg: MigrateMsg) -> Response:
    """Accept any migration."""
    return Response().add_attribute("action", "migrate")


def increment(storage: Storage) -> Response:
    """Add one to the count."""

    def bump(state: State) -> State:
        if state.count >= _I32_MAX:
            raise OverflowError("attempt to add with overflow")
        return State(count=state.count + 1, owner=state.owner)

    storage.update(STATE_KEY, bump)
    return Response().add_attribute("action", "increment")


def reset(storage: Storage, info: MessageInfo, count: int) -> Response:
    """Set the count; only the owner may do so."""

    def apply(state: State) -> State:
        if info.sender != state.owner:
            raise Unauthorized()
        return State(count=count, owner=state.owner)

    storage.update(STATE_KEY, apply)
    return Response().add_attribute("action", "reset")


def count(storage: Storage) -> GetCountResponse:
    """Return the current count."""
    state = storage.load(STATE_KEY)
    return GetCountResponse(count=state.count)