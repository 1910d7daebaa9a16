"""A contract with many message shapes, used to exercise message handling."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

from cwdaemon.contract_env import (
    ContractStdError,
    MessageInfo,
    Response,
    Storage,
    set_contract_version,
)

CONTRACT_NAME = "mock-contract"
CONTRACT_VERSION = "0"

TEST_ITEM_KEY = "test-item"
TEST_MAP_NAMESPACE = "test-map"
TEST_MAP_KEY = "MAP_TEST_KEY"

FIRST_MESSAGE = "first_message"
SECOND_MESSAGE = "second_message"
THIRD_MESSAGE = "third_message"
FOURTH_MESSAGE = "fourth_message"
FIFTH_MESSAGE = "fifth_message"
SIXTH_MESSAGE = "sixth_message"
SEVENTH_MESSAGE = "seventh_message"

FIRST_QUERY = "first_query"
SECOND_QUERY = "second_query"
THIRD_QUERY = "third_query"
FOURTH_QUERY = "fourth_query"

_U64_MAX = 2**64 - 1
_U128_LIMIT = 2**128

# Shapes: "empty" is `{}`, "t" is `{"t": ...}`, "unit" is a bare variant name,
# "u64_text" is `[u64, string]` and "u128_text" is `["<u128>", string]`.
_EXECUTE_SHAPES: Dict[str, str] = {
    FIRST_MESSAGE: "empty",
    SECOND_MESSAGE: "t",
    THIRD_MESSAGE: "t",
    FOURTH_MESSAGE: "unit",
    FIFTH_MESSAGE: "unit",
    SIXTH_MESSAGE: "u64_text",
    SEVENTH_MESSAGE: "u128_text",
}
_QUERY_SHAPES: Dict[str, str] = {
    FIRST_QUERY: "empty",
    SECOND_QUERY: "t",
    THIRD_QUERY: "t",
    FOURTH_QUERY: "u64_text",
}
_CUSTOM_EXECUTE_SHAPES: Dict[str, str] = {FIRST_MESSAGE: "empty"}
_CUSTOM_QUERY_SHAPES: Dict[str, str] = {FIRST_QUERY: "empty", SECOND_QUERY: "t"}


@dataclass(frozen=True)
class TestItem:
    """Value stored at instantiation to exercise storage queries."""

    __test__ = False

    first_item: int
    second_item: str


@dataclass(frozen=True)
class ThirdReturn:
    """Response of the third query."""

    t: Any


@dataclass(frozen=True)
class ExecuteMsg:
    """An execute message: its variant name and arguments in order."""

    variant: str
    args: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.variant not in _EXECUTE_SHAPES:
            raise ValueError(f"unknown execute variant `{self.variant}`")
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class QueryMsg:
    """A query message: its variant name and arguments in order."""

    variant: str
    args: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.variant not in _QUERY_SHAPES:
            raise ValueError(f"unknown query variant `{self.variant}`")
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class MigrateMsg:
    """Migration message; only ``t == "success"`` is accepted."""

    t: str


def _error(detail: str) -> ContractStdError:
    return ContractStdError(f"Error parsing message: {detail}")


def _load_json(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise _error(str(exc)) from exc
    return data


def _to_json_binary(value: Any) -> bytes:
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def _as_string(value: Any) -> str:
    if not isinstance(value, str):
        raise _error(f"invalid type: expected a string, found {value!r}")
    return value


def _as_u64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise _error(f"invalid value: expected u64, found {value!r}")
    return value


def _as_uint128(value: Any) -> int:
    if not isinstance(value, str) or not value.isascii() or not value.isdigit():
        raise _error(f"invalid value: expected a string-encoded Uint128, found {value!r}")
    amount = int(value)
    if amount >= _U128_LIMIT:
        raise _error(f"invalid value: Uint128 out of range {value!r}")
    return amount


def _split_variant(data: Any) -> Tuple[str, Any]:
    message = _load_json(data)
    if isinstance(message, str):
        return message, None
    if isinstance(message, dict) and len(message) == 1:
        ((name, body),) = message.items()
        return name, body
    raise _error("expected a variant name or an object with one variant")


def _parse_args(
    name: str, shape: str, body: Any, parse_t: Callable[[Any], Any]
) -> Tuple[Any, ...]:
    if shape == "unit":
        if body is not None:
            raise _error(f"variant `{name}` takes no value")
        return ()
    if shape in ("empty", "t"):
        if not isinstance(body, dict):
            raise _error(f"variant `{name}` must be an object")
        fields = {"t"} if shape == "t" else set()
        unknown = set(body) - fields
        if unknown:
            raise _error(f"unknown field `{sorted(unknown)[0]}`")
        if fields - set(body):
            raise _error("missing field `t`")
        return (parse_t(body["t"]),) if shape == "t" else ()
    if not isinstance(body, list) or len(body) != 2:
        raise _error(f"variant `{name}` must be an array of two values")
    first = _as_u64(body[0]) if shape == "u64_text" else _as_uint128(body[0])
    return first, _as_string(body[1])


def _parse_execute(
    data: Any,
    parse_t: Callable[[Any], Any] = _as_string,
    shapes: Mapping[str, str] = _EXECUTE_SHAPES,
) -> ExecuteMsg:
    name, body = _split_variant(data)
    shape = shapes.get(name)
    if shape is None:
        raise _error(f"unknown variant `{name}`")
    return ExecuteMsg(name, _parse_args(name, shape, body, parse_t))


def _parse_query(
    data: Any,
    parse_t: Callable[[Any], Any] = _as_string,
    shapes: Mapping[str, str] = _QUERY_SHAPES,
) -> QueryMsg:
    name, body = _split_variant(data)
    shape = shapes.get(name)
    if shape is None:
        raise _error(f"unknown variant `{name}`")
    return QueryMsg(name, _parse_args(name, shape, body, parse_t))


def _parse_migrate(data: Any) -> MigrateMsg:
    if isinstance(data, MigrateMsg):
        return data
    message = _load_json(data)
    if not isinstance(message, dict):
        raise _error("migrate message must be an object")
    _parse_args("migrate", "t", message, _as_string)
    return MigrateMsg(message["t"])


def _map_key(key: str) -> str:
    return f"{TEST_MAP_NAMESPACE}/{key}"


def parse_execute_msg(data: Any) -> ExecuteMsg:
    """Parse a JSON execute message whose ``t`` fields are strings."""
    return _parse_execute(data)


def parse_query_msg(data: Any) -> QueryMsg:
    """Parse a JSON query message whose ``t`` fields are strings."""
    return _parse_query(data)


def instantiate(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Record the contract version and seed the test item and map entry."""
    set_contract_version(storage, CONTRACT_NAME, CONTRACT_VERSION)
    storage.save(TEST_ITEM_KEY, TestItem(first_item=1, second_item="test-item"))
    storage.save(_map_key(TEST_MAP_KEY), TestItem(first_item=2, second_item="test-map"))
    return Response().add_attribute("action", "instantiate")


def _handle_execute(info: MessageInfo, msg: ExecuteMsg) -> Response:
    variant = msg.variant
    if variant == FIRST_MESSAGE:
        return Response().add_attribute("action", "first message passed")
    if variant == SECOND_MESSAGE:
        raise ContractStdError("Second Message Failed")
    if variant == THIRD_MESSAGE:
        return Response().add_attribute("action", "third message passed")
    if variant == FOURTH_MESSAGE:
        return Response().add_attribute("action", "fourth message passed")
    if variant == FIFTH_MESSAGE:
        if not info.funds:
            raise ContractStdError("Coins missing")
        return Response().add_attribute("action", "fourth message passed")
    if variant == SIXTH_MESSAGE:
        return Response().add_attribute("action", "sixth message passed")
    amount, denom = msg.args
    coin = info.funds[0]
    if coin.amount != amount and coin.denom != denom:
        raise ContractStdError("Coins don't match message")
    return Response().add_attribute("action", "fourth message passed")


def execute(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Handle an execute message, given typed or as JSON."""
    if not isinstance(msg, ExecuteMsg):
        msg = parse_execute_msg(msg)
    return _handle_execute(info, msg)


def query(storage: Storage, msg: Any) -> bytes:
    """Answer a query with compact JSON bytes."""
    if not isinstance(msg, QueryMsg):
        msg = parse_query_msg(msg)
    if msg.variant == FIRST_QUERY:
        return _to_json_binary("first query passed")
    if msg.variant == SECOND_QUERY:
        raise ContractStdError("Query not available")
    if msg.variant == THIRD_QUERY:
        return _to_json_binary(asdict(ThirdReturn(t="third query passed")))
    return _to_json_binary(4)


def migrate(storage: Storage, msg: Any) -> Response:
    """Succeed only when ``t`` is ``"success"``."""
    msg = _parse_migrate(msg)
    if msg.t == "success":
        return Response()
    raise ContractStdError("migrate endpoint reached but no test implementation")


def load_test_item(storage: Storage) -> TestItem:
    """Return the item stored at instantiation."""
    return storage.load(TEST_ITEM_KEY)


def load_test_map_item(storage: Storage, key: str) -> TestItem:
    """Return the map entry stored under ``key``."""
    return storage.load(_map_key(key))


def custom_instantiate(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Instantiate the variant whose messages use a custom message type."""
    return Response().add_attribute("action", "instantiate")


def custom_execute(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Handle the custom variant's only execute message."""
    if isinstance(msg, ExecuteMsg):
        if msg.variant not in _CUSTOM_EXECUTE_SHAPES:
            raise _error(f"unknown variant `{msg.variant}`")
    else:
        msg = _parse_execute(msg, shapes=_CUSTOM_EXECUTE_SHAPES)
    return Response().add_attribute("action", "first message passed")


def custom_query(storage: Storage, msg: Any) -> bytes:
    """Answer the custom variant's queries."""
    if isinstance(msg, QueryMsg):
        if msg.variant not in _CUSTOM_QUERY_SHAPES:
            raise _error(f"unknown variant `{msg.variant}`")
    else:
        msg = _parse_query(msg, shapes=_CUSTOM_QUERY_SHAPES)
    if msg.variant == FIRST_QUERY:
        return _to_json_binary("first query passed")
    raise ContractStdError("Query not available")


def custom_migrate(storage: Storage, msg: Any) -> Response:
    """Succeed only when ``t`` is ``"success"``."""
    return migrate(storage, msg)