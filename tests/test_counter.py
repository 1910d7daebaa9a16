import json

import pytest

from cwdaemon.coins import Coin
from cwdaemon.contract_env import ContractStdError, MessageInfo, Storage, get_contract_version
from cwdaemon.counter import (
    CONTRACT_NAME,
    CustomError,
    GetCount,
    GetCountResponse,
    Increment,
    InstantiateMsg,
    MigrateMsg,
    Reset,
    State,
    Unauthorized,
    count,
    execute,
    increment,
    instantiate,
    migrate,
    parse_execute_msg,
    parse_query_msg,
    query,
    reset,
)

USER = "user"
ADMIN = "admin"


def _query_count(storage):
    return json.loads(query(storage, GetCount()))["count"]


def test_proper_initialization():
    storage = Storage()
    info = MessageInfo("creator", (Coin(1000, "earth"),))
    res = instantiate(storage, info, InstantiateMsg(count=17))
    assert len(res.messages) == 0
    assert _query_count(storage) == 17
    assert res.attributes == [("method", "instantiate"), ("owner", "creator"), ("count", "17")]
    assert get_contract_version(storage)["contract"] == CONTRACT_NAME


def test_increment():
    storage = Storage()
    instantiate(storage, MessageInfo("creator", (Coin(2, "token"),)), InstantiateMsg(17))
    execute(storage, MessageInfo("anyone", (Coin(2, "token"),)), Increment())
    assert _query_count(storage) == 18


def test_reset():
    storage = Storage()
    instantiate(storage, MessageInfo("creator", (Coin(2, "token"),)), InstantiateMsg(17))

    with pytest.raises(Unauthorized):
        execute(storage, MessageInfo("anyone", (Coin(2, "token"),)), Reset(count=5))
    assert _query_count(storage) == 17

    execute(storage, MessageInfo("creator", (Coin(2, "token"),)), Reset(count=5))
    assert _query_count(storage) == 5


def _setup():
    storage = Storage()
    instantiate(storage, MessageInfo(ADMIN), InstantiateMsg(count=1))
    return storage


def test_count_integration():
    storage = _setup()
    execute(storage, MessageInfo(USER), Increment())

    count1 = count(storage)
    count2 = json.loads(query(storage, {"get_count": {}}))
    assert count1.count == count2["count"]
    assert count1.count == 2

    execute(storage, MessageInfo(ADMIN), Reset(0))
    assert count(storage).count == 0

    with pytest.raises(Unauthorized) as info:
        execute(storage, MessageInfo(USER), Reset(0))
    assert str(info.value) == "Unauthorized"


def test_execute_accepts_json():
    storage = _setup()
    execute(storage, MessageInfo(USER), b'{"increment":{}}')
    execute(storage, MessageInfo(ADMIN), '{"reset":{"count":-4}}')
    assert count(storage) == GetCountResponse(-4)


def test_direct_helpers():
    storage = _setup()
    assert increment(storage).attributes == [("action", "increment")]
    assert reset(storage, MessageInfo(ADMIN), 9).attributes == [("action", "reset")]
    assert storage.load("state") == State(count=9, owner=ADMIN)


def test_migrate():
    res = migrate(Storage(), MigrateMsg(t="tea"))
    assert res.attributes == [("action", "migrate")]


def test_parse_messages():
    assert parse_execute_msg({"increment": {}}) == Increment()
    assert parse_execute_msg('{"reset": {"count": 5}}') == Reset(5)
    assert parse_query_msg({"get_count": {}}) == GetCount()


@pytest.mark.parametrize(
    "data",
    [
        {"decrement": {}},
        {"reset": {}},
        {"reset": {"count": 2**31}},
        {"reset": {"count": "5"}},
        {"increment": {"extra": 1}},
        {"increment": {}, "reset": {"count": 1}},
        "not json",
        [],
    ],
)
def test_parse_execute_msg_rejects(data):
    with pytest.raises(ContractStdError):
        parse_execute_msg(data)


def test_parse_query_msg_rejects_unknown():
    with pytest.raises(ContractStdError):
        parse_query_msg({"get_owner": {}})


def test_query_before_instantiate_fails():
    with pytest.raises(ContractStdError):
        query(Storage(), GetCount())


def test_increment_overflow_keeps_state():
    storage = Storage()
    instantiate(storage, MessageInfo(ADMIN), InstantiateMsg(count=2**31 - 1))
    with pytest.raises(OverflowError):
        increment(storage)
    assert count(storage).count == 2**31 - 1


def test_custom_error_message():
    error = CustomError("abc")
    assert error.val == "abc"
    assert str(error) == 'Custom Error val: "abc"'