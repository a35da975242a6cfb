import base64

import pytest

from cwnft.chain import MessageInfo, Response, StdError, Storage, to_json_binary
from cwnft.receiver_tester import (
    Cw721ReceiveMsg,
    Failed,
    InnerMsg,
    ReceiverError,
    execute,
    instantiate,
)


def test_inner_msg_json():
    json = InnerMsg.SUCCEED.to_json()
    assert json == b'"succeed"'
    assert InnerMsg.from_json(json) == InnerMsg.SUCCEED


def test_inner_msg_round_trip_fail():
    assert InnerMsg.from_json(InnerMsg.FAIL.to_json()) is InnerMsg.FAIL


@pytest.mark.parametrize("raw", [b'"unknown"', b"42", b"not json"])
def test_inner_msg_rejects_bad_input(raw):
    with pytest.raises(StdError):
        InnerMsg.from_json(raw)


def test_instantiate_returns_empty_response():
    res = instantiate(Storage(), MessageInfo("creator"), {})
    assert res == Response()


def test_receive_succeed_echoes_input():
    payload = to_json_binary("succeed")
    msg = Cw721ReceiveMsg(sender="alice", token_id="nft-1", msg=payload)
    res = execute(Storage(), MessageInfo("nft-contract"), msg)
    encoded = base64.b64encode(payload).decode("ascii")
    assert res.attributes == [
        ("action", "receive_nft"),
        ("token_id", "nft-1"),
        ("sender", "alice"),
        ("msg", encoded),
    ]
    assert res.data == ("nft-1" + "alice" + encoded).encode()
    assert res.messages == []


def test_receive_fail_raises():
    msg = Cw721ReceiveMsg(sender="alice", token_id="nft-1", msg=InnerMsg.FAIL.to_json())
    with pytest.raises(Failed) as excinfo:
        execute(Storage(), MessageInfo("nft-contract"), msg)
    assert str(excinfo.value) == "I failed because you asked me to do so"
    assert isinstance(excinfo.value, ReceiverError)


def test_receive_with_invalid_payload_raises_std_error():
    msg = Cw721ReceiveMsg(sender="alice", token_id="nft-1", msg=b"{}")
    with pytest.raises(StdError):
        execute(Storage(), MessageInfo("nft-contract"), msg)


def test_execute_rejects_unknown_message():
    with pytest.raises(StdError):
        execute(Storage(), MessageInfo("nft-contract"), "bogus")