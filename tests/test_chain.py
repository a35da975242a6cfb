import pytest

from cwnft.chain import (
    ContractVersion,
    InstantiateResponse,
    MessageInfo,
    MsgResponse,
    NotFoundError,
    Reply,
    ReplyOn,
    Response,
    StdError,
    Storage,
    SubMsg,
    SubMsgResponse,
    WasmExecute,
    WasmInstantiate,
    encode_instantiate_response,
    from_json,
    get_contract_version,
    parse_instantiate_response_data,
    set_contract_version,
    to_json_binary,
)


def test_add_message_wraps_in_never_reply_submsg():
    msg = WasmExecute(contract_addr="nftcontract", msg=b"{}")
    res = Response().add_message(msg)
    assert res.messages == [
        SubMsg(msg=msg, id=0, gas_limit=None, reply_on=ReplyOn.NEVER, payload=b"")
    ]


def test_add_submessages_keeps_order_and_settings():
    inst = WasmInstantiate(
        code_id=10, msg=b"{}", label="Instantiate fixed price NFT contract"
    )
    first = SubMsg(msg=inst, id=1, reply_on=ReplyOn.SUCCESS)
    second = SubMsg(msg=inst, id=2)
    res = Response().add_submessage(first).add_submessages([second])
    assert res.messages == [first, second]
    assert res.messages[0].reply_on is ReplyOn.SUCCESS


def test_attributes_and_data():
    res = (
        Response()
        .add_attribute("action", "receive_nft")
        .add_attributes([("token_id", "melt"), ("count", 3)])
        .set_data("abc")
    )
    assert res.attributes == [
        ("action", "receive_nft"),
        ("token_id", "melt"),
        ("count", "3"),
    ]
    assert res.data == b"abc"


def test_responses_compare_by_value():
    a = Response().add_attribute("action", "approve")
    b = Response().add_attribute("action", "approve")
    assert a == b
    assert a != Response()


def test_storage_load_missing_raises_not_found():
    storage = Storage()
    with pytest.raises(NotFoundError) as info:
        storage.load("config")
    assert info.value.kind == "config"
    assert isinstance(info.value, StdError)
    assert storage.may_load("config") is None


def test_storage_saves_isolated_copies():
    storage = Storage()
    value = {"items": [1, 2]}
    storage.save("config", value)
    value["items"].append(3)
    loaded = storage.load("config")
    assert loaded == {"items": [1, 2]}
    loaded["items"].append(9)
    assert storage.load("config") == {"items": [1, 2]}
    assert "config" in storage


def test_contract_version_roundtrip():
    storage = Storage()
    with pytest.raises(NotFoundError):
        get_contract_version(storage)
    set_contract_version(storage, "crates.io:cw721-fixed-price", "0.20.0")
    assert get_contract_version(storage) == ContractVersion(
        "crates.io:cw721-fixed-price", "0.20.0"
    )


def test_instantiate_response_roundtrip_with_large_data():
    payload = bytes([2]) * 32769
    encoded = encode_instantiate_response("nftcontract", payload)
    parsed = parse_instantiate_response_data(encoded)
    assert parsed == InstantiateResponse("nftcontract", payload)


def test_instantiate_response_wire_bytes():
    assert encode_instantiate_response("a") == b"\x0a\x01a"


def test_parse_without_data_field():
    parsed = parse_instantiate_response_data(encode_instantiate_response("nftcontract"))
    assert parsed.contract_address == "nftcontract"
    assert parsed.data is None


def test_parse_empty_message():
    assert parse_instantiate_response_data(b"") == InstantiateResponse("", None)


def test_parse_wrong_field_raises():
    # field 2 where field 1 is expected
    bad = encode_instantiate_response("", b"xyz")
    assert parse_instantiate_response_data(bad[:0]) == InstantiateResponse("", None)
    with pytest.raises(StdError):
        parse_instantiate_response_data(bad)


def test_parse_truncated_raises():
    encoded = encode_instantiate_response("nftcontract")
    with pytest.raises(StdError):
        parse_instantiate_response_data(encoded[:-3])


def test_reply_into_result():
    response = SubMsgResponse(
        msg_responses=(
            MsgResponse(
                type_url="/cosmwasm.wasm.v1.MsgInstantiateContractResponse",
                value=encode_instantiate_response("nftcontract"),
            ),
        )
    )
    ok = Reply(id=1, result=response, gas_used=1000)
    assert ok.into_result() is response
    failed = Reply(id=1, result="out of gas")
    with pytest.raises(StdError, match="out of gas"):
        failed.into_result()


def test_to_json_binary_compact_and_string():
    assert to_json_binary("succeed") == b'"succeed"'
    assert to_json_binary({"a": 1}) == b'{"a":1}'


def test_to_json_binary_encodes_bytes_as_base64():
    assert to_json_binary(b"\x00") == b'"AA=="'


def test_json_roundtrip_dataclass():
    info = MessageInfo(sender="owner")
    assert from_json(to_json_binary(info)) == {"sender": "owner", "funds": []}


def test_json_roundtrip_enum_value():
    assert from_json(to_json_binary([ReplyOn.SUCCESS])) == ["success"]


def test_from_json_invalid_raises():
    with pytest.raises(StdError):
        from_json(b"{not json")


def test_to_json_binary_unserializable_raises():
    with pytest.raises(StdError):
        to_json_binary(object())