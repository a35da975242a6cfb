# cwnft

This package holds the contract logic for selling, receiving and holding NFTs.
The contracts run against a small in-memory chain model. It is plain Python
and needs no third-party packages.

## Modules

- `cwnft.chain` is the in-memory chain model. It provides:
  - `Storage`, a key-value store that saves and returns deep copies. Loading a
    missing key raises `NotFoundError`.
  - The message types `MessageInfo`, `Response`, `SubMsg`, `ReplyOn`,
    `WasmInstantiate` and `WasmExecute`.
  - The reply types `Reply`, `SubMsgResponse` and `MsgResponse`.
  - The protobuf encoding of an instantiate response:
    `encode_instantiate_response` and `parse_instantiate_response_data`.
  - JSON helpers: `to_json_binary` and `from_json`. Binary data is written as
    base64.
  - Contract version records: `set_contract_version` and
    `get_contract_version`.

  Runtime failures raise `StdError`.
- `cwnft.fixed_price` is a sale that mints NFTs at a fixed price, paid in one
  CW20 token.
  - `instantiate` stores a `Config`. It rejects a zero `unit_price` with
    `InvalidUnitPrice` and a zero `max_tokens` with `InvalidMaxTokens`. It
    returns a sub-message that asks for the NFT collection to be instantiated.
  - `reply` links the collection address from that instantiation.
  - `execute` accepts a `Cw20ReceiveMsg` payment. Each valid payment returns a
    mint message for the next token id, counting from `"0"`.
  - `query` with `GetConfig` returns the config as JSON. The `unit_price` is
    written as a decimal string.
  - Errors are subclasses of `ContractError`: `UnauthorizedTokenContract`,
    `Uninitialized`, `SoldOut`, `WrongPaymentAmount`, `InvalidTokenReplyId`
    and `Cw721AlreadyLinked`.
- `cwnft.receiver_tester` accepts or rejects an incoming `Cw721ReceiveMsg`,
  depending on the `InnerMsg` it carries.
  - `"succeed"` accepts the NFT. The response holds attributes that echo the
    token id, the sender and the base64 payload.
  - `"fail"` rejects the NFT by raising `Failed`.
- `cwnft.non_transferable` has the query messages, the stored `Config` and the
  `admin` query of a non-transferable collection.
  - `to_cw721_query` turns a query into the JSON form of the standard NFT
    query.
  - The deprecated `ContractInfo` maps to `get_collection_info_and_extension`.
  - `AllOperators`, `Approval`, `Approvals` and `Admin` raise `ValueError`.

## Example

```python
from cwnft import fixed_price
from cwnft.chain import (
    INSTANTIATE_RESPONSE_TYPE_URL,
    MessageInfo,
    MsgResponse,
    Reply,
    Storage,
    SubMsgResponse,
    encode_instantiate_response,
    from_json,
)

storage = Storage()
msg = fixed_price.InstantiateMsg(
    owner="owner",
    max_tokens=1,
    unit_price=1,
    name="SYNTH",
    symbol="SYNTH",
    token_code_id=10,
    cw20_address="cw20",
    token_uri="https://ipfs.example.com/ipfs/Q",
)
fixed_price.instantiate(storage, MessageInfo(sender="owner"), msg)

# Link the collection the instantiation created.
encoded = encode_instantiate_response("nftcontract")
fixed_price.reply(
    storage,
    Reply(
        id=fixed_price.INSTANTIATE_TOKEN_REPLY_ID,
        result=SubMsgResponse(
            msg_responses=(MsgResponse(INSTANTIATE_RESPONSE_TYPE_URL, encoded),)
        ),
    ),
)

# The CW20 contract reports a payment; the response carries the mint message.
res = fixed_price.execute(
    storage, MessageInfo(sender="cw20"), fixed_price.Cw20ReceiveMsg(sender="buyer", amount=1)
)
print(res.messages[0].msg.contract_addr)  # nftcontract

config = from_json(fixed_price.query(storage, fixed_price.GetConfig()))
print(config["unused_token_id"])  # 1
```

## What the package does not do

- It does not include the NFT collection contract. The mint, transfer and
  approval logic of NFTs is not here. `fixed_price` returns mint messages but
  does not carry them out.
- `non_transferable` has only the collection's messages, state and admin
  query. It has no instantiate or execute entry points.
- There is no CW20 token contract, no message dispatcher and no persistent
  storage. `Storage` lives in memory only.
- The package has no command-line tool.

## Tests

```
pip install -e .[test]
pytest
```