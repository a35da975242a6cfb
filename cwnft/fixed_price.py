"""Fixed-price NFT sale contract.

Buyers pay a fixed amount of a single CW20 token. Each payment mints the next
token of an NFT collection that this contract instantiates itself.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from cwnft.chain import (
    MessageInfo,
    Reply,
    ReplyOn,
    Response,
    StdError,
    Storage,
    SubMsg,
    WasmExecute,
    WasmInstantiate,
    parse_instantiate_response_data,
    set_contract_version,
    to_json_binary,
)

CONTRACT_NAME = "crates.io:cw721-fixed-price"
CONTRACT_VERSION = "0.20.0"
CONFIG_KEY = "config"
INSTANTIATE_TOKEN_REPLY_ID = 1
INSTANTIATE_LABEL = "Instantiate fixed price NFT contract"


class ContractError(Exception):
    """Base class for errors raised by the fixed-price contract."""

    message = "ContractError"

    def __init__(self) -> None:
        super().__init__(self.message)


class Unauthorized(ContractError):
    message = "Unauthorized"


class InvalidUnitPrice(ContractError):
    message = "InvalidUnitPrice"


class InvalidMaxTokens(ContractError):
    message = "InvalidMaxTokens"


class SoldOut(ContractError):
    message = "SoldOut"


class UnauthorizedTokenContract(ContractError):
    message = "UnauthorizedTokenContract"


class Uninitialized(ContractError):
    message = "Uninitialized"


class WrongPaymentAmount(ContractError):
    message = "WrongPaymentAmount"


class InvalidTokenReplyId(ContractError):
    message = "InvalidTokenReplyId"


class Cw721NotLinked(ContractError):
    message = "Cw721NotLinked"


class Cw721AlreadyLinked(ContractError):
    message = "Cw721AlreadyLinked"


@dataclass(frozen=True, kw_only=True)
class InstantiateMsg:
    """Parameters of a new sale."""

    owner: str
    max_tokens: int
    unit_price: int
    name: str
    symbol: str
    token_code_id: int
    cw20_address: str
    token_uri: str
    collection_info_extension: Any = None
    extension: dict | None = None
    withdraw_address: str | None = None


@dataclass(frozen=True)
class Cw20ReceiveMsg:
    """Notification from a CW20 contract that tokens were sent to us."""

    sender: str
    amount: int
    msg: bytes = b""


@dataclass(frozen=True)
class GetConfig:
    """Query for the sale configuration."""


@dataclass
class Config:
    """Stored state of the sale; also returned by the config query."""

    owner: str
    cw20_address: str
    cw721_address: str | None
    max_tokens: int
    unit_price: int
    name: str
    symbol: str
    token_uri: str
    extension: dict | None
    unused_token_id: int

    def to_dict(self) -> dict:
        """JSON form; the 128-bit price is written as a decimal string."""
        return {
            "owner": self.owner,
            "cw20_address": self.cw20_address,
            "cw721_address": self.cw721_address,
            "max_tokens": self.max_tokens,
            "unit_price": str(self.unit_price),
            "name": self.name,
            "symbol": self.symbol,
            "token_uri": self.token_uri,
            "extension": self.extension,
            "unused_token_id": self.unused_token_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        try:
            return cls(
                owner=data["owner"],
                cw20_address=data["cw20_address"],
                cw721_address=data.get("cw721_address"),
                max_tokens=int(data["max_tokens"]),
                unit_price=int(data["unit_price"]),
                name=data["name"],
                symbol=data["symbol"],
                token_uri=data["token_uri"],
                extension=data.get("extension"),
                unused_token_id=int(data["unused_token_id"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StdError(f"Error parsing into type Config: {exc}") from exc


def _load_config(storage: Storage) -> Config:
    return storage.load(CONFIG_KEY)


def instantiate(storage: Storage, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Store the sale configuration and instantiate the NFT collection."""
    set_contract_version(storage, CONTRACT_NAME, CONTRACT_VERSION)

    if msg.unit_price == 0:
        raise InvalidUnitPrice()
    if msg.max_tokens == 0:
        raise InvalidMaxTokens()

    config = Config(
        owner=info.sender,
        cw20_address=msg.cw20_address,
        cw721_address=None,
        max_tokens=msg.max_tokens,
        unit_price=msg.unit_price,
        name=msg.name,
        symbol=msg.symbol,
        token_uri=msg.token_uri,
        extension=msg.extension,
        unused_token_id=0,
    )
    storage.save(CONFIG_KEY, config)

    cw721_msg = {
        "name": msg.name,
        "symbol": msg.symbol,
        "collection_info_extension": msg.collection_info_extension,
        "minter": None,
        "creator": None,
        "withdraw_address": msg.withdraw_address,
    }
    sub = SubMsg(
        msg=WasmInstantiate(
            code_id=msg.token_code_id,
            msg=to_json_binary(cw721_msg),
            label=INSTANTIATE_LABEL,
            funds=(),
            admin=None,
        ),
        id=INSTANTIATE_TOKEN_REPLY_ID,
        gas_limit=None,
        reply_on=ReplyOn.SUCCESS,
        payload=b"",
    )
    return Response().add_submessages([sub])


def reply(storage: Storage, msg: Reply) -> Response:
    """Link the NFT collection created by the instantiation sub-message."""
    config = _load_config(storage)

    if config.cw721_address is not None:
        raise Cw721AlreadyLinked()
    if msg.id != INSTANTIATE_TOKEN_REPLY_ID:
        raise InvalidTokenReplyId()

    result = msg.into_result()
    if not result.msg_responses:
        raise StdError("instantiate reply carries no message response")
    parsed = parse_instantiate_response_data(result.msg_responses[0].value)
    storage.save(CONFIG_KEY, dataclasses.replace(config, cw721_address=parsed.contract_address))
    return Response()


def query_config(storage: Storage) -> Config:
    return _load_config(storage)


def query(storage: Storage, msg: GetConfig) -> bytes:
    if isinstance(msg, GetConfig):
        return to_json_binary(query_config(storage))
    raise StdError(f"unknown query: {msg!r}")


def execute(storage: Storage, info: MessageInfo, msg: Cw20ReceiveMsg) -> Response:
    if isinstance(msg, Cw20ReceiveMsg):
        return execute_receive(storage, info, msg.sender, msg.amount, msg.msg)
    raise StdError(f"unknown execute message: {msg!r}")


def execute_receive(
    storage: Storage, info: MessageInfo, sender: str, amount: int, msg: bytes
) -> Response:
    """Mint the next token to ``sender`` if the payment is correct."""
    config = _load_config(storage)

    if config.cw20_address != info.sender:
        raise UnauthorizedTokenContract()
    if config.cw721_address is None:
        raise Uninitialized()
    if config.unused_token_id >= config.max_tokens:
        raise SoldOut()
    if amount != config.unit_price:
        raise WrongPaymentAmount()

    mint = {
        "mint": {
            "token_id": str(config.unused_token_id),
            "owner": sender,
            "token_uri": config.token_uri,
            "extension": config.extension,
        }
    }
    wasm = WasmExecute(contract_addr=config.cw721_address, msg=to_json_binary(mint), funds=())
    storage.save(
        CONFIG_KEY, dataclasses.replace(config, unused_token_id=config.unused_token_id + 1)
    )
    return Response().add_message(wasm)