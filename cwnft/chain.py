"""Chain runtime primitives shared by the contracts: messages, responses,
replies, key-value storage, JSON helpers and protobuf reply decoding."""

from __future__ import annotations

import base64
import copy
import dataclasses
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

CONTRACT_INFO_KEY = "contract_info"
INSTANTIATE_RESPONSE_TYPE_URL = "/cosmwasm.wasm.v1.MsgInstantiateContractResponse"

_VARINT_MAX_BYTES = 9
_WIRE_TYPE_LENGTH_DELIMITED = 2


class StdError(Exception):
    """Generic error raised by the runtime helpers."""


class NotFoundError(StdError):
    """Raised when a storage key holds no value."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"{kind} not found")
        self.kind = kind


@dataclass(frozen=True)
class MessageInfo:
    """Sender of a message and the funds attached to it."""

    sender: str
    funds: tuple = ()


class ReplyOn(enum.Enum):
    """When the caller wants a reply for a sub-message."""

    ALWAYS = "always"
    ERROR = "error"
    SUCCESS = "success"
    NEVER = "never"


@dataclass(frozen=True)
class WasmInstantiate:
    """Instantiate a new contract from stored code."""

    code_id: int
    msg: bytes
    label: str
    funds: tuple = ()
    admin: str | None = None


@dataclass(frozen=True)
class WasmExecute:
    """Execute a message on another contract."""

    contract_addr: str
    msg: bytes
    funds: tuple = ()


@dataclass(frozen=True)
class SubMsg:
    """A message dispatched by a contract, with its reply settings."""

    msg: Any
    id: int = 0
    gas_limit: int | None = None
    reply_on: ReplyOn = ReplyOn.NEVER
    payload: bytes = b""


@dataclass
class Response:
    """Result of a successful contract entry point."""

    messages: list = field(default_factory=list)
    attributes: list = field(default_factory=list)
    data: bytes | None = None

    def add_message(self, msg: Any) -> "Response":
        """Append a message that expects no reply."""
        self.messages.append(SubMsg(msg=msg))
        return self

    def add_submessage(self, sub: SubMsg) -> "Response":
        self.messages.append(sub)
        return self

    def add_submessages(self, subs: Iterable[SubMsg]) -> "Response":
        self.messages.extend(subs)
        return self

    def add_attribute(self, key: str, value: Any) -> "Response":
        self.attributes.append((str(key), str(value)))
        return self

    def add_attributes(self, attributes: Iterable[tuple[str, Any]]) -> "Response":
        for key, value in attributes:
            self.add_attribute(key, value)
        return self

    def set_data(self, data: bytes | str) -> "Response":
        self.data = data.encode() if isinstance(data, str) else bytes(data)
        return self


@dataclass(frozen=True)
class MsgResponse:
    """A typed response of one message executed by a sub-message."""

    type_url: str
    value: bytes


@dataclass(frozen=True)
class SubMsgResponse:
    """Successful outcome of a sub-message."""

    events: tuple = ()
    data: bytes | None = None
    msg_responses: tuple = ()


@dataclass(frozen=True)
class Reply:
    """Callback delivered to a contract after one of its sub-messages ran."""

    id: int
    result: Union[SubMsgResponse, str]
    payload: bytes = b""
    gas_used: int = 0

    def into_result(self) -> SubMsgResponse:
        """Return the successful response, or raise if the sub-message failed."""
        if isinstance(self.result, SubMsgResponse):
            return self.result
        raise StdError(self.result)


class Storage:
    """In-memory key-value store holding isolated copies of saved values."""

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def save(self, key: str, value: Any) -> None:
        self._items[key] = copy.deepcopy(value)

    def load(self, key: str) -> Any:
        try:
            return copy.deepcopy(self._items[key])
        except KeyError:
            raise NotFoundError(key) from None

    def may_load(self, key: str) -> Any:
        return copy.deepcopy(self._items.get(key))

    def __contains__(self, key: object) -> bool:
        return key in self._items


@dataclass(frozen=True)
class InstantiateResponse:
    """Decoded data of a contract instantiation reply."""

    contract_address: str
    data: bytes | None = None


@dataclass(frozen=True)
class ContractVersion:
    """Name and version of the code a contract runs."""

    contract: str
    version: str


class _ProtoReader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._data)

    def varint(self) -> int:
        value = 0
        for shift in range(0, 7 * _VARINT_MAX_BYTES, 7):
            if self.exhausted:
                raise StdError("failed to decode Protobuf message: unexpected end of varint")
            byte = self._data[self._pos]
            self._pos += 1
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return value
        raise StdError(
            f"failed to decode Protobuf message: varint longer than {_VARINT_MAX_BYTES} bytes"
        )

    def length_prefixed(self, field_number: int) -> bytes:
        if self.exhausted:
            return b""
        tag = self.varint()
        wire_type, number = tag & 0x07, tag >> 3
        if wire_type != _WIRE_TYPE_LENGTH_DELIMITED or number != field_number:
            raise StdError(
                f"failed to decode Protobuf message: invalid field #{field_number}: "
                f"got field #{number} with wire type {wire_type}"
            )
        length = self.varint()
        if len(self._data) - self._pos < length:
            raise StdError(
                f"failed to decode Protobuf message: field #{field_number}: "
                "message too short"
            )
        chunk = bytes(self._data[self._pos:self._pos + length])
        self._pos += length
        return chunk


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _encode_field(field_number: int, payload: bytes) -> bytes:
    if not payload:
        return b""
    tag = (field_number << 3) | _WIRE_TYPE_LENGTH_DELIMITED
    return _encode_varint(tag) + _encode_varint(len(payload)) + payload


def parse_instantiate_response_data(data: bytes) -> InstantiateResponse:
    """Decode a protobuf-encoded instantiate response."""
    reader = _ProtoReader(data)
    raw_address = reader.length_prefixed(1)
    try:
        contract_address = raw_address.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StdError(
            "failed to decode Protobuf message: field #1: invalid UTF-8 string"
        ) from exc
    payload = reader.length_prefixed(2)
    return InstantiateResponse(contract_address, payload or None)


def encode_instantiate_response(contract_address: str, data: bytes = b"") -> bytes:
    """Encode an instantiate response as protobuf, omitting empty fields."""
    return _encode_field(1, contract_address.encode("utf-8")) + _encode_field(2, bytes(data or b""))


def _json_default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, enum.Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    raise StdError(f"cannot serialize value of type {type(value).__name__}")


def to_json_binary(value: Any) -> bytes:
    """Serialize a value to compact JSON bytes; binary data becomes base64."""
    try:
        return json.dumps(value, separators=(",", ":"), default=_json_default).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise StdError(f"Error serializing type: {exc}") from exc


def from_json(data: bytes | str) -> Any:
    """Parse JSON bytes or text."""
    try:
        return json.loads(data)
    except (ValueError, TypeError) as exc:
        raise StdError(f"Error parsing into type: {exc}") from exc


def set_contract_version(storage: Storage, name: str, version: str) -> None:
    storage.save(CONTRACT_INFO_KEY, ContractVersion(name, version))


def get_contract_version(storage: Storage) -> ContractVersion:
    return storage.load(CONTRACT_INFO_KEY)