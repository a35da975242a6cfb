"""Minimal NFT receiver used to exercise ``send_nft`` flows.

The payload attached to a received NFT decides the outcome: ``"succeed"``
accepts the token and echoes what was received, ``"fail"`` rejects it.
"""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass
from typing import Any

from cwnft.chain import MessageInfo, Response, StdError, Storage, from_json, to_json_binary


class ReceiverError(Exception):
    """Base class for errors raised by the receiver contract."""


class Failed(ReceiverError):
    """Raised when the sender asked the receiver to fail."""

    def __init__(self) -> None:
        super().__init__("I failed because you asked me to do so")


class InnerMsg(enum.Enum):
    """Instruction carried inside a received NFT's payload."""

    SUCCEED = "succeed"
    FAIL = "fail"

    def to_json(self) -> bytes:
        return to_json_binary(self.value)

    @classmethod
    def from_json(cls, data: bytes | str) -> "InnerMsg":
        value = from_json(data)
        if not isinstance(value, str):
            raise StdError(f"Error parsing into type InnerMsg: expected a string, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise StdError(
                f"Error parsing into type InnerMsg: unknown variant `{value}`"
            ) from None


@dataclass(frozen=True)
class Cw721ReceiveMsg:
    """Notification that an NFT was sent to this contract."""

    sender: str
    token_id: str
    msg: bytes = b""


def instantiate(storage: Storage, info: MessageInfo, msg: Any) -> Response:
    """Nothing to set up."""
    return Response()


def execute(storage: Storage, info: MessageInfo, msg: Cw721ReceiveMsg) -> Response:
    """Accept or reject a received NFT according to its payload."""
    if not isinstance(msg, Cw721ReceiveMsg):
        raise StdError(f"unknown execute message: {msg!r}")

    inner = InnerMsg.from_json(msg.msg)
    if inner is InnerMsg.FAIL:
        raise Failed()

    encoded = base64.b64encode(bytes(msg.msg)).decode("ascii")
    return (
        Response()
        .add_attributes(
            [
                ("action", "receive_nft"),
                ("token_id", msg.token_id),
                ("sender", msg.sender),
                ("msg", encoded),
            ]
        )
        .set_data(msg.token_id + msg.sender + encoded)
    )