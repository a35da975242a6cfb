"""Messages, state and admin query of the non-transferable NFT contract.

Its query messages mirror the standard NFT query set plus an ``Admin`` query;
:func:`to_cw721_query` turns them into the standard query's JSON form.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Union

from cwnft.chain import Storage

CONFIG_KEY = "config"


@dataclass(frozen=True)
class Admin:
    """Query for the contract admin."""


@dataclass(frozen=True)
class OwnerOf:
    token_id: str
    include_expired: bool | None = None


@dataclass(frozen=True)
class Approval:
    token_id: str
    spender: str
    include_expired: bool | None = None


@dataclass(frozen=True)
class Approvals:
    token_id: str
    include_expired: bool | None = None


@dataclass(frozen=True)
class AllOperators:
    owner: str
    include_expired: bool | None = None
    start_after: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class NumTokens:
    pass


@dataclass(frozen=True)
class ContractInfo:
    """Deprecated: use GetCollectionInfoAndExtension instead."""


@dataclass(frozen=True)
class GetCollectionInfoAndExtension:
    pass


@dataclass(frozen=True)
class Minter:
    """Deprecated: use GetMinterOwnership instead."""


@dataclass(frozen=True)
class GetMinterOwnership:
    pass


@dataclass(frozen=True)
class GetCreatorOwnership:
    pass


@dataclass(frozen=True)
class NftInfo:
    token_id: str


@dataclass(frozen=True)
class AllNftInfo:
    token_id: str
    include_expired: bool | None = None


@dataclass(frozen=True)
class Tokens:
    owner: str
    start_after: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class AllTokens:
    start_after: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class GetWithdrawAddress:
    pass


QueryMsg = Union[
    Admin,
    OwnerOf,
    Approval,
    Approvals,
    AllOperators,
    NumTokens,
    ContractInfo,
    GetCollectionInfoAndExtension,
    Minter,
    GetMinterOwnership,
    GetCreatorOwnership,
    NftInfo,
    AllNftInfo,
    Tokens,
    AllTokens,
    GetWithdrawAddress,
]


@dataclass(frozen=True, kw_only=True)
class InstantiateMsg:
    """Parameters of a new non-transferable collection."""

    name: str
    symbol: str
    admin: str | None = None
    collection_info_extension: Any = None
    minter: str | None = None
    creator: str | None = None
    withdraw_address: str | None = None


@dataclass(frozen=True)
class AdminResponse:
    admin: str | None


@dataclass
class Config:
    """Stored contract configuration."""

    admin: str | None = None

    @classmethod
    def load(cls, storage: Storage) -> "Config":
        return storage.load(CONFIG_KEY)

    def save(self, storage: Storage) -> None:
        storage.save(CONFIG_KEY, self)


_PASSTHROUGH = {
    OwnerOf: "owner_of",
    NumTokens: "num_tokens",
    GetCollectionInfoAndExtension: "get_collection_info_and_extension",
    NftInfo: "nft_info",
    AllNftInfo: "all_nft_info",
    Tokens: "tokens",
    AllTokens: "all_tokens",
    Minter: "minter",
    GetMinterOwnership: "get_minter_ownership",
    GetCreatorOwnership: "get_creator_ownership",
    GetWithdrawAddress: "get_withdraw_address",
}

_UNSUPPORTED = {
    AllOperators: "AllOperators is not supported!",
    Approval: "Approval is not supported!",
    Approvals: "Approvals is not supported!",
    Admin: "Approvals is not supported!",
}


def to_cw721_query(msg: QueryMsg) -> dict:
    """Convert a query into the standard NFT query's JSON form.

    The deprecated ``ContractInfo`` becomes ``get_collection_info_and_extension``.
    Queries the standard set cannot answer here raise ``ValueError``.
    """
    kind = type(msg)
    if kind is ContractInfo:
        return {_PASSTHROUGH[GetCollectionInfoAndExtension]: {}}
    if kind in _PASSTHROUGH:
        return {_PASSTHROUGH[kind]: asdict(msg)}
    if kind in _UNSUPPORTED:
        raise ValueError(_UNSUPPORTED[kind])
    raise TypeError(f"unknown query: {msg!r}")


def admin(storage: Storage) -> AdminResponse:
    """Return the configured admin, if any."""
    return AdminResponse(admin=Config.load(storage).admin)