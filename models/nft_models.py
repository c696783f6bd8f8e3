"""
Data models for NFT token and balance display.

This module contains the decoded GraphQL response types and the render-ready
view types built from them. Every instance is created once per load and never
mutated afterwards.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

IMAGE_STATUS_OK = "OK"

_DECIMAL_RE = re.compile(r"^\d+(\.\d+)?$")


class ResponseShapeError(ValueError):
    """A decoded response is missing a field its query selects."""


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ResponseShapeError(f"{where}: expected an object, got {type(data).__name__}")
    value = data.get(key)
    if value is None:
        raise ResponseShapeError(f"{where}: missing required field '{key}'")
    return value


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


# === Decoded response types ===


@dataclass(frozen=True)
class ContractInfo:
    """Contract metadata attached to tokens and balances."""

    id: str
    type: str
    name: str
    symbol: str
    decimals: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractInfo":
        return cls(
            id=_require(data, "id", "contract"),
            type=data.get("type") or "",
            name=data.get("name") or "",
            symbol=data.get("symbol") or "",
            decimals=_optional_int(data.get("decimals")),
        )


@dataclass(frozen=True)
class Thumbnail:
    """A resized rendition of a token image, tagged by preset."""

    preset: str
    status: str
    url: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    content_type: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Thumbnail":
        return cls(
            preset=_require(data, "preset", "thumbnail"),
            status=_require(data, "status", "thumbnail"),
            url=data.get("url") or "",
            width=_optional_int(data.get("width")),
            height=_optional_int(data.get("height")),
            content_type=data.get("contentType") or "",
            created_at=data.get("createdAt") or "",
        )


@dataclass(frozen=True)
class TokenImage:
    """
    Image asset for a token.

    Only status is meaningful unless status is OK; callers must branch on
    is_ok before reading url or dimensions.
    """

    status: str
    url: str = ""
    content_type: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    thumbnails: Tuple[Thumbnail, ...] = ()
    created_at: str = ""
    error_msg: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status == IMAGE_STATUS_OK

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["TokenImage"]:
        if data is None:
            return None
        return cls(
            status=_require(data, "status", "image"),
            url=data.get("url") or "",
            content_type=data.get("contentType") or "",
            width=_optional_int(data.get("width")),
            height=_optional_int(data.get("height")),
            thumbnails=tuple(
                Thumbnail.from_dict(t) for t in (data.get("thumbnails") or [])
            ),
            created_at=data.get("createdAt") or "",
            error_msg=data.get("errorMsg"),
        )


@dataclass(frozen=True)
class Token:
    """An NFT identified by contract address and token ID."""

    contract: ContractInfo
    token_id: str
    token_uri: str = ""
    token_uri_status: str = ""
    image: Optional[TokenImage] = None
    created_at: str = ""
    created_block: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Token":
        return cls(
            contract=ContractInfo.from_dict(_require(data, "contract", "token")),
            token_id=str(_require(data, "tokenID", "token")),
            token_uri=data.get("tokenURI") or "",
            token_uri_status=data.get("tokenURIStatus") or "",
            image=TokenImage.from_dict(data.get("image")),
            created_at=data.get("createdAt") or "",
            created_block=_optional_int(data.get("createdBlock")),
        )


@dataclass(frozen=True)
class OwnedToken:
    """The token embedded in a balance entry."""

    token_id: str
    image: Optional[TokenImage] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OwnedToken":
        return cls(
            token_id=str(_require(data, "tokenID", "balance token")),
            image=TokenImage.from_dict(data.get("image")),
        )


@dataclass(frozen=True)
class BalanceEntry:
    """How many units of a token an owner holds."""

    owner: str
    contract_type: str
    contract: ContractInfo
    token: Optional[OwnedToken]
    value: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalanceEntry":
        value = str(_require(data, "value", "balance"))
        if not _DECIMAL_RE.match(value):
            raise ResponseShapeError(
                f"balance: value must be a non-negative decimal string, got {value!r}"
            )
        # Fungible balances carry no token
        token = data.get("token")
        return cls(
            owner=_require(data, "owner", "balance"),
            contract_type=data.get("contractType") or "",
            contract=ContractInfo.from_dict(_require(data, "contract", "balance")),
            token=OwnedToken.from_dict(token) if token is not None else None,
            value=value,
        )


@dataclass(frozen=True)
class BalancePage:
    """One page of balances with pagination metadata."""

    count: int
    remaining: int
    cursor: Optional[str]
    entries: Tuple[BalanceEntry, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalancePage":
        return cls(
            count=int(_require(data, "count", "balances")),
            remaining=int(data.get("remaining") or 0),
            cursor=data.get("cursor"),
            entries=tuple(
                BalanceEntry.from_dict(entry) for entry in (data.get("balances") or [])
            ),
        )


# === View types ===


@dataclass(frozen=True)
class ThumbnailBlock:
    preset: str
    url: str
    width: Optional[int]
    height: Optional[int]


@dataclass(frozen=True)
class ImageBlock:
    """A displayable image; only built for images whose status is OK."""

    url: str
    alt: str
    content_type: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    thumbnails: Tuple[ThumbnailBlock, ...] = ()


@dataclass(frozen=True)
class TokenView:
    title: str
    token_id: str
    contract_address: str
    contract_name: str
    contract_symbol: str
    token_type: str
    created_at: str
    created_block: Optional[int]
    token_uri: Optional[str]
    image: Optional[ImageBlock] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None


@dataclass(frozen=True)
class BalanceView:
    owner: str
    contract_type: str
    contract_name: str
    contract_symbol: str
    token_id: Optional[str]
    value: str
    image: Optional[ImageBlock] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None


@dataclass(frozen=True)
class NFTViewModel:
    """Everything the renderer needs for one page."""

    token: TokenView
    balances: Tuple[BalanceView, ...] = ()
    total_balances: int = 0
    remaining: int = 0
    cursor: Optional[str] = None


@dataclass(frozen=True)
class PageResult:
    """Outcome of one page load."""

    status: str
    view_model: Optional[NFTViewModel] = None
    message: Optional[str] = None

    OK = "ok"
    ERROR = "error"
    NOT_FOUND = "not_found"

    @property
    def ok(self) -> bool:
        return self.status == self.OK
