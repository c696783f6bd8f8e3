"""
Data models for NFT display.
"""

from .nft_models import (
    BalanceEntry,
    BalancePage,
    BalanceView,
    ContractInfo,
    ImageBlock,
    NFTViewModel,
    OwnedToken,
    PageResult,
    ResponseShapeError,
    Thumbnail,
    ThumbnailBlock,
    Token,
    TokenImage,
    TokenView,
)

__all__ = [
    "BalanceEntry",
    "BalancePage",
    "BalanceView",
    "ContractInfo",
    "ImageBlock",
    "NFTViewModel",
    "OwnedToken",
    "PageResult",
    "ResponseShapeError",
    "Thumbnail",
    "ThumbnailBlock",
    "Token",
    "TokenImage",
    "TokenView",
]
