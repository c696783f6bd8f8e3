"""
View model service for shaping decoded NFT data for display.

This service normalizes image URLs (including bare IPFS hashes), formats
dates, decides which image blocks are displayable and maps balance entries
one-to-one into display rows. Everything here is a pure function of its
input.
"""

import re
from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import urlparse

from config import DEFAULT_IPFS_GATEWAY
from models.nft_models import (
    IMAGE_STATUS_OK,
    BalanceEntry,
    BalancePage,
    BalanceView,
    ImageBlock,
    NFTViewModel,
    ThumbnailBlock,
    Token,
    TokenImage,
    TokenView,
)

IPFS_HASH_PREFIX = "Qm"

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def resolve_image_url(url: str, gateway: str = DEFAULT_IPFS_GATEWAY) -> str:
    """
    Normalize an image URL for display.

    Args:
        url: Raw URL from the API
        gateway: Host of the IPFS gateway used for bare content hashes

    Returns:
        http(s) URLs unchanged, bare "Qm..." hashes rewritten to the gateway,
        anything else unchanged
    """
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith(IPFS_HASH_PREFIX):
        return f"https://{gateway}/ipfs/{url}"
    return url


def format_date(value: Optional[str]) -> str:
    """
    Format an ISO-8601 or unix-seconds timestamp as M/D/YYYY in local time.

    Date-only values are UTC midnight. Unparseable values are returned
    unchanged.
    """
    if not value:
        return ""
    text = str(value).strip()
    try:
        if text.isdigit():
            moment = datetime.fromtimestamp(int(text))
        else:
            iso = _FRACTION_RE.sub(
                lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text
            )
            moment = datetime.fromisoformat(iso.replace("Z", "+00:00"))
            if _DATE_ONLY_RE.match(text):
                moment = moment.replace(tzinfo=timezone.utc)
            if moment.tzinfo is not None:
                moment = moment.astimezone()
    except (ValueError, OverflowError, OSError):
        return text
    return f"{moment.month}/{moment.day}/{moment.year}"


def is_allowed_image_host(url: str, allowed_hosts: Iterable[str]) -> bool:
    """Check whether an image URL points at one of the permitted hosts."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        # Malformed netloc, e.g. an unclosed IPv6 bracket
        return False
    if not host:
        return False
    return host.lower() in {h.lower() for h in allowed_hosts}


def build_image_block(
    image: Optional[TokenImage], alt: str, gateway: str = DEFAULT_IPFS_GATEWAY
) -> Optional[ImageBlock]:
    """Build a displayable image block, or None unless the image status is OK."""
    if image is None or not image.is_ok:
        return None

    url = resolve_image_url(image.url, gateway)
    if not url:
        return None

    thumbnails = tuple(
        ThumbnailBlock(
            preset=thumb.preset,
            url=resolve_image_url(thumb.url, gateway),
            width=thumb.width,
            height=thumb.height,
        )
        for thumb in image.thumbnails
        if thumb.status == IMAGE_STATUS_OK and thumb.url
    )
    return ImageBlock(
        url=url,
        alt=alt,
        content_type=image.content_type,
        width=image.width,
        height=image.height,
        thumbnails=thumbnails,
    )


def build_token_view(token: Token, gateway: str = DEFAULT_IPFS_GATEWAY) -> TokenView:
    """Map a decoded token onto its display fields."""
    title = f"{token.contract.name} #{token.token_id}"
    return TokenView(
        title=title,
        token_id=token.token_id,
        contract_address=token.contract.id,
        contract_name=token.contract.name,
        contract_symbol=token.contract.symbol,
        token_type=token.contract.type,
        created_at=format_date(token.created_at),
        created_block=token.created_block,
        token_uri=token.token_uri or None,
        image=build_image_block(token.image, title, gateway),
    )


def build_balance_view(
    entry: BalanceEntry, gateway: str = DEFAULT_IPFS_GATEWAY
) -> BalanceView:
    """Map one balance entry onto a display row."""
    token_id = entry.token.token_id if entry.token else None
    image = None
    if entry.token:
        image = build_image_block(
            entry.token.image, f"{entry.contract.name} #{token_id}", gateway
        )
    return BalanceView(
        owner=entry.owner,
        contract_type=entry.contract_type,
        contract_name=entry.contract.name,
        contract_symbol=entry.contract.symbol,
        token_id=token_id,
        value=entry.value,
        image=image,
    )


def build_view_model(
    token: Token,
    balances: Optional[BalancePage] = None,
    gateway: str = DEFAULT_IPFS_GATEWAY,
) -> NFTViewModel:
    """
    Build the page view model.

    Balance entries keep the order the API returned them in; entries sharing
    a token ID are not merged.
    """
    if balances is None:
        return NFTViewModel(token=build_token_view(token, gateway))

    return NFTViewModel(
        token=build_token_view(token, gateway),
        balances=tuple(build_balance_view(e, gateway) for e in balances.entries),
        total_balances=balances.count,
        remaining=balances.remaining,
        cursor=balances.cursor,
    )
