"""
Text rendering for NFT pages.
"""

from typing import Iterable, List

from models.nft_models import BalanceView, ImageBlock, PageResult
from services.view_model_service import is_allowed_image_host


def _image_lines(image: ImageBlock, allowed_hosts: Iterable[str]) -> List[str]:
    if not is_allowed_image_host(image.url, allowed_hosts):
        return [f"🖼️  Image (host not allowed, link only): {image.url}"]

    size = ""
    if image.width and image.height:
        size = f" ({image.width}x{image.height})"
    lines = [f"🖼️  Image{size}: {image.url}"]
    for thumb in image.thumbnails:
        lines.append(f"     {thumb.preset}: {thumb.url}")
    return lines


def _balance_line(index: int, balance: BalanceView) -> str:
    token = f"#{balance.token_id}" if balance.token_id else "-"
    name = balance.contract_name or balance.contract_symbol or "Unknown"
    return (
        f"{index:<4} {name[:25]:<25} {token:<12} "
        f"{balance.contract_type:<10} {balance.value}"
    )


def render_page(result: PageResult, allowed_hosts: Iterable[str]) -> str:
    """
    Render a page result as plain text.

    Args:
        result: Outcome of NFTViewer.load
        allowed_hosts: Hosts images may be shown from

    Returns:
        The page text
    """
    if result.status == PageResult.ERROR:
        return f"Error: {result.message}"
    if not result.ok or result.view_model is None:
        return result.message or ""

    allowed_hosts = list(allowed_hosts)
    token = result.view_model.token
    lines = [token.title, "=" * 60]

    if token.image:
        lines.extend(_image_lines(token.image, allowed_hosts))

    lines.append(f"Token ID: {token.token_id}")
    lines.append(f"Contract: {token.contract_name} ({token.contract_symbol})")
    lines.append(f"Token Type: {token.token_type}")
    lines.append(f"Created At: {token.created_at}")
    if token.token_uri:
        lines.append(f"Token URI: {token.token_uri}")

    balances = result.view_model.balances
    if balances:
        owner = balances[0].owner
        lines.append("")
        lines.append(
            f"💰 BALANCES FOR {owner} "
            f"({len(balances)} of {result.view_model.total_balances})"
        )
        lines.append("-" * 60)
        lines.append(f"{'#':<4} {'Contract':<25} {'Token':<12} {'Type':<10} Value")
        for i, balance in enumerate(balances, 1):
            lines.append(_balance_line(i, balance))
        if result.view_model.remaining:
            lines.append(f"... {result.view_model.remaining} more")

    return "\n".join(lines)
