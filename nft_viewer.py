"""
NFT Viewer

This is the main entry point for loading an NFT page. The viewer coordinates
the fetch service and the view model builder, and classifies each load as
ok, error or not found for the renderer.
"""

import logging
from typing import Optional

from adapters.onesource import OneSourceAdapter
from config import Config
from models.nft_models import PageResult
from services.fetch_service import FetchError, FetchService
from services.view_model_service import build_view_model

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No NFT data found"


class NFTViewer:
    """Coordinates fetching and shaping for one NFT page."""

    def __init__(self, config: Config, onesource_adapter: OneSourceAdapter = None):
        """Initialize with config and an optional pre-built adapter."""
        self.config = config
        self.onesource_adapter = onesource_adapter or OneSourceAdapter(config)
        self.fetch_service = FetchService(self.onesource_adapter)

    async def __aenter__(self):
        """Async context manager entry."""
        await self.onesource_adapter.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.onesource_adapter.__aexit__(exc_type, exc_val, exc_tb)

    async def load(
        self,
        contract: Optional[str] = None,
        token_id: Optional[str] = None,
        owner: Optional[str] = None,
        include_balances: bool = True,
        first: int = 10,
        skip: int = 0,
    ) -> PageResult:
        """
        Load one page.

        Args:
            contract: Contract address (defaults to config)
            token_id: Token ID (defaults to config)
            owner: Wallet whose balances are listed (defaults to config)
            include_balances: Whether to fetch the owner's balances as well
            first: Balance page size
            skip: Balance page offset

        Returns:
            PageResult with a view model, or an error / not-found message
        """
        contract = contract or self.config.contract
        token_id = token_id or self.config.token_id
        owner = owner or self.config.owner

        balances = None
        try:
            if include_balances:
                token, balances = await self.fetch_service.fetch_token_and_balances(
                    contract, token_id, owner, first=first, skip=skip
                )
            else:
                token = await self.fetch_service.fetch_token(contract, token_id)
        except FetchError as e:
            return PageResult(status=PageResult.ERROR, message=e.message)

        if token is None:
            logger.info("No token %s at %s", token_id, contract)
            return PageResult(status=PageResult.NOT_FOUND, message=NOT_FOUND_MESSAGE)

        view_model = build_view_model(token, balances, self.config.ipfs_gateway)
        return PageResult(status=PageResult.OK, view_model=view_model)
