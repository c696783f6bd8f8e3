"""
Fetch service for NFT token and balance queries.

This service runs the GraphQL queries against OneSource, concurrently when a
page needs both the token and the owner's balances, and turns any request
failure into a single FetchError.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from adapters.onesource import GraphQLRequestError, OneSourceAdapter
from adapters.queries import GET_BALANCES_QUERY, GET_TOKEN_QUERY
from models.nft_models import BalancePage, Token

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch NFT"


class FetchError(Exception):
    """One or more queries for a page failed."""

    def __init__(self, message: str = FETCH_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class FetchService:
    """Service for fetching token and balance data."""

    def __init__(self, onesource_adapter: OneSourceAdapter):
        """Initialize with OneSourceAdapter."""
        self.onesource_adapter = onesource_adapter

    async def fetch_token(self, contract: str, token_id: str) -> Optional[Token]:
        """Fetch a single token; None when the API has no such token."""
        (data,) = await self._run_all(
            (GET_TOKEN_QUERY, self._token_variables(contract, token_id))
        )
        return self._decode_token(data)

    async def fetch_balances(
        self, owner: str, contract: Optional[str] = None, first: int = 10, skip: int = 0
    ) -> BalancePage:
        """Fetch one page of balances held by owner."""
        (data,) = await self._run_all(
            (GET_BALANCES_QUERY, self._balance_variables(owner, contract, first, skip))
        )
        return self._decode_balances(data)

    async def fetch_token_and_balances(
        self,
        contract: str,
        token_id: str,
        owner: str,
        first: int = 10,
        skip: int = 0,
    ) -> Tuple[Optional[Token], BalancePage]:
        """
        Fetch a token and the owner's balances for its contract concurrently.

        Both queries always run to completion. If either fails, both results
        are discarded and FetchError is raised.
        """
        token_data, balance_data = await self._run_all(
            (GET_TOKEN_QUERY, self._token_variables(contract, token_id)),
            (GET_BALANCES_QUERY, self._balance_variables(owner, contract, first, skip)),
        )
        return self._decode_token(token_data), self._decode_balances(balance_data)

    async def _run_all(self, *queries: Tuple[str, Dict[str, Any]]) -> list:
        results = await asyncio.gather(
            *(
                self.onesource_adapter.execute_async(query, variables)
                for query, variables in queries
            ),
            return_exceptions=True,
        )

        failed = False
        for result in results:
            if isinstance(result, GraphQLRequestError):
                logger.error("Error fetching NFT: %s", result)
                failed = True
            elif isinstance(result, BaseException):
                # Anything else is a bug, not a fetch failure
                raise result
        if failed:
            raise FetchError()
        return list(results)

    @staticmethod
    def _token_variables(contract: str, token_id: str) -> Dict[str, Any]:
        return {"contract": contract, "tokenID": str(token_id)}

    @staticmethod
    def _balance_variables(
        owner: str, contract: Optional[str], first: int, skip: int
    ) -> Dict[str, Any]:
        if first <= 0:
            raise ValueError(f"first must be positive, got {first}")
        if skip < 0:
            raise ValueError(f"skip must not be negative, got {skip}")
        return {"owner": owner, "contract": contract, "first": first, "skip": skip}

    @staticmethod
    def _decode_token(data: Dict[str, Any]) -> Optional[Token]:
        token = data.get("token")
        if token is None:
            return None
        return Token.from_dict(token)

    @staticmethod
    def _decode_balances(data: Dict[str, Any]) -> BalancePage:
        balances = data.get("balances")
        if balances is None:
            return BalancePage(count=0, remaining=0, cursor=None, entries=())
        return BalancePage.from_dict(balances)
