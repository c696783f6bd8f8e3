#!/usr/bin/env python3
"""
OneSource API Adapter
GraphQL adapter for NFT token and balance data from OneSource.
Documentation: https://docs.onesource.io/
"""

from typing import Any, Dict, List, Optional

import aiohttp

from config import Config
from .base import BaseAdapter
from .queries import HEALTH_CHECK_QUERY


class GraphQLRequestError(Exception):
    """A GraphQL request failed in transport or returned an error payload."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class OneSourceAdapter(BaseAdapter):
    """Adapter for the OneSource GraphQL API."""

    def __init__(
        self, config: Config, session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize OneSource adapter.

        Args:
            config: Viewer configuration carrying endpoint, token and timeout
            session: Optional aiohttp session to reuse for async queries

        Raises:
            ConfigError: If no BP_TOKEN is configured
        """
        self.config = config

        # Initialize base adapter with the GraphQL endpoint
        super().__init__(
            base_url=config.api_url,
            headers=config.auth_headers(),
            timeout=config.request_timeout,
            session=session,
        )

    def authenticate(self) -> bool:
        """
        Authenticate with OneSource by running a trivial query.

        Returns:
            True if authentication successful, False otherwise
        """
        try:
            self.execute(HEALTH_CHECK_QUERY)
            return True
        except GraphQLRequestError as e:
            self._handle_error(f"Authentication failed: {e}")
            return False

    def validate_response(self, response: Dict[str, Any]) -> bool:
        """
        Validate GraphQL response format.

        Args:
            response: API response dictionary

        Returns:
            True if response is valid, False otherwise
        """
        if not isinstance(response, dict):
            return False

        # A GraphQL response carries data, errors, or both
        return "data" in response or "errors" in response

    def execute(
        self, query: str, variables: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Run a GraphQL query synchronously.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response's data object

        Raises:
            GraphQLRequestError: On transport failure or GraphQL errors
        """
        response = self.post("", json_data=self._payload(query, variables))
        return self._unwrap(response)

    async def execute_async(
        self, query: str, variables: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Run a GraphQL query on the adapter's aiohttp session.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response's data object

        Raises:
            GraphQLRequestError: On transport failure or GraphQL errors
        """
        response = await self.post_async("", json_data=self._payload(query, variables))
        return self._unwrap(response)

    @staticmethod
    def _payload(query: str, variables: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {"query": query, "variables": variables or {}}

    def _unwrap(self, response: Optional[Dict]) -> Dict[str, Any]:
        if response is None:
            raise GraphQLRequestError(f"Request to {self.base_url} failed")

        if not self.validate_response(response):
            raise GraphQLRequestError("Malformed GraphQL response")

        errors = response.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise GraphQLRequestError(f"GraphQL errors: {messages}", errors)

        data = response.get("data")
        if not isinstance(data, dict):
            raise GraphQLRequestError("GraphQL response has no data")
        return data
