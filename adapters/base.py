#!/usr/bin/env python3
"""
Base Adapter for Data Source Integrations
A foundational class for creating specific API adapters.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp
import requests

logger = logging.getLogger(__name__)


class BaseAdapter(ABC):
    """Base adapter class for API integrations with common functionality."""

    def __init__(
        self,
        base_url: str = None,
        headers: Dict[str, str] = None,
        timeout: float = 30,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the base adapter.

        Args:
            base_url: Base URL for API endpoints
            headers: Default headers for requests
            timeout: Request timeout in seconds, applied to sync and async calls
            session: Optional aiohttp session for async calls (owned by caller)
        """
        self.base_url = base_url or ""
        self.headers = headers or {}
        self.timeout = timeout
        self.session = requests.Session()
        self.async_session = session
        self._own_async_session = session is None

        # Set default headers
        if self.headers:
            self.session.headers.update(self.headers)

    async def __aenter__(self):
        """Async context manager entry."""
        if self._own_async_session and self.async_session is None:
            self.async_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        self.session.close()
        if self._own_async_session and self.async_session:
            await self.async_session.close()
            self.async_session = None

    def post(
        self,
        endpoint: str,
        data: Dict[str, Any] = None,
        json_data: Dict[str, Any] = None,
    ) -> Optional[Dict]:
        """
        Perform a POST request to the specified endpoint.

        Args:
            endpoint: API endpoint
            data: Form data to send
            json_data: JSON data to send

        Returns:
            JSON response as dictionary or None if failed
        """
        url = self._build_url(endpoint)
        try:
            response = self.session.post(
                url, data=data, json=json_data, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            self._handle_error(f"Error posting data to {url}: {e}")
            return None
        except json.JSONDecodeError as e:
            self._handle_error(f"Error parsing JSON response: {e}")
            return None

    async def post_async(
        self, endpoint: str, json_data: Dict[str, Any] = None
    ) -> Optional[Dict]:
        """
        Perform a POST request with the adapter's aiohttp session.

        Args:
            endpoint: API endpoint
            json_data: JSON data to send

        Returns:
            JSON response as dictionary or None if failed
        """
        if self.async_session is None:
            raise RuntimeError(
                f"{type(self).__name__} must be used as an async context manager"
            )

        url = self._build_url(endpoint)
        try:
            async with self.async_session.post(
                url,
                json=json_data,
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except asyncio.TimeoutError:
            self._handle_error(f"Timed out after {self.timeout}s posting to {url}")
            return None
        except aiohttp.ClientError as e:
            self._handle_error(f"Error posting data to {url}: {e}")
            return None
        except json.JSONDecodeError as e:
            self._handle_error(f"Error parsing JSON response: {e}")
            return None

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from base URL and endpoint."""
        if not endpoint:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def _handle_error(self, message: str) -> None:
        """Handle error messages. Can be overridden by subclasses."""
        logger.error(message)

    @abstractmethod
    def authenticate(self) -> bool:
        """
        Authenticate with the API service.
        Must be implemented by subclasses.

        Returns:
            True if authentication successful, False otherwise
        """
        pass

    @abstractmethod
    def validate_response(self, response: Dict[str, Any]) -> bool:
        """
        Validate API response format.
        Must be implemented by subclasses.

        Args:
            response: API response dictionary

        Returns:
            True if response is valid, False otherwise
        """
        pass
