"""
Services for fetching and shaping NFT data.
"""

from .fetch_service import FetchError, FetchService
from . import view_model_service

__all__ = ["FetchError", "FetchService", "view_model_service"]
