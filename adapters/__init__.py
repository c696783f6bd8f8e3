"""
API Adapters Package
Contains base adapter and the OneSource GraphQL adapter.
"""

from .base import BaseAdapter
from .onesource import GraphQLRequestError, OneSourceAdapter

__all__ = [
    'BaseAdapter',
    'GraphQLRequestError',
    'OneSourceAdapter'
]
