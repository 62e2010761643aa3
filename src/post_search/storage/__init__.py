"""
Storage Module

Provides durable storage for the last search query.
"""

from .store import QueryStore

__all__ = ["QueryStore"]
