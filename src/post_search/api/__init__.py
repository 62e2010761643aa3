"""
API Client Module

Provides the async HTTP client for fetching posts.
"""

from .client import FetchError, Post, PostsClient

__all__ = ["FetchError", "Post", "PostsClient"]
