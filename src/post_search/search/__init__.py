"""
Search Module

Provides the pure title filter applied to fetched posts.
"""

from .filter import filter_posts

__all__ = ["filter_posts"]
