"""
Post Search

Fetches posts from a JSON API, filters them by title and remembers the
last search across runs.
"""

__version__ = "0.1.0"
