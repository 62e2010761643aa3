"""
Configuration constants for Post Search.

This module centralizes all configurable parameters to make the client
easy to tune and adapt to different environments.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "POST_SEARCH_API_URL", "https://jsonplaceholder.typicode.com"
        )
    )
    posts_endpoint: str = "/posts"
    timeout_seconds: float = 10.0

    @property
    def posts_url(self) -> str:
        """Get the full URL of the posts endpoint."""
        return f"{self.base_url.rstrip('/')}{self.posts_endpoint}"


@dataclass
class StorageConfig:
    """Local key-value storage configuration."""
    directory: Path = field(
        default_factory=lambda: Path(
            os.environ.get(
                "POST_SEARCH_STORAGE_DIR",
                Path(os.path.expanduser("~")) / ".post_search",
            )
        )
    )
    filename: str = "storage.json"
    search_key: str = "SEARCH_HISTORY"

    @property
    def path(self) -> Path:
        """Get the full path to the storage file."""
        return self.directory / self.filename


@dataclass
class ScreenConfig:
    """User-facing text shown by the posts screen."""
    fetch_error_message: str = "Unable to fetch posts. Check your network connection."
    empty_text: str = "No posts found."
    loading_text: str = "Loading..."
    search_placeholder: str = "Search by title..."


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "post_search.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
