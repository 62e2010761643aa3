"""
API Client Module

Async HTTP client for fetching posts from the JSONPlaceholder API.
A single GET per call, no retries: failures surface as FetchError and
the caller decides what to show.
"""

import logging
from typing import Any, List, Optional
from dataclasses import dataclass

import httpx

from ..config import config


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the posts list cannot be retrieved or parsed."""


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: int
    title: str
    body: str
    user_id: Optional[int] = None

    @classmethod
    def from_dict(cls, item: Any) -> "Post":
        """
        Build a Post from one decoded JSON object.

        Raises:
            FetchError: If the item is not an object, lacks a required field
                or a field has the wrong type.
        """
        if not isinstance(item, dict):
            raise FetchError(f"Expected a post object, got {type(item).__name__}")
        try:
            post_id, title, body = item["id"], item["title"], item["body"]
        except KeyError as e:
            raise FetchError(f"Post is missing field {e}") from e

        # bool is an int subclass but never a valid id
        if not isinstance(post_id, int) or isinstance(post_id, bool):
            raise FetchError(f"Post id must be an integer, got {type(post_id).__name__}")
        for name, value in (("title", title), ("body", body)):
            if not isinstance(value, str):
                raise FetchError(f"Post {name} must be a string, got {type(value).__name__}")

        return cls(id=post_id, title=title, body=body, user_id=item.get("userId"))


class PostsClient:
    """
    HTTP client for the posts endpoint.

    An httpx.AsyncClient may be injected (tests pass one built on
    httpx.MockTransport); otherwise a client is opened per fetch.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the API client."""
        self.url = url or config.api.posts_url
        self.timeout = timeout if timeout is not None else config.api.timeout_seconds
        self._http_client = http_client
        logger.info(f"PostsClient initialized (url: {self.url})")

    async def fetch_posts(self) -> List[Post]:
        """
        Fetch all posts from the API.

        Returns:
            List of Post objects in the order the API returned them.

        Raises:
            FetchError: On a transport failure, a non-2xx status or a
                malformed body.
        """
        logger.info(f"Fetching posts from {self.url}")

        try:
            if self._http_client is not None:
                response = await self._http_client.get(self.url, timeout=self.timeout)
                response.raise_for_status()
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Posts endpoint returned {e.response.status_code}")
            raise FetchError(f"Unexpected status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Transport error while fetching posts: {e!r}")
            raise FetchError(f"Request failed: {e}") from e

        posts = self._parse(response)
        logger.info(f"Fetched {len(posts)} posts successfully")
        return posts

    def _parse(self, response: httpx.Response) -> List[Post]:
        """
        Decode a response body into posts.

        Args:
            response: A successful response from the posts endpoint.

        Returns:
            List of Post objects.
        """
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Posts response is not valid JSON")
            raise FetchError("Response body is not valid JSON") from e

        if not isinstance(data, list):
            raise FetchError(f"Unexpected API response format: {type(data).__name__}")

        return [Post.from_dict(item) for item in data]
