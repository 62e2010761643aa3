"""Title substring filter for posts."""

from typing import Iterable, Tuple

from ..api.client import Post


def filter_posts(posts: Iterable[Post], query: str) -> Tuple[Post, ...]:
    """
    Select the posts whose title contains the query, ignoring case.

    An empty query keeps every post. Relative order is preserved.
    """
    if not query:
        return tuple(posts)

    needle = query.casefold()
    return tuple(post for post in posts if needle in post.title.casefold())
