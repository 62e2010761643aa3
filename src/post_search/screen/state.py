"""
Screen State Module

The posts screen's state record and the reducer that moves it between
states. Every transition that touches posts or the query rebuilds the
visible list, so visible always equals filter_posts(posts, query).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from ..api.client import Post
from ..config import config
from ..search.filter import filter_posts


class Status(Enum):
    """Base status of the posts screen."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Phase(Enum):
    """Observable phase: the base status with refreshing overlaid."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    REFRESHING = "refreshing"


@dataclass(frozen=True)
class ScreenState:
    """Everything the posts screen renders."""
    status: Status = Status.LOADING
    posts: Tuple[Post, ...] = ()
    query: str = ""
    visible: Tuple[Post, ...] = ()
    error: Optional[str] = None
    refreshing: bool = False

    @property
    def phase(self) -> Phase:
        if self.refreshing:
            return Phase.REFRESHING
        return Phase(self.status.value)

    @property
    def is_empty(self) -> bool:
        """True when data is loaded but no post matches the query."""
        return self.status is Status.READY and not self.visible


@dataclass(frozen=True)
class Loaded:
    posts: Tuple[Post, ...]
    query: str


@dataclass(frozen=True)
class LoadFailed:
    query: str


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class RefreshStarted:
    pass


@dataclass(frozen=True)
class Refreshed:
    posts: Tuple[Post, ...]


@dataclass(frozen=True)
class RefreshFailed:
    pass


Action = Union[Loaded, LoadFailed, QueryChanged, RefreshStarted, Refreshed, RefreshFailed]


def _with_posts(state: ScreenState, posts: Tuple[Post, ...], query: str) -> ScreenState:
    posts = tuple(posts)
    return replace(
        state,
        status=Status.READY,
        posts=posts,
        query=query,
        visible=filter_posts(posts, query),
        error=None,
        refreshing=False,
    )


def _failed(state: ScreenState, query: str) -> ScreenState:
    return replace(
        state,
        status=Status.ERROR,
        posts=(),
        query=query,
        visible=(),
        error=config.screen.fetch_error_message,
        refreshing=False,
    )


def reduce(state: ScreenState, action: Action) -> ScreenState:
    """
    Apply one action to the screen state.

    Args:
        state: The current state.
        action: What happened.

    Returns:
        The next state. The input is never mutated.

    Raises:
        TypeError: For an unknown action.
    """
    if isinstance(action, Loaded):
        return _with_posts(state, action.posts, action.query)

    if isinstance(action, LoadFailed):
        return _failed(state, action.query)

    if isinstance(action, QueryChanged):
        return replace(
            state,
            query=action.query,
            visible=filter_posts(state.posts, action.query),
        )

    if isinstance(action, RefreshStarted):
        return replace(state, refreshing=True)

    # Refresh results use the query current at completion, not at start.
    if isinstance(action, Refreshed):
        return _with_posts(state, action.posts, state.query)

    if isinstance(action, RefreshFailed):
        return _failed(state, state.query)

    raise TypeError(f"Unknown action: {action!r}")
