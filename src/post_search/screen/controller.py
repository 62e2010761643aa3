"""
Posts Screen Controller

Orchestrates the fetch / filter / persist flow for the posts screen:

1. On mount, fetch posts and read the stored query concurrently, then
   apply the filter once both have resolved
2. On every query change, re-filter immediately and persist the query
   in a detached task
3. On manual refresh, re-fetch and re-filter with the current query

All mutation happens on the one event loop through reduce().
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..api.client import FetchError, PostsClient
from ..storage.store import QueryStore
from .state import (
    Action,
    LoadFailed,
    Loaded,
    QueryChanged,
    Refreshed,
    RefreshFailed,
    RefreshStarted,
    ScreenState,
    Status,
    reduce,
)


logger = logging.getLogger(__name__)

Listener = Callable[[ScreenState], None]


class PostsScreen:
    """
    Headless posts screen.

    Holds the single ScreenState and notifies listeners after every
    transition. Rendering is left to the listeners.
    """

    def __init__(
        self,
        client: Optional[PostsClient] = None,
        store: Optional[QueryStore] = None,
    ):
        """Initialize the screen in the loading state."""
        self.client = client or PostsClient()
        self.store = store or QueryStore()
        self.state = ScreenState()
        self._listeners: List[Listener] = []
        self._writes: Set[asyncio.Task] = set()
        self._refresh_in_flight = False
        self._query_edited = False

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with each new state.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> ScreenState:
        """Apply an action and notify listeners."""
        self.state = reduce(self.state, action)
        logger.debug(
            f"{type(action).__name__} -> {self.state.phase.value} "
            f"({len(self.state.visible)}/{len(self.state.posts)} visible)"
        )
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    async def mount(self) -> ScreenState:
        """
        Load the initial posts and restore the stored query.

        Returns:
            The state after the initial load (READY or ERROR).
        """
        logger.info("Mounting posts screen")
        for listener in list(self._listeners):
            listener(self.state)

        posts_result, stored = await asyncio.gather(
            self._fetch(),
            self._read_stored_query(),
        )

        # A query typed while loading wins over the stored one.
        query = self.state.query if self._query_edited else (stored or "")

        if isinstance(posts_result, FetchError):
            logger.error(f"Initial fetch failed: {posts_result}")
            return self.dispatch(LoadFailed(query=query))

        return self.dispatch(Loaded(posts=tuple(posts_result), query=query))

    def change_query(self, text: str) -> ScreenState:
        """
        Update the query and re-filter the current posts.

        The new query is persisted in the background; a failed write is
        logged and never affects the returned state.
        """
        self._query_edited = True
        state = self.dispatch(QueryChanged(query=text))

        task = asyncio.get_running_loop().create_task(self._persist_query(text))
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)
        return state

    async def refresh(self) -> bool:
        """
        Re-fetch posts and re-apply the current query.

        Returns:
            False if the initial load or another refresh was still in
            flight and this call was ignored, True otherwise.
        """
        if self.state.status is Status.LOADING:
            logger.info("Initial load still running, ignoring refresh request")
            return False
        if self._refresh_in_flight:
            logger.info("Refresh already in flight, ignoring request")
            return False

        self._refresh_in_flight = True
        try:
            self.dispatch(RefreshStarted())
            result = await self._fetch()
            if isinstance(result, FetchError):
                logger.error(f"Refresh failed: {result}")
                self.dispatch(RefreshFailed())
            else:
                self.dispatch(Refreshed(posts=tuple(result)))
        finally:
            self._refresh_in_flight = False
        return True

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_in_flight

    async def wait_for_writes(self) -> None:
        """Wait until every pending query write has finished."""
        while self._writes:
            await asyncio.gather(*list(self._writes))

    async def _fetch(self):
        try:
            return await self.client.fetch_posts()
        except FetchError as e:
            return e

    async def _read_stored_query(self) -> Optional[str]:
        try:
            return await self.store.get()
        except Exception as e:
            logger.warning(f"Could not read stored query: {e}")
            return None

    async def _persist_query(self, text: str) -> None:
        try:
            await self.store.set(text)
        except Exception as e:
            logger.warning(f"Could not persist query {text!r}: {e}")
