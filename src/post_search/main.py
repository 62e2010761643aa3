"""
Main Entry Point

Terminal front end for the posts screen:

1. Mount the screen (fetch posts, restore the last search)
2. Render every state change as plain text
3. Read commands from stdin until the user quits:
   - any text sets the search query
   - ":r" pulls to refresh
   - ":q" quits
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, TextIO

from .config import config
from .screen import Phase, PostsScreen, ScreenState
from .storage import QueryStore


REFRESH_COMMAND = ":r"
QUIT_COMMAND = ":q"


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("post_search")
    logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='a',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def render_card(title: str, body: str) -> str:
    """Format one post as a title line over its body."""
    # Capitalize each word's first letter only, leaving the rest as sent.
    heading = " ".join(word[:1].upper() + word[1:] for word in title.split(" "))
    return f"{heading}\n{body}"


def render_state(state: ScreenState) -> str:
    """
    Render a screen state as text.

    Loading shows a placeholder, an error replaces the list entirely,
    and an empty match shows the empty-state text.
    """
    if state.phase is Phase.LOADING:
        return config.screen.loading_text

    lines: List[str] = [f"{config.screen.search_placeholder} [{state.query}]"]
    if state.refreshing:
        lines.append("Refreshing...")

    if state.error:
        lines.append(state.error)
    elif state.is_empty:
        lines.append(config.screen.empty_text)
    else:
        lines.extend(render_card(post.title, post.body) + "\n" for post in state.visible)

    return "\n".join(lines)


class TerminalApp:
    """Drives a PostsScreen from line-based input."""

    def __init__(
        self,
        screen: PostsScreen,
        out: Optional[TextIO] = None,
    ):
        self.screen = screen
        self.out = out or sys.stdout
        self.logger = logging.getLogger("post_search.main")
        screen.subscribe(self._render)

    def _render(self, state: ScreenState) -> None:
        print(render_state(state), file=self.out)
        print("-" * 40, file=self.out)

    async def handle(self, line: str) -> bool:
        """
        Handle one input line.

        Returns:
            False when the user asked to quit.
        """
        command = line.rstrip("\n")
        if command == QUIT_COMMAND:
            return False
        if command == REFRESH_COMMAND:
            await self.screen.refresh()
        else:
            self.screen.change_query(command)
        return True

    async def run(self, query: Optional[str] = None, once: bool = False) -> ScreenState:
        """Mount, optionally apply a query, then loop over stdin."""
        await self.screen.mount()
        if query is not None:
            self.screen.change_query(query)

        try:
            if not once:
                loop = asyncio.get_running_loop()
                while True:
                    line = await loop.run_in_executor(None, sys.stdin.readline)
                    if not line or not await self.handle(line):
                        break
        finally:
            await self.screen.wait_for_writes()

        return self.screen.state


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="post-search",
        description="Browse and search posts from the posts API.",
    )
    parser.add_argument("--query", help="search query to apply after loading")
    parser.add_argument("--once", action="store_true", help="render once and exit")
    parser.add_argument("--reset", action="store_true", help="forget the stored search query")
    parser.add_argument("--log-level", default=config.log.log_level)
    return parser.parse_args(argv)


async def _main(args: argparse.Namespace) -> ScreenState:
    store = QueryStore()
    if args.reset:
        await store.clear()

    app = TerminalApp(PostsScreen(store=store))
    return await app.run(query=args.query, once=args.once)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the posts screen."""
    args = parse_args(argv)
    logger = setup_logging(args.log_level)

    try:
        state = asyncio.run(_main(args))
        sys.exit(1 if state.error else 0)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
