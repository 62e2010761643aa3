"""
Screen Module

Provides the posts screen state machine and its async controller.
"""

from .controller import PostsScreen
from .state import Phase, ScreenState, Status, reduce

__all__ = ["PostsScreen", "Phase", "ScreenState", "Status", "reduce"]
