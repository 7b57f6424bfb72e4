"""
UI module for the blog core.

Contains the line-oriented console that renders posts, post details and
navigation from a BlogContext.
"""

from ui.console import BlogConsole

__all__ = [
    'BlogConsole',
]
