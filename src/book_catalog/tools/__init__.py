"""
Book Catalog MCP Tools.

Tools are the operations with side effects (and the parameterized listing)
that MCP clients call by name.
"""

from .books import book_tools

all_tools = book_tools

__all__ = [
    "all_tools",
    "book_tools",
]
