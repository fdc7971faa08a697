"""
Book Catalog MCP Server Package.

This package implements a small catalog service that stores book records and
exposes create/read/update/delete operations plus filtered, paginated listing
through an MCP (Model Context Protocol) server.

Key Components:
- models: Pydantic models for books and the commands that change them
- validation: Checks applied to new books before they are stored
- database: The book store interface with in-memory and SQL backends
- config: Configuration management with Pydantic v2
- resources: MCP resources (read-only endpoints)
- tools: MCP tools (operations with side effects)
"""

__version__ = "0.1.0"

from . import database

__all__ = [
    "__version__",
    "database",
]
