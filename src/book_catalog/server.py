"""Book Catalog MCP Server - FastMCP Implementation

Exposes the book store to MCP clients.

Features exposed:
- Resources: health check, first catalog page, book details
- Tools: list, add, get, update and delete books
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from book_catalog.config import get_config
from book_catalog.database.provider import get_book_store, reset_book_store
from book_catalog.resources import all_resources
from book_catalog.tools import all_tools

# stderr for logs, stdout for the MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger(__name__)

config = get_config()


def create_server() -> FastMCP:
    """Create the FastMCP server and register every resource and tool."""
    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Book Catalog MCP Server - stores book records. Use the list_books tool "
            "to browse with filters and pagination, add_book/update_book/delete_book "
            "to change the catalog, and the library:// resources for quick reads."
        ),
    )

    for resource in all_resources:
        uri = resource.get("uri_template", resource.get("uri"))
        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        mcp.resource(
            uri,
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])

    logger.info("Registered %d resources", len(all_resources))

    for tool in all_tools:
        logger.debug("Registering tool: %s", tool["name"])
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])

    logger.info("Registered %d tools", len(all_tools))
    return mcp


def configure_logging() -> None:
    """Apply the configured log level."""
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled - verbose logging active")
    else:
        logging.getLogger().setLevel(config.log_level)
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def run_server(mcp: FastMCP) -> None:
    """Run the server on the configured transport.

    stdio: JSON-RPC over stdin/stdout, for local clients.
    streamable_http: HTTP on ``http_host:http_port``.
    """

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        reset_book_store()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Build the store up front so configuration errors surface at startup
    store = get_book_store()
    logger.info("Book store ready with %d book(s)", store.count())

    if config.transport == "stdio":
        logger.info(
            "Starting %s v%s on stdio transport", config.server_name, config.server_version
        )
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting %s v%s on http://%s:%d",
            config.server_name,
            config.server_version,
            config.http_host,
            config.http_port,
        )
        mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)


def main() -> None:
    """Main entry point for the MCP server (``book-catalog`` console script)."""
    try:
        configure_logging()
        logger.info("Book Catalog MCP Server")
        logger.info("Version: %s", config.server_version)
        logger.info("Transport: %s", config.transport)
        logger.info("Storage: %s", config.storage_backend)

        run_server(create_server())

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)
    finally:
        reset_book_store()


if __name__ == "__main__":
    main()
