"""
Trendy Images MCP Server - Main Entry Point

Configures logging and runs the FastMCP server on the configured
transport.
"""
import asyncio

from trendy_images.config import load_settings
from trendy_images.reddit.scraper import close_scraper
from trendy_images.server import SERVER_VERSION, mcp
from trendy_images.utils.logger import get_logger, setup_logging

# Import tools to register them with the MCP server
import trendy_images.tools.scrape_trendy_images  # noqa: F401

# Initialize logger (will be reconfigured in main())
logger = get_logger(__name__)

TRANSPORTS = {
    "stdio": mcp.run_stdio_async,
    "sse": mcp.run_sse_async,
    "streamable-http": mcp.run_streamable_http_async,
}


async def main() -> None:
    """
    Main entry point.

    Sets up structured logging from the environment and serves MCP
    requests until the transport closes.

    Raises:
        ValueError: If MCP_TRANSPORT names an unknown transport
    """
    settings = load_settings()
    setup_logging(level=settings.log_level, environment=settings.environment)

    logger.info(
        "server_starting",
        version=SERVER_VERSION,
        environment=settings.environment,
        log_level=settings.log_level,
        credentials_configured=settings.has_credentials,
    )

    serve = TRANSPORTS.get(settings.mcp_transport)
    if serve is None:
        raise ValueError(
            f"Unknown MCP_TRANSPORT '{settings.mcp_transport}'. "
            f"Expected one of: {', '.join(sorted(TRANSPORTS))}"
        )

    logger.info("starting_mcp_server", transport=settings.mcp_transport)

    try:
        await serve()
    except Exception as e:
        logger.error(
            "server_error",
            error=str(e),
            exc_info=True,
        )
        raise
    finally:
        await close_scraper()
        logger.info("server_shutdown_complete")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
