"""Trendy image scraping from Reddit hot listings, served over MCP."""

from trendy_images.config import APP_VERSION

__version__ = APP_VERSION
