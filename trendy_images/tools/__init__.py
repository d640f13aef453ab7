"""MCP tool implementations for trendy image scraping."""

from trendy_images.tools.scrape_trendy_images import (
    ScrapeTrendyImagesInput,
    scrape_trendy_images,
)

__all__ = [
    "scrape_trendy_images",
    "ScrapeTrendyImagesInput",
]
