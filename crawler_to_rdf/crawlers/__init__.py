"""Crawler front ends."""

from ..models.config_models import CrawlerConfig
from .base import Crawler, CrawlerRegistry
from .lkt import LKTLogbookCrawler

__all__ = [
    "Crawler",
    "CrawlerRegistry",
    "LKTLogbookCrawler",
    "default_registry",
]


def default_registry(config: CrawlerConfig | None = None) -> CrawlerRegistry:
    """Registry with all built-in crawlers."""
    registry = CrawlerRegistry()
    registry.register(LKTLogbookCrawler(config))
    return registry
