from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rdflib import Graph

from ..models.extraction_result import ExtractionResult
from ..models.validation_message import ValidationMessage

"""Crawler front-end interface and registry.

A crawler turns one kind of input document into an RDF graph in two steps:

    result = crawler.extract(path)          # never raises for content problems
    messages = crawler.validate(result)     # empty -> safe to build
    graph = crawler.build_graph(result, source=path.name)

New front ends implement this interface and register under a tool name; the
orchestrator and the CLI only talk to the interface.
"""

__all__ = [
    "Crawler",
    "CrawlerRegistry",
]


class Crawler(ABC):
    name: str = ""
    description: str = ""
    input_extensions: tuple[str, ...] = ()

    @abstractmethod
    def extract(self, path: Path) -> ExtractionResult:
        """Read the document and accumulate records and validation messages.

        Raises only for unreadable input.
        """

    def validate(self, result: ExtractionResult) -> list[ValidationMessage]:
        """Messages blocking graph construction (default: everything accumulated)."""
        return list(result.messages)

    @abstractmethod
    def build_graph(self, result: ExtractionResult, source: str) -> Graph:
        """Graph for a result that passed validate()."""


class CrawlerRegistry:
    """Tool name -> crawler instance."""

    def __init__(self) -> None:
        self._crawlers: dict[str, Crawler] = {}

    def register(self, crawler: Crawler) -> None:
        if not crawler.name:
            raise ValueError(f"{type(crawler).__name__} has no tool name")
        # re-registering a name replaces the previous crawler
        self._crawlers[crawler.name] = crawler

    def unregister(self, name: str) -> None:
        self._crawlers.pop(name, None)

    def get(self, name: str) -> Crawler:
        try:
            return self._crawlers[name]
        except KeyError:
            raise KeyError(
                f"unknown crawler '{name}', registered: {sorted(self._crawlers)}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._crawlers)
