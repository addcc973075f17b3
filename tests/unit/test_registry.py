from __future__ import annotations

from pathlib import Path

import pytest
from rdflib import Graph

from crawler_to_rdf.crawlers import Crawler, CrawlerRegistry, LKTLogbookCrawler, default_registry
from crawler_to_rdf.models.config_models import CrawlerConfig
from crawler_to_rdf.models.extraction_result import ExtractionResult


class _DummyCrawler(Crawler):
    name = "dummy"
    description = "test crawler"
    input_extensions = ("csv",)

    def extract(self, path: Path) -> ExtractionResult:
        return ExtractionResult(file_name=path.name)

    def build_graph(self, result: ExtractionResult, source: str) -> Graph:
        return Graph()


def test_default_registry_has_lkt():
    registry = default_registry()
    assert registry.names() == ["lkt"]
    crawler = registry.get("lkt")
    assert isinstance(crawler, LKTLogbookCrawler)
    assert crawler.input_extensions == ("ods", "xlsx")


def test_default_registry_passes_config():
    cfg = CrawlerConfig(weight_unit="kg")
    assert default_registry(cfg).get("lkt").config is cfg


def test_register_and_unregister():
    registry = CrawlerRegistry()
    registry.register(_DummyCrawler())
    assert registry.names() == ["dummy"]
    replacement = _DummyCrawler()
    registry.register(replacement)
    assert registry.get("dummy") is replacement
    registry.unregister("dummy")
    assert registry.names() == []
    registry.unregister("dummy")  # no-op


def test_get_unknown_lists_registered_names():
    registry = default_registry()
    with pytest.raises(KeyError) as e:
        registry.get("csv")
    assert "lkt" in str(e.value)


def test_register_requires_name():
    class Nameless(_DummyCrawler):
        name = ""

    with pytest.raises(ValueError):
        CrawlerRegistry().register(Nameless())


def test_default_validate_returns_accumulated_messages():
    result = ExtractionResult(file_name="f.csv")
    result.add_error("S1", "missing value: project", row=24)
    messages = _DummyCrawler().validate(result)
    assert [m.message for m in messages] == ["missing value: project"]
    messages.clear()
    assert len(result.messages) == 1
