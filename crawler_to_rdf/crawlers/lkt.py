from __future__ import annotations

import logging
from pathlib import Path

from rdflib import Graph

from ..excel.extractor import extract_document
from ..excel.reader import read_spreadsheet
from ..models.config_models import CrawlerConfig
from ..models.extraction_result import ExtractionResult
from ..rdf.graph_builder import GraphBuilder
from ..services.progress import SheetProgress
from .base import Crawler

"""Crawler for the LKT lab logbook (one subject per sheet, ODS or XLSX)."""

logger = logging.getLogger(__name__)


class LKTLogbookCrawler(Crawler):
    name = "lkt"
    description = "LMU Kay Thurley lab logbook crawler"
    input_extensions = ("ods", "xlsx")

    def __init__(self, config: CrawlerConfig | None = None) -> None:
        self.config = config or CrawlerConfig()

    def extract(self, path: Path) -> ExtractionResult:
        sheets = read_spreadsheet(path)
        logger.info("File has # sheets: %d", len(sheets))
        with SheetProgress(len(sheets), enabled=self.config.progress) as progress:
            return extract_document(sheets, path.name, progress=progress)

    def build_graph(self, result: ExtractionResult, source: str) -> Graph:
        builder = GraphBuilder(
            instance_ns=self.config.instance_namespace,
            ontology_ns=self.config.ontology_namespace,
            weight_unit=self.config.weight_unit,
        )
        return builder.build(result.sheets, source)
