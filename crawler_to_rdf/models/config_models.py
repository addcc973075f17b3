from __future__ import annotations

from dataclasses import dataclass

"""Config dataclass for the crawler.

Built by crawler_to_rdf.config.loader from config/crawler.yml (or from the
defaults when no file exists). Kept separate from the loader so services can
type against it without pulling in yaml/jsonschema.
"""

DEFAULT_INSTANCE_NS = "https://orcid.org/0000-0003-4857-1083#"
DEFAULT_ONTOLOGY_NS = "https://github.com/G-Node/neuro-ontology/"


@dataclass(frozen=True)
class CrawlerConfig:
    """Root configuration object for a crawler run."""
    default_format: str = "TTL"  # output format when -f is not given
    instance_namespace: str = DEFAULT_INSTANCE_NS  # namespace of generated instances
    ontology_namespace: str = DEFAULT_ONTOLOGY_NS  # classes and properties
    weight_unit: str = "g"  # unit literal attached to every Weight node
    error_log_dir: str = "./logs"  # JSON Lines validation log target
    progress: bool = True  # tqdm bar on TTY
