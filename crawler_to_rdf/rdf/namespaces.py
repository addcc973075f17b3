from __future__ import annotations

from rdflib import Graph, Namespace
from rdflib.namespace import DCTERMS, FOAF, RDF, RDFS, XSD

from ..models.config_models import DEFAULT_INSTANCE_NS, DEFAULT_ONTOLOGY_NS

"""Namespaces and prefix bindings used in every generated graph."""

__all__ = [
    "PREFIXES",
    "new_graph",
]

# fixed vocabularies, in output order; gn and lkt follow from the config
PREFIXES: dict[str, Namespace] = {
    "rdf": Namespace(str(RDF)),
    "rdfs": Namespace(str(RDFS)),
    "xs": Namespace(str(XSD)),
    "foaf": Namespace(str(FOAF)),
    "dc": Namespace(str(DCTERMS)),
}


def new_graph(instance_ns: str = DEFAULT_INSTANCE_NS, ontology_ns: str = DEFAULT_ONTOLOGY_NS) -> Graph:
    """Empty graph with the crawler prefixes bound.

    rdflib's own default bindings are skipped so output only carries
    PREFIXES plus gn (ontology) and lkt (instances).
    """
    g = Graph(bind_namespaces="none")
    for prefix, ns in PREFIXES.items():
        g.bind(prefix, ns, override=True)
    g.bind("gn", Namespace(ontology_ns), override=True)
    g.bind("lkt", Namespace(instance_ns), override=True)
    return g
