from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import DCTERMS, FOAF, RDF, RDFS

from ..models.config_models import DEFAULT_INSTANCE_NS, DEFAULT_ONTOLOGY_NS
from ..models.records import LogEntry, ParsedSheet, SubjectRecord
from .namespaces import new_graph

"""Logbook records -> RDF graph.

Node layout (gn = ontology namespace, lkt = instance namespace):

    lkt:<prov>   a gn:Provenance        dc:source, dc:created, dc:subject
    lkt:<uuid>   a gn:Subject           gn:hasSubjectID, gn:hasSex, gn:hasBirthDate,
                                        gn:hasWithdrawalDate, gn:hasPermit,
                                        gn:hasSubjectLogEntry, [gn:hasSpeciesName],
                                        [gn:hasScientificName]
    lkt:<uuid>   a gn:Permit            gn:hasNumber
    lkt:<uuid>   a gn:Project           rdfs:label, gn:hasExperiment
    lkt:<uuid>   a gn:Experimenter      foaf:name
    lkt:<uuid>   a gn:Experiment        gn:startedAt, rdfs:label, gn:hasExperimenter,
                                        gn:hasSubject, [gn:hasParadigm],
                                        [gn:hasParadigmSpecifics], [rdfs:comment]
    lkt:<uuid>   a gn:SubjectLogEntry   gn:startedAt, gn:hasExperimenter, [gn:hasDiet],
                                        [gn:hasInitialWeightDate], [gn:hasWeight],
                                        [rdfs:comment], [gn:hasFeed]
    lkt:<uuid>   a gn:Weight            gn:hasValue, gn:hasUnit

Every node except the provenance node carries gn:hasProvenance. Optional
values are omitted when empty, never written as empty literals.

Projects, experimenters and subjects are deduplicated by natural key within
one GraphBuilder; identifiers are fresh UUIDs, so two runs on the same input
give isomorphic graphs with different node IRIs.
"""

__all__ = [
    "PROVENANCE_DESCRIPTION",
    "GraphBuilder",
    "build_graph",
]

logger = logging.getLogger(__name__)

PROVENANCE_DESCRIPTION = (
    "This RDF file was created by parsing data from the file indicated in the source literal"
)


def _new_id() -> str:
    return str(uuid4())


class GraphBuilder:
    """Builds one graph from validated sheets.

    The identity maps live on the instance; use a new builder per run.
    Input is expected to have passed validation (no missing required values).
    """

    def __init__(
        self,
        instance_ns: str = DEFAULT_INSTANCE_NS,
        ontology_ns: str = DEFAULT_ONTOLOGY_NS,
        weight_unit: str = "g",
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.inst = Namespace(instance_ns)
        self.ont = Namespace(ontology_ns)
        self.weight_unit = weight_unit
        self._new_id = id_factory
        self.graph: Graph = new_graph(instance_ns, ontology_ns)
        # natural key -> generated id
        self.projects: dict[str, str] = {}
        self.subjects: dict[str, str] = {}
        self.experimenters: dict[str, str] = {}
        self._provenance: URIRef | None = None

    # -- helpers -------------------------------------------------------
    def _node(self, node_id: str) -> URIRef:
        return self.inst[node_id]

    def _create(self, rdf_class: str, node_id: str | None = None) -> URIRef:
        node = self._node(node_id or self._new_id())
        self.graph.add((node, RDF.type, self.ont[rdf_class]))
        if self._provenance is not None:
            self.graph.add((node, self.ont.hasProvenance, self._provenance))
        return node

    def _add_optional(self, node: URIRef, predicate: URIRef, value: str | None) -> None:
        if value:
            self.graph.add((node, predicate, Literal(value)))

    # -- nodes ---------------------------------------------------------
    def add_provenance(self, source: str, provenance_id: str | None = None,
                       created: datetime | None = None) -> URIRef:
        if self._provenance is not None:
            raise RuntimeError("provenance already created for this graph")
        created = created or datetime.now().replace(microsecond=0)
        node = self._node(provenance_id or self._new_id())
        g = self.graph
        g.add((node, RDF.type, self.ont.Provenance))
        g.add((node, DCTERMS.source, Literal(source)))
        g.add((node, DCTERMS.created, Literal(created)))
        g.add((node, DCTERMS.subject, Literal(PROVENANCE_DESCRIPTION)))
        self._provenance = node
        return node

    def add_subject(self, record: SubjectRecord) -> URIRef:
        g = self.graph
        permit = self._create("Permit")
        g.add((permit, self.ont.hasNumber, Literal(record.permit_number)))

        if record.subject_id in self.subjects:
            subject = self._node(self.subjects[record.subject_id])
        else:
            self.subjects[record.subject_id] = self._new_id()
            subject = self._create("Subject", self.subjects[record.subject_id])
            g.add((subject, self.ont.hasSubjectID, Literal(record.subject_id)))
        g.add((subject, self.ont.hasSex, Literal(record.sex)))
        g.add((subject, self.ont.hasBirthDate, Literal(record.date_of_birth)))
        g.add((subject, self.ont.hasWithdrawalDate, Literal(record.date_of_withdrawal)))
        g.add((subject, self.ont.hasPermit, permit))
        self._add_optional(subject, self.ont.hasSpeciesName, record.species)
        self._add_optional(subject, self.ont.hasScientificName, record.scientific_name)
        return subject

    def project(self, name: str) -> URIRef:
        """Project node for a name, created on first use."""
        if name not in self.projects:
            self.projects[name] = self._new_id()
            node = self._create("Project", self.projects[name])
            self.graph.add((node, RDFS.label, Literal(name)))
        return self._node(self.projects[name])

    def experimenter(self, name: str) -> URIRef:
        """Experimenter node for a name, created on first use."""
        if name not in self.experimenters:
            self.experimenters[name] = self._new_id()
            node = self._create("Experimenter", self.experimenters[name])
            self.graph.add((node, RDF.type, FOAF.Person))
            self.graph.add((node, FOAF.name, Literal(name)))
        return self._node(self.experimenters[name])

    def add_entry(self, entry: LogEntry, subject: URIRef) -> tuple[URIRef, URIRef]:
        """Experiment + SubjectLogEntry nodes for one logbook row."""
        g = self.graph
        ont = self.ont
        project = self.project(entry.project)
        experimenter = self.experimenter(entry.experimenter)
        started = Literal(entry.experiment_date)

        experiment = self._create("Experiment")
        g.add((experiment, ont.startedAt, started))
        g.add((experiment, RDFS.label, Literal(entry.experiment)))
        g.add((experiment, ont.hasExperimenter, experimenter))
        g.add((experiment, ont.hasSubject, subject))
        self._add_optional(experiment, ont.hasParadigm, entry.paradigm)
        self._add_optional(experiment, ont.hasParadigmSpecifics, entry.paradigm_specifics)
        self._add_optional(experiment, RDFS.comment, entry.comment_experiment)
        g.add((project, ont.hasExperiment, experiment))

        log_entry = self._create("SubjectLogEntry")
        g.add((log_entry, ont.startedAt, started))
        g.add((log_entry, ont.hasExperimenter, experimenter))
        diet = entry.is_on_diet.as_bool()
        if diet is not None:
            g.add((log_entry, ont.hasDiet, Literal(diet)))
        initial = entry.is_initial_weight.as_bool()
        if initial is not None:
            g.add((log_entry, ont.hasInitialWeightDate, Literal(initial)))
        if entry.weight is not None:
            weight = self._create("Weight")
            g.add((weight, ont.hasValue, Literal(Decimal(entry.weight))))
            g.add((weight, ont.hasUnit, Literal(self.weight_unit)))
            g.add((log_entry, ont.hasWeight, weight))
        self._add_optional(log_entry, RDFS.comment, entry.comment_subject)
        self._add_optional(log_entry, ont.hasFeed, entry.feed)
        g.add((subject, ont.hasSubjectLogEntry, log_entry))
        return experiment, log_entry

    # -- entry point ---------------------------------------------------
    def build(self, sheets: Iterable[ParsedSheet], source: str,
              provenance_id: str | None = None, created: datetime | None = None) -> Graph:
        self.add_provenance(source, provenance_id=provenance_id, created=created)
        for sheet in sheets:
            subject = self.add_subject(sheet.subject)
            for entry in sheet.entries:
                self.add_entry(entry, subject)
        logger.debug(
            "graph built subjects=%d projects=%d experimenters=%d triples=%d",
            len(self.subjects), len(self.projects), len(self.experimenters), len(self.graph),
        )
        return self.graph


def build_graph(sheets: Iterable[ParsedSheet], source: str, **kwargs) -> Graph:
    """Build a graph with a fresh GraphBuilder (fresh identity maps)."""
    provenance_id = kwargs.pop("provenance_id", None)
    created = kwargs.pop("created", None)
    return GraphBuilder(**kwargs).build(sheets, source, provenance_id=provenance_id, created=created)
