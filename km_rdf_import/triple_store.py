"""
Triple Store - pattern queries over an RDF graph.

Any field left as None is a wildcard. Results come back in the order the
underlying rdflib store yields them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rdflib import Dataset, Graph
from rdflib.term import Node
from rdflib.util import guess_format


@dataclass(frozen=True)
class Statement:
    """A matched triple plus the graph it came from."""
    subject: Node
    predicate: Node
    object: Node
    graph: Node | None = None


class TripleStore(Protocol):
    def statements_matching(
        self,
        subject: Node | None = None,
        predicate: Node | None = None,
        obj: Node | None = None,
        source: Node | None = None,
    ) -> list[Statement]:
        ...


class RdflibTripleStore:
    """
    TripleStore backed by an rdflib Graph.

    A Dataset is queried through its quads so that
    ``source`` can select a named graph. A plain Graph has a single source,
    its own identifier.
    """

    def __init__(self, graph: Graph):
        self.graph = graph

    def __len__(self) -> int:
        return len(self.graph)

    def statements_matching(
        self,
        subject: Node | None = None,
        predicate: Node | None = None,
        obj: Node | None = None,
        source: Node | None = None,
    ) -> list[Statement]:
        if isinstance(self.graph, Dataset):
            return [
                Statement(s, p, o, getattr(c, "identifier", c))
                for s, p, o, c in self.graph.quads((subject, predicate, obj, source))
            ]

        if source is not None and source != self.graph.identifier:
            return []

        return [
            Statement(s, p, o, self.graph.identifier)
            for s, p, o in self.graph.triples((subject, predicate, obj))
        ]


# Syntaxes that carry named graphs
QUAD_FORMATS = frozenset({"trig", "nquads", "trix", "nq", "json-ld"})


def _new_graph(rdf_format: str) -> Graph:
    if rdf_format in QUAD_FORMATS:
        return Dataset(default_union=True)
    return Graph()


def load_graph(source: str | Path, rdf_format: str | None = None) -> Graph:
    """
    Parse an RDF file into an rdflib Graph.

    Quad syntaxes (TriG, N-Quads, TriX, JSON-LD) are loaded into a Dataset
    so their named graphs stay queryable by source.

    Args:
        source: File path or URL
        rdf_format: rdflib parser name; guessed from the file extension
            when omitted, falling back to turtle

    Raises:
        Whatever the rdflib parser raises on malformed input.
    """
    fmt = rdf_format or guess_format(str(source)) or "turtle"
    # Dataset.parse returns the graph it parsed into, not the dataset
    graph = _new_graph(fmt)
    graph.parse(str(source), format=fmt)
    return graph


def parse_graph(data: str, rdf_format: str = "turtle") -> Graph:
    """Parse serialized RDF text into an rdflib Graph (a Dataset for quad syntaxes)."""
    graph = _new_graph(rdf_format)
    graph.parse(data=data, format=rdf_format)
    return graph
