"""
shapeview.store — Pattern queries and loading over rdflib graphs.

Every graph lookup in the resolver goes through match(), which treats None
as a wildcard and an absent graph as an empty one.
"""

from __future__ import annotations

import warnings
from typing import Optional

from rdflib import Dataset, Graph, URIRef

from shapeview.model import Node, Quad


def match(
    graph: Optional[Graph],
    subject: Optional[Node] = None,
    predicate: Optional[URIRef] = None,
    obj: Optional[Node] = None,
    context: Optional[Node] = None,
) -> list[Quad]:
    """Return all quads whose bound positions equal the query."""
    if graph is None:
        return []

    if isinstance(graph, Dataset):
        quads = []
        for s, p, o, ctx in graph.quads((subject, predicate, obj, context)):
            ctx_id = getattr(ctx, "identifier", ctx)
            quads.append(Quad(s, p, o, ctx_id))
        return quads

    if context is not None and context != graph.identifier:
        return []
    return [Quad(s, p, o) for s, p, o in graph.triples((subject, predicate, obj))]


def load_graph(text: str, format: str = "turtle", source: str = "<string>") -> Graph:
    """Parse RDF text into a fresh graph.

    A parse failure is reported as a warning and yields an empty graph, so
    the caller still gets a best-effort resolution.
    """
    g = Graph()
    if not text or not text.strip():
        return g
    try:
        g.parse(data=text, format=format)
    except Exception as e:
        warnings.warn(f"Could not parse {source} as {format}: {type(e).__name__}: {e}")
        return Graph()
    return g


def list_subjects(graph: Optional[Graph]) -> list[Node]:
    """Distinct subjects of a graph, in first-seen order."""
    seen: dict[Node, None] = {}
    for quad in match(graph):
        seen.setdefault(quad.subject, None)
    return list(seen)


def find_subject(graph: Optional[Graph], value: str) -> Optional[Node]:
    """Find the subject term whose string value equals value."""
    if not value:
        return None
    for subject in list_subjects(graph):
        if str(subject) == value:
            return subject
    return None
