"""
shapeview.paths — Decode a SHACL property path into its term trail.

A path is either a predicate IRI or a chain of blank nodes holding RDF list
cells (rdf:first / rdf:rest) and path operators (sh:inversePath and friends).
The trail is the literal sequence of terms met while walking that chain; the
operators are not expanded into alternative match sets.
"""

from __future__ import annotations

from typing import Optional

from rdflib import BNode, Graph
from rdflib.namespace import RDF, SH

from shapeview.model import MalformedPathError, Node, Quad, ViewConfig
from shapeview.store import match

# Walk order when a node has several outgoing quads (list cells have two)
CONTINUE_PREDICATES = (
    RDF.first,
    SH.alternativePath,
    SH.zeroOrMorePath,
    SH.oneOrMorePath,
    SH.zeroOrOnePath,
    SH.inversePath,
    RDF.rest,
)


def is_generated_node(term: Node) -> bool:
    """True for blank nodes and skolemized (genid) IRIs."""
    return isinstance(term, BNode) or "/genid/" in str(term)


def is_single_predicate(trail: list[Node]) -> bool:
    return len(trail) == 1 and not is_generated_node(trail[0])


def _next_quad(shapes_graph: Graph, term: Node) -> Optional[Quad]:
    children = match(shapes_graph, term)
    if not children:
        return None

    def rank(quad: Quad) -> tuple[int, str]:
        if quad.predicate in CONTINUE_PREDICATES:
            return (CONTINUE_PREDICATES.index(quad.predicate), "")
        return (len(CONTINUE_PREDICATES), str(quad.predicate))

    return min(children, key=rank)


def extract_path(
    start: Quad,
    shapes_graph: Optional[Graph],
    config: Optional[ViewConfig] = None,
) -> list[Node]:
    """Return the ordered trail of terms for the path named by start.

    start is the (property shape, sh:path, path) quad. The walk follows one
    outgoing quad per term and stops after a quad whose object is a plain
    IRI or literal reached through a non-path predicate.

    Raises MalformedPathError when the walk would continue from a term it
    already visited, or grows beyond config.max_path_length.
    """
    if config is None:
        config = ViewConfig()

    trail: list[Node] = [start.object]
    visited = {start.object}
    current: Optional[Node] = start.object

    while current is not None:
        child = _next_quad(shapes_graph, current)
        if child is None:
            break

        keep_walking = (
            is_generated_node(child.object)
            or child.predicate in CONTINUE_PREDICATES
        )
        # A repeated term is only a loop if the walk would continue from it
        if keep_walking and child.object in visited:
            raise MalformedPathError(
                f"Path of {start.subject.n3()} loops back to {child.object.n3()}"
            )
        if len(trail) >= config.max_path_length:
            raise MalformedPathError(
                f"Path of {start.subject.n3()} exceeds {config.max_path_length} terms"
            )

        trail.append(child.object)
        visited.add(child.object)
        current = child.object if keep_walking else None

    return trail
