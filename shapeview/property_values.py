"""
shapeview.property_values — Resolve the property values of a focus node.

What is a property value? See
https://github.com/w3c/data-shapes/blob/agenda/ui-tf/meetings/2025-09-30.md

For every predicate a node has, or should have according to the shapes that
target it, one PropertyValue is produced: the property shapes describing the
predicate merged into one list, plus the quads the data graph holds for it.
"""

from __future__ import annotations

import locale
import warnings
from functools import cmp_to_key
from typing import Optional

from rdflib import Graph, URIRef
from rdflib.collection import Collection
from rdflib.namespace import RDF, SH

from shapeview.model import (
    DataOnly,
    FocusKey,
    MalformedPathError,
    Node,
    PropertyValue,
    PropertyValueType,
    Quad,
    ShapeDescriptor,
    UnsupportedPathError,
    ViewConfig,
)
from shapeview.paths import extract_path, is_single_predicate
from shapeview.store import match
from shapeview.targets import resolve_targets


def get_property_values(
    focus_node: Optional[Node] = None,
    shapes_graph: Optional[Graph] = None,
    data_graph: Optional[Graph] = None,
    config: Optional[ViewConfig] = None,
) -> list[PropertyValue]:
    """Aggregate and rank the property values for focus_node."""
    values = aggregate_property_values(focus_node, shapes_graph, data_graph, config)
    return rank_property_values(values)


# ── Aggregation ──────────────────────────────────────────────────


def aggregate_property_values(
    focus_node: Optional[Node] = None,
    shapes_graph: Optional[Graph] = None,
    data_graph: Optional[Graph] = None,
    config: Optional[ViewConfig] = None,
) -> list[PropertyValue]:
    """Build one PropertyValue per (focus node, predicate), unordered."""
    if config is None:
        config = ViewConfig()

    matches = resolve_targets(focus_node, shapes_graph, data_graph)

    # The seed group gives a node without any matching shape a data-only pass
    groups: dict[FocusKey, list[Node]] = {
        focus_node if focus_node is not None else DataOnly.BUCKET: []
    }
    for m in matches:
        shapes = groups.setdefault(m.focus_node, [])
        if m.shape not in shapes:
            shapes.append(m.shape)

    property_values: list[PropertyValue] = []
    for key, shapes in groups.items():
        node = None if key is DataOnly.BUCKET else key
        property_values.extend(
            _resolve_group(node, shapes, shapes_graph, data_graph, config)
        )
    return property_values


def _resolve_group(
    focus_node: Optional[Node],
    shapes: list[Node],
    shapes_graph: Optional[Graph],
    data_graph: Optional[Graph],
    config: ViewConfig,
) -> list[PropertyValue]:
    registry: dict[URIRef, list[ShapeDescriptor]] = {}

    for property_node in _property_shapes(shapes, shapes_graph):
        descriptor = ShapeDescriptor(
            node=property_node,
            quads=tuple(match(shapes_graph, property_node, None, None)),
        )
        predicate = _single_predicate(descriptor, shapes_graph, config)
        if predicate is None:
            continue
        registry.setdefault(predicate, []).append(descriptor)

    if focus_node is not None:
        for quad in match(data_graph, focus_node, None, None):
            registry.setdefault(quad.predicate, [])

    property_values = []
    for predicate, descriptors in registry.items():
        value_nodes = (
            match(data_graph, focus_node, predicate, None)
            if focus_node is not None else []
        )
        property_values.append(PropertyValue(
            path=(predicate,),
            focus_node=focus_node,
            value_nodes=value_nodes,
            shapes=descriptors,
            type=PropertyValueType.SHAPE if descriptors else PropertyValueType.DATA,
        ))
    return property_values


def _parent_shapes(shapes: list[Node], shapes_graph: Optional[Graph]) -> list[Node]:
    """Matched shapes plus one hop of sh:node and sh:and composition."""
    parents: dict[Node, None] = {}
    for shape in shapes:
        parents.setdefault(shape, None)
        for q in match(shapes_graph, shape, SH.node, None):
            parents.setdefault(q.object, None)
        for q in match(shapes_graph, shape, SH["and"], None):
            for member in _list_members(shapes_graph, q.object):
                parents.setdefault(member, None)
    return list(parents)


def _list_members(shapes_graph: Graph, head: Node) -> list[Node]:
    """Members of an RDF list, or the node itself when it is not a list."""
    if head == RDF.nil:
        return []
    if not match(shapes_graph, head, RDF.first, None):
        return [head]
    try:
        return list(Collection(shapes_graph, head))
    except ValueError as e:
        warnings.warn(f"Malformed sh:and list {head.n3()}, skipping: {e}")
        return []


def _property_shapes(shapes: list[Node], shapes_graph: Optional[Graph]) -> list[Node]:
    nodes: dict[Node, None] = {}
    for parent in _parent_shapes(shapes, shapes_graph):
        for q in match(shapes_graph, parent, SH.property, None):
            nodes.setdefault(q.object, None)
    return list(nodes)


def _single_predicate(
    descriptor: ShapeDescriptor,
    shapes_graph: Optional[Graph],
    config: ViewConfig,
) -> Optional[URIRef]:
    """The predicate a property shape's sh:path names, if it names just one."""
    path = descriptor.path
    if path is None:
        return None
    if isinstance(path, URIRef) and is_single_predicate([path]):
        return path

    try:
        trail = extract_path(Quad(descriptor.node, SH.path, path), shapes_graph, config)
    except MalformedPathError as e:
        warnings.warn(f"Malformed sh:path in {descriptor.node.n3()}, skipping: {e}")
        return None

    message = (
        f"Complex sh:path in {descriptor.node.n3()} "
        f"({' '.join(t.n3() for t in trail)}) is not yet supported"
    )
    if config.strict_paths:
        raise UnsupportedPathError(message)
    warnings.warn(f"{message}, skipping.")
    return None


# ── Ranking ──────────────────────────────────────────────────────


def _compare(a: PropertyValue, b: PropertyValue) -> int:
    a_order, b_order = a.order, b.order
    if a_order is not None and b_order is not None:
        return a_order - b_order
    if a_order is not None:
        return -1
    if b_order is not None:
        return 1
    # Case-insensitive first; under the C locale strcoll is plain codepoint order
    by_folded = locale.strcoll(a.label.casefold(), b.label.casefold())
    return by_folded or locale.strcoll(a.label, b.label)


def rank_property_values(values: list[PropertyValue]) -> list[PropertyValue]:
    """Order by sh:order (ordered first), then by rdfs:label."""
    return sorted(values, key=cmp_to_key(_compare))
