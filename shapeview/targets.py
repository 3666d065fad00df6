"""
shapeview.targets — Find the shapes that target a focus node.

Implements the SHACL target declarations (https://www.w3.org/TR/shacl/#targets)
as independent rules whose matches are unioned. sh:targetWhere is not
supported; it would need a SPARQL-capable SHACL engine.
"""

from __future__ import annotations

from typing import Optional

from rdflib import Graph
from rdflib.namespace import RDF, RDFS, SH

from shapeview.model import SH_SHAPE, SH_SHAPE_CLASS, Node, TargetShapeMatch
from shapeview.store import match


def resolve_targets(
    focus_node: Optional[Node] = None,
    shapes_graph: Optional[Graph] = None,
    data_graph: Optional[Graph] = None,
) -> list[TargetShapeMatch]:
    """Return every (focus node, shape) pair established by a target.

    With a focus node, only matches for that node are returned. Without one,
    matches for every node in the data graph are returned. A missing graph
    turns the rules that read it into no-ops.
    """
    matches: list[TargetShapeMatch] = []
    matches.extend(_node_targets(focus_node, shapes_graph))
    matches.extend(_class_targets(focus_node, shapes_graph, data_graph))
    matches.extend(_implicit_class_targets(focus_node, shapes_graph, data_graph))
    matches.extend(_subjects_of_targets(focus_node, shapes_graph, data_graph))
    matches.extend(_objects_of_targets(focus_node, shapes_graph, data_graph))
    matches.extend(_explicit_shape_targets(focus_node, shapes_graph, data_graph))

    if focus_node is not None:
        matches = [m for m in matches if m.focus_node == focus_node]

    # Same pair may be reached through several rules
    return list(dict.fromkeys(matches))


# ── Individual target rules ──────────────────────────────────────


def _node_targets(focus_node, shapes_graph) -> list[TargetShapeMatch]:
    """sh:targetNode"""
    return [
        TargetShapeMatch(focus_node=q.object, shape=q.subject)
        for q in match(shapes_graph, None, SH.targetNode, focus_node)
    ]


def _instances_of(cls, focus_node, data_graph) -> list[Node]:
    return [q.subject for q in match(data_graph, focus_node, RDF.type, cls)]


def _class_targets(focus_node, shapes_graph, data_graph) -> list[TargetShapeMatch]:
    """sh:targetClass"""
    if data_graph is None:
        return []
    matches = []
    for q in match(shapes_graph, None, SH.targetClass, None):
        for instance in _instances_of(q.object, focus_node, data_graph):
            matches.append(TargetShapeMatch(focus_node=instance, shape=q.subject))
    return matches


def _shape_classes(shapes_graph) -> list[Node]:
    """Resources that are both rdfs:Class and sh:NodeShape, plus sh:ShapeClass."""
    classes = [
        q.subject for q in match(shapes_graph, None, RDF.type, RDFS.Class)
        if match(shapes_graph, q.subject, RDF.type, SH.NodeShape)
    ]
    classes.extend(q.subject for q in match(shapes_graph, None, RDF.type, SH_SHAPE_CLASS))
    return list(dict.fromkeys(classes))


def _implicit_class_targets(focus_node, shapes_graph, data_graph) -> list[TargetShapeMatch]:
    """Implicit class targets and sh:ShapeClass"""
    if data_graph is None:
        return []
    matches = []
    for shape_class in _shape_classes(shapes_graph):
        for instance in _instances_of(shape_class, focus_node, data_graph):
            matches.append(TargetShapeMatch(focus_node=instance, shape=shape_class))
    return matches


def _subjects_of_targets(focus_node, shapes_graph, data_graph) -> list[TargetShapeMatch]:
    """sh:targetSubjectsOf"""
    matches = []
    for q in match(shapes_graph, None, SH.targetSubjectsOf, None):
        for dq in match(data_graph, focus_node, q.object, None):
            matches.append(TargetShapeMatch(focus_node=dq.subject, shape=q.subject))
    return matches


def _objects_of_targets(focus_node, shapes_graph, data_graph) -> list[TargetShapeMatch]:
    """sh:targetObjectsOf"""
    matches = []
    for q in match(shapes_graph, None, SH.targetObjectsOf, None):
        for dq in match(data_graph, None, q.object, focus_node):
            matches.append(TargetShapeMatch(focus_node=dq.object, shape=q.subject))
    return matches


def _explicit_shape_targets(focus_node, shapes_graph, data_graph) -> list[TargetShapeMatch]:
    """sh:shape, declared next to the shapes or next to the data"""
    matches = []
    for graph in (shapes_graph, data_graph):
        for q in match(graph, focus_node, SH_SHAPE, None):
            matches.append(TargetShapeMatch(focus_node=q.subject, shape=q.object))
    return matches
