"""
shapeview.model — Data types shared by the resolver stages.

Terms are plain rdflib terms (URIRef, BNode, Literal). Everything in here is
a read-only view derived from the shapes and data graphs on each request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Union

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import RDFS, SH

Node = Union[URIRef, BNode, Literal]

# SHACL 1.2 terms, absent from rdflib's closed SH namespace
SH_SHAPE = URIRef("http://www.w3.org/ns/shacl#shape")
SH_SHAPE_CLASS = URIRef("http://www.w3.org/ns/shacl#ShapeClass")


# ─── Errors ──────────────────────────────────────────────────────────


class ShapeViewError(Exception):
    """Base class for shapeview errors."""


class MalformedPathError(ShapeViewError):
    """A property path encoding loops back on itself or never ends."""


class UnsupportedPathError(ShapeViewError):
    """A composite property path reached a single-predicate code path."""


# ─── Data types ──────────────────────────────────────────────────────


class Quad(NamedTuple):
    subject: Node
    predicate: URIRef
    object: Node
    graph: Optional[Node] = None


class PropertyValueType(str, Enum):
    SHAPE = "shape"
    DATA = "data"


class DataOnly(Enum):
    """Group key for the bucket that has no physical focus node."""

    BUCKET = "data-only"


FocusKey = Union[URIRef, BNode, Literal, DataOnly]


@dataclass(frozen=True)
class TargetShapeMatch:
    focus_node: Node
    shape: Node


def as_int(term: Optional[Node]) -> Optional[int]:
    """Integer part of a numeric literal, or None."""
    if term is None:
        return None
    try:
        return int(str(term))
    except ValueError:
        pass
    try:
        return int(float(str(term)))
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class ShapeDescriptor:
    """All quads of one property-shape node, queried lazily."""

    node: Node
    quads: tuple[Quad, ...] = ()

    def values(self, predicate: URIRef) -> list[Node]:
        return [q.object for q in self.quads if q.predicate == predicate]

    def first(self, predicate: URIRef) -> Optional[Node]:
        for q in self.quads:
            if q.predicate == predicate:
                return q.object
        return None

    def first_int(self, predicate: URIRef) -> Optional[int]:
        """First value of predicate that parses as an integer."""
        for value in self.values(predicate):
            number = as_int(value)
            if number is not None:
                return number
        return None

    @property
    def path(self) -> Optional[Node]:
        return self.first(SH.path)

    @property
    def order(self) -> Optional[int]:
        return self.first_int(SH.order)

    @property
    def min_count(self) -> Optional[int]:
        return self.first_int(SH.minCount)

    @property
    def max_count(self) -> Optional[int]:
        return self.first_int(SH.maxCount)

    @property
    def labels(self) -> list[Node]:
        """sh:name and rdfs:label objects, in quad order."""
        return [
            q.object for q in self.quads
            if q.predicate == SH.name or q.predicate == RDFS.label
        ]

    @property
    def rdfs_label(self) -> Optional[Node]:
        return self.first(RDFS.label)


@dataclass
class PropertyValue:
    path: tuple[Node, ...]
    focus_node: Optional[Node] = None
    value_nodes: list[Quad] = field(default_factory=list)
    shapes: list[ShapeDescriptor] = field(default_factory=list)
    type: PropertyValueType = PropertyValueType.DATA

    @property
    def predicate(self) -> Node:
        return self.path[0]

    @property
    def order(self) -> Optional[int]:
        """First parseable sh:order across the contributing shapes."""
        for shape in self.shapes:
            if shape.order is not None:
                return shape.order
        return None

    @property
    def label(self) -> str:
        """First rdfs:label across the contributing shapes, or ''."""
        for shape in self.shapes:
            label = shape.rdfs_label
            if label is not None:
                return str(label)
        return ""

    def to_dict(self) -> dict:
        return {
            "focus_node": None if self.focus_node is None else self.focus_node.n3(),
            "path": [term.n3() for term in self.path],
            "type": self.type.value,
            "values": [q.object.n3() for q in self.value_nodes],
            "shapes": [shape.node.n3() for shape in self.shapes],
        }


# ─── Configuration ───────────────────────────────────────────────────


@dataclass
class ViewConfig:
    """Knobs for resolution and display.

    label_languages are tried in order before languageless literals.
    max_path_length bounds the walk over a path encoding.
    strict_paths raises on composite paths instead of skipping them.
    """

    label_languages: tuple[str, ...] = ("en", "nl")
    fallback_label: str = "Unknown property"
    max_path_length: int = 64
    strict_paths: bool = False
