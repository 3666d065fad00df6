"""
Test the display helper and the report built on top of it.
"""

import json

from rdflib import BNode, Literal, Namespace
from rdflib.namespace import FOAF, RDF, RDFS, SH

from shapeview.helpers import PropertyValueView
from shapeview.model import PropertyValue, PropertyValueType, Quad, ShapeDescriptor, ViewConfig
from shapeview.property_values import get_property_values
from shapeview.report import build_report

PEOPLE = Namespace("http://example.org/people#")


def _value(*pairs, path=(FOAF.name,)) -> PropertyValue:
    node = BNode()
    quads = tuple(Quad(node, p, o) for p, o in pairs)
    return PropertyValue(
        path=path,
        shapes=[ShapeDescriptor(node=node, quads=quads)] if quads else [],
        type=PropertyValueType.SHAPE if quads else PropertyValueType.DATA,
    )


def test_label_prefers_english():
    value = _value(
        (SH.name, Literal("naam", lang="nl")),
        (RDFS.label, Literal("Name")),
        (SH.name, Literal("name", lang="en")),
    )
    assert PropertyValueView(value).label == "name"


def test_label_falls_back_to_dutch_then_plain():
    dutch = _value((SH.name, Literal("naam", lang="nl")), (RDFS.label, Literal("Name")))
    plain = _value((RDFS.label, Literal("Name")), (SH.name, Literal("nom", lang="fr")))

    assert PropertyValueView(dutch).label == "naam"
    assert PropertyValueView(plain).label == "Name"


def test_label_language_preference_is_configurable():
    value = _value((SH.name, Literal("name", lang="en")), (SH.name, Literal("naam", lang="nl")))
    view = PropertyValueView(value, ViewConfig(label_languages=("nl",)))
    assert view.label == "naam"


def test_label_falls_back_to_path_segment():
    assert PropertyValueView(_value()).label == "name"
    assert PropertyValueView(_value(path=(RDF.type,))).label == "type"


def test_label_fallback_string():
    view = PropertyValueView(_value(path=()), ViewConfig(fallback_label="Unnamed"))
    assert view.label == "Unnamed"


def test_cardinality_merges_across_shapes():
    a, b = BNode(), BNode()
    value = PropertyValue(
        path=(FOAF.name,),
        shapes=[
            ShapeDescriptor(a, (Quad(a, SH.minCount, Literal(1)), Quad(a, SH.maxCount, Literal(5)))),
            ShapeDescriptor(b, (Quad(b, SH.minCount, Literal(2)), Quad(b, SH.maxCount, Literal(3)))),
        ],
        type=PropertyValueType.SHAPE,
    )
    view = PropertyValueView(value)

    assert view.min_count == 2
    assert view.max_count == 3


def test_shape_descriptor_accessors():
    node = BNode()
    shape = ShapeDescriptor(node, (
        Quad(node, SH.path, FOAF.name),
        Quad(node, SH.order, Literal("first")),
        Quad(node, SH.order, Literal(4)),
        Quad(node, SH.minCount, Literal(1)),
    ))

    assert shape.path == FOAF.name
    assert shape.order == 4
    assert shape.min_count == 1
    assert shape.max_count is None
    assert ShapeDescriptor(node).path is None


def test_cardinality_absent():
    view = PropertyValueView(_value())
    assert view.min_count is None
    assert view.max_count is None


def test_example_views(shapes_graph, data_graph, alice):
    views = {
        v.predicate: PropertyValueView(v)
        for v in get_property_values(alice, shapes_graph, data_graph)
    }

    assert views[FOAF.name].label == "name"
    assert views[FOAF.name].min_count == 2
    assert views[FOAF.name].max_count == 1
    assert views[FOAF.mbox].max_count == 3
    assert views[PEOPLE.worksFor].label == "employer"
    assert views[FOAF.age].label == "age"


def test_view_to_dict(shapes_graph, data_graph, alice):
    values = get_property_values(alice, shapes_graph, data_graph)
    d = PropertyValueView(values[0]).to_dict()

    assert d["label"] == "name"
    assert d["type"] == "shape"
    assert d["path"] == ["<http://xmlns.com/foaf/0.1/name>"]
    assert d["values"] == ['"Alice"']


# ─── Report ──────────────────────────────────────────────────────────


def test_report_summary(shapes_graph, data_graph, alice):
    values = get_property_values(alice, shapes_graph, data_graph)
    report = build_report(values, focus_node=alice)

    assert report.focus_node == str(alice)
    assert report.summary == {"properties": 7, "shape": 5, "data": 2, "empty": 1}
    assert [r.label for r in report.rows[:3]] == ["name", "mailbox", "knows"]


def test_report_rows_and_json(shapes_graph, data_graph, alice):
    values = get_property_values(alice, shapes_graph, data_graph)
    report = build_report(values, focus_node=alice)

    mailbox = report.rows[1]
    assert mailbox.cardinality == "0..3"
    assert mailbox.values == ["mailto:alice@example.org"]

    parsed = json.loads(report.to_json())
    assert parsed["rows"][0]["values"] == ["Alice"]
    assert parsed["rows"][0]["order"] == 1


def test_report_table(shapes_graph, data_graph, alice):
    values = get_property_values(alice, shapes_graph, data_graph)
    table = build_report(values, focus_node=alice).print_table()

    assert "7 properties" in table
    assert "→ Alice" in table
    assert "Nickname" in table
