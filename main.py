from pathlib import Path

from rdflib import URIRef

from shapeview.property_values import get_property_values
from shapeview.report import build_report
from shapeview.store import load_graph

examples = Path(__file__).parent / "examples"
shapes = load_graph((examples / "people.shacl.ttl").read_text(), source="people.shacl.ttl")
data = load_graph((examples / "people.ttl").read_text(), source="people.ttl")

alice = URIRef("http://example.org/people#alice")
values = get_property_values(focus_node=alice, shapes_graph=shapes, data_graph=data)
print(build_report(values, focus_node=alice).print_table())
