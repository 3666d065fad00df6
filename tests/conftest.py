import pytest
from rdflib import URIRef

from shapeview.store import load_graph


@pytest.fixture
def examples_dir(request):
    return request.config.rootpath / "examples"


@pytest.fixture
def people_shacl(examples_dir):
    return (examples_dir / "people.shacl.ttl").read_text()


@pytest.fixture
def people_data(examples_dir):
    return (examples_dir / "people.ttl").read_text()


@pytest.fixture
def shapes_graph(people_shacl):
    return load_graph(people_shacl, source="people.shacl.ttl")


@pytest.fixture
def data_graph(people_data):
    return load_graph(people_data, source="people.ttl")


@pytest.fixture
def alice():
    return URIRef("http://example.org/people#alice")
