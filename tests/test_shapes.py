"""Tests for property paths, shapes and the shapes graph."""

import pytest

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    RDF_TYPE,
    SH_DEACTIVATED,
    SH_INVERSE_PATH,
    SH_MAX_LENGTH,
    SH_MESSAGE,
    SH_PATH,
    SH_PROPERTY_SHAPE,
    SH_SEVERITY,
    SH_TARGET_CLASS,
)
from rdf_shapes.terms import Literal, Resource
from rdf_shapes.validation import (
    ConfigurationError,
    MaxLengthConstraint,
    NodeShape,
    PropertyPath,
    PropertyShape,
    Severity,
    ShapesGraph,
)
from rdf_shapes.validation.constraints import PropertyConstraint

EX = "http://example.org/"


def ex(local):
    return Resource(f"{EX}{local}")


class TestPropertyPath:
    """Tests for predicate and inverse paths."""

    @pytest.fixture
    def data(self):
        g = Graph()
        g.add(f"{EX}alice", f"{EX}knows", f"{EX}bob")
        g.add(f"{EX}carol", f"{EX}knows", f"{EX}bob")
        g.add(f"{EX}alice", f"{EX}name", Literal("Alice"))
        return g

    def test_forward(self, data):
        """Test a predicate path yields objects."""
        assert PropertyPath.of(f"{EX}knows").resolve(data, ex("alice")) == [ex("bob")]

    def test_inverse(self, data):
        """Test an inverse path yields subjects."""
        path = PropertyPath.of(f"{EX}knows", inverse=True)
        assert path.resolve(data, ex("bob")) == [ex("alice"), ex("carol")]
        assert str(path) == f"^{EX}knows"

    def test_literal_focus(self, data):
        """Test a literal has no outgoing values."""
        assert PropertyPath.of(f"{EX}name").resolve(data, Literal("Alice")) == []

    def test_of_passes_paths_through(self):
        """Test of() keeps an existing path."""
        path = PropertyPath.of(f"{EX}p", inverse=True)
        assert PropertyPath.of(path) is path


class TestShapes:
    """Tests for shape construction and serialization."""

    def test_identity_required(self):
        """Test a shape without identity is rejected."""
        with pytest.raises(ConfigurationError):
            NodeShape(identity=None)

    def test_path_required(self):
        """Test a property shape without path is rejected."""
        with pytest.raises(ConfigurationError):
            PropertyShape(identity=ex("S"))

    def test_coercion(self):
        """Test IRIs and messages are coerced to terms."""
        shape = NodeShape(identity=f"{EX}S", messages=["bad"], target_classes=[f"{EX}Person"])
        assert shape.identity == ex("S")
        assert shape.messages == (Literal("bad"),)
        assert shape.target_classes == [ex("Person")]
        assert shape.path is None
        assert shape.has_targets

    def test_property_shape_to_graph(self):
        """Test shape serialization includes header, path and constraints."""
        shape = PropertyShape(
            identity=ex("S"),
            property_path=f"{EX}name",
            severity=Severity.INFO,
            messages=["too long"],
            deactivated=True,
            target_classes=[f"{EX}Person"],
        ).add_constraint(MaxLengthConstraint(5))
        graph = shape.to_graph()
        s = shape.identity
        assert graph.value(s, Resource(RDF_TYPE)) == Resource(SH_PROPERTY_SHAPE)
        assert graph.value(s, Resource(SH_SEVERITY)) == Severity.INFO.resource
        assert graph.value(s, Resource(SH_MESSAGE)) == Literal("too long")
        assert graph.value(s, Resource(SH_DEACTIVATED)).value == "true"
        assert graph.value(s, Resource(SH_TARGET_CLASS)) == ex("Person")
        assert graph.value(s, Resource(SH_PATH)) == ex("name")
        assert graph.value(s, Resource(SH_MAX_LENGTH)).value == "5"

    def test_inverse_path_to_graph(self):
        """Test inverse paths serialize through sh:inversePath."""
        shape = PropertyShape(identity=ex("S"), property_path=PropertyPath.of(f"{EX}knows", inverse=True))
        graph = shape.to_graph()
        node = graph.value(shape.identity, Resource(SH_PATH))
        assert node.is_blank
        assert graph.value(node, Resource(SH_INVERSE_PATH)) == ex("knows")

    def test_inverse_path_to_graph_is_stable(self):
        """Test the inverse-path node is the same on every serialization."""
        shape = PropertyShape(identity=ex("S"), property_path=PropertyPath.of(f"{EX}knows", inverse=True))
        assert shape.to_graph() == shape.to_graph()


class TestShapesGraph:
    """Tests for ShapesGraph."""

    def test_lookup(self):
        """Test shapes are addressable by identity."""
        node = NodeShape(identity=ex("N"))
        prop = PropertyShape(identity=ex("P"), property_path=f"{EX}p")
        shapes = ShapesGraph([node, prop])
        assert len(shapes) == 2
        assert f"{EX}N" in shapes
        assert shapes.select_shape(f"{EX}P") is prop
        assert shapes.select_shape(ex("missing")) is None
        assert shapes.node_shapes() == [node]
        assert shapes.property_shapes() == [prop]

    def test_replace(self):
        """Test adding a shape with an existing identity replaces it."""
        shapes = ShapesGraph([NodeShape(identity=ex("N"))])
        replacement = NodeShape(identity=ex("N"), messages=["new"])
        shapes.add_shape(replacement)
        assert len(shapes) == 1
        assert shapes.select_shape(ex("N")) is replacement

    def test_declared_properties(self):
        """Test declared properties come from direct property paths."""
        name = PropertyShape(identity=ex("Name"), property_path=f"{EX}name")
        knows_inv = PropertyShape(
            identity=ex("KnownBy"),
            property_path=PropertyPath.of(f"{EX}knows", inverse=True),
        )
        person = NodeShape(identity=ex("Person"), constraints=[
            PropertyConstraint(name.identity), PropertyConstraint(knows_inv.identity),
        ])
        shapes = ShapesGraph([person, name, knows_inv])
        assert person.declared_properties(shapes) == {ex("name")}

    def test_to_graph(self):
        """Test the shapes graph serializes every shape."""
        shapes = ShapesGraph([
            NodeShape(identity=ex("A")),
            PropertyShape(identity=ex("B"), property_path=f"{EX}p"),
        ])
        graph = shapes.to_graph()
        assert {t.subject for t in graph} == {ex("A"), ex("B")}
