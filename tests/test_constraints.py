"""Tests for cardinality, value type, value range, other and property pair constraints."""

from decimal import Decimal

import pytest

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    CLOSED_CONSTRAINT_COMPONENT,
    MAX_COUNT_CONSTRAINT_COMPONENT,
    MIN_COUNT_CONSTRAINT_COMPONENT,
    RDF_TYPE,
    RDFS_SUBCLASS_OF,
    SH_CLOSED,
    SH_IGNORED_PROPERTIES,
    SH_IN,
    SH_MIN_COUNT,
    SH_MIN_INCLUSIVE,
    SH_NODE_KIND,
    XSD,
    XSD_BOOLEAN,
    XSD_DECIMAL,
    XSD_DOUBLE,
    XSD_INTEGER,
    XSD_STRING,
)
from rdf_shapes.terms import Literal, Resource
from rdf_shapes.validation.constraints import (
    ClassConstraint,
    ClosedConstraint,
    ConfigurationError,
    DatatypeConstraint,
    DisjointConstraint,
    EqualsConstraint,
    HasValueConstraint,
    InConstraint,
    LessThanConstraint,
    LessThanOrEqualsConstraint,
    MaxCountConstraint,
    MaxExclusiveConstraint,
    MaxInclusiveConstraint,
    MinCountConstraint,
    MinExclusiveConstraint,
    MinInclusiveConstraint,
    NodeKind,
    NodeKindConstraint,
    PropertyConstraint,
)
from rdf_shapes.validation.shapes import NodeShape, PropertyShape, ShapesGraph

EX = "http://example.org/"
ALICE = Resource(f"{EX}alice")


def ex(local):
    return Resource(f"{EX}{local}")


def integer(n):
    return Literal.typed(n, XSD_INTEGER)


@pytest.fixture
def age_shape():
    return PropertyShape(identity=ex("AgeShape"), property_path=f"{EX}age")


@pytest.fixture
def person_shape():
    return NodeShape(identity=ex("PersonShape"))


def run(constraint, shape, value, all_values=None, data_graph=None, shapes_graph=None, focus=ALICE):
    values = all_values if all_values is not None else ([value] if value is not None else [])
    return constraint.evaluate(shapes_graph, shape, data_graph, focus, value, values)


# ============================================================================
# Cardinality Tests
# ============================================================================

class TestCardinality:
    """Tests for sh:minCount and sh:maxCount."""

    def test_min_count_with_no_values(self, age_shape):
        """Test minCount fires on an empty value-node set."""
        report = run(MinCountConstraint(1), age_shape, None, all_values=[])
        assert len(report) == 1
        result = report.results[0]
        assert result.value is None
        assert result.source_constraint_component == MIN_COUNT_CONSTRAINT_COMPONENT

    def test_min_count_satisfied(self, age_shape):
        """Test minCount with enough values."""
        assert len(run(MinCountConstraint(2), age_shape, None, [integer(1), integer(2)])) == 0

    def test_max_count(self, age_shape):
        """Test maxCount fires once, not per value."""
        report = run(MaxCountConstraint(1), age_shape, None, [integer(1), integer(2), integer(3)])
        assert len(report) == 1
        assert report.results[0].source_constraint_component == MAX_COUNT_CONSTRAINT_COMPONENT

    def test_set_level(self):
        """Test cardinality rules are evaluated once per focus node."""
        assert MinCountConstraint.per_value_node is False
        assert MaxCountConstraint.per_value_node is False

    def test_negative_clamped(self):
        """Test negative counts are clamped."""
        assert MinCountConstraint(-1).min_count == 0
        assert MaxCountConstraint(-1).max_count == 0

    @pytest.mark.parametrize("count", [None, True, 2.5, "3"])
    def test_non_integer_count_rejected(self, count):
        """Test counts must be integers."""
        with pytest.raises(ConfigurationError):
            MinCountConstraint(count)
        with pytest.raises(ConfigurationError):
            MaxCountConstraint(count)

    def test_to_graph(self, age_shape):
        """Test minCount serializes as an integer."""
        graph = MinCountConstraint(2).to_graph(age_shape)
        assert graph.value(age_shape.identity, Resource(SH_MIN_COUNT)) == integer(2)


# ============================================================================
# Value Type Tests
# ============================================================================

class TestValueType:
    """Tests for sh:class, sh:datatype and sh:nodeKind."""

    @pytest.fixture
    def data(self):
        g = Graph()
        g.add(f"{EX}Student", RDFS_SUBCLASS_OF, f"{EX}Person")
        g.add(f"{EX}bob", RDF_TYPE, f"{EX}Student")
        g.add(f"{EX}rex", RDF_TYPE, f"{EX}Dog")
        return g

    def test_class_via_subclass(self, person_shape, data):
        """Test instances of a subclass satisfy sh:class."""
        c = ClassConstraint(f"{EX}Person")
        assert len(run(c, person_shape, ex("bob"), data_graph=data)) == 0
        assert len(run(c, person_shape, ex("rex"), data_graph=data)) == 1

    def test_class_literal_violates(self, person_shape, data):
        """Test literals are never class instances."""
        assert len(run(ClassConstraint(f"{EX}Person"), person_shape, Literal("bob"), data_graph=data)) == 1

    def test_class_none_rejected(self):
        """Test a missing class is a configuration error."""
        with pytest.raises(ConfigurationError):
            ClassConstraint(None)

    def test_datatype(self, age_shape):
        """Test datatype matches and mismatches."""
        c = DatatypeConstraint(XSD_INTEGER)
        assert len(run(c, age_shape, integer(42))) == 0
        assert len(run(c, age_shape, Literal("42"))) == 1
        assert len(run(c, age_shape, ex("x"))) == 1

    def test_datatype_ill_formed(self, age_shape):
        """Test an ill-formed lexical form violates."""
        assert len(run(DatatypeConstraint(XSD_INTEGER), age_shape, Literal.typed("forty", XSD_INTEGER))) == 1

    def test_datatype_plain_is_string(self, age_shape):
        """Test plain literals are xsd:string."""
        assert len(run(DatatypeConstraint(XSD_STRING), age_shape, Literal("x"))) == 0

    @pytest.mark.parametrize("lexical", ["1_000", "\u0661\u0662", "1e3", "+"])
    def test_integer_lexical_space(self, age_shape, lexical):
        """Test lexical forms outside the xsd:integer grammar violate."""
        assert len(run(DatatypeConstraint(XSD_INTEGER), age_shape, Literal.typed(lexical, XSD_INTEGER))) == 1

    def test_decimal_exponent_ill_formed(self, age_shape):
        """Test xsd:decimal has no exponent form."""
        c = DatatypeConstraint(XSD_DECIMAL)
        assert len(run(c, age_shape, Literal.typed("1.5", XSD_DECIMAL))) == 0
        assert len(run(c, age_shape, Literal.typed("1e5", XSD_DECIMAL))) == 1

    def test_date_time_requires_time(self, age_shape):
        """Test an xsd:dateTime needs its time part."""
        c = DatatypeConstraint(f"{XSD}dateTime")
        assert len(run(c, age_shape, Literal.typed("2024-01-01T10:00:00Z", f"{XSD}dateTime"))) == 0
        assert len(run(c, age_shape, Literal.typed("2024-01-01T10:00:00.5+02:00", f"{XSD}dateTime"))) == 0
        assert len(run(c, age_shape, Literal.typed("2024-01-01", f"{XSD}dateTime"))) == 1
        assert len(run(c, age_shape, Literal.typed("2024-01-01 10:00:00", f"{XSD}dateTime"))) == 1

    @pytest.mark.parametrize("kind,iri,blank,literal", [
        (NodeKind.IRI, True, False, False),
        (NodeKind.BLANK_NODE, False, True, False),
        (NodeKind.LITERAL, False, False, True),
        (NodeKind.BLANK_NODE_OR_IRI, True, True, False),
        (NodeKind.BLANK_NODE_OR_LITERAL, False, True, True),
        (NodeKind.IRI_OR_LITERAL, True, False, True),
    ])
    def test_node_kind(self, person_shape, kind, iri, blank, literal):
        """Test each node kind against each term kind."""
        c = NodeKindConstraint(kind)
        assert (len(run(c, person_shape, ex("x"))) == 0) is iri
        assert (len(run(c, person_shape, Resource.blank())) == 0) is blank
        assert (len(run(c, person_shape, Literal("x"))) == 0) is literal

    def test_node_kind_from_iri(self, person_shape):
        """Test node kinds can be given by IRI."""
        c = NodeKindConstraint(NodeKind.IRI.value)
        assert c.node_kind is NodeKind.IRI
        graph = c.to_graph(person_shape)
        assert graph.value(person_shape.identity, Resource(SH_NODE_KIND)) == Resource(NodeKind.IRI.value)

    def test_node_kind_unknown(self):
        """Test unknown node kinds are rejected."""
        with pytest.raises(ConfigurationError):
            NodeKindConstraint(f"{EX}NotAKind")


# ============================================================================
# Value Range Tests
# ============================================================================

class TestValueRange:
    """Tests for min/max inclusive/exclusive."""

    @pytest.mark.parametrize("cls,bound,ok,bad", [
        (MinInclusiveConstraint, 18, [18, 19], [17]),
        (MinExclusiveConstraint, 18, [19], [18, 17]),
        (MaxInclusiveConstraint, 65, [65, 0], [66]),
        (MaxExclusiveConstraint, 65, [64], [65, 66]),
    ])
    def test_integer_bounds(self, age_shape, cls, bound, ok, bad):
        """Test inclusive and exclusive integer bounds."""
        c = cls(bound)
        for n in ok:
            assert len(run(c, age_shape, integer(n))) == 0
        for n in bad:
            assert len(run(c, age_shape, integer(n))) == 1

    def test_mixed_numeric_types(self, age_shape):
        """Test integer, decimal and double compare numerically."""
        c = MinInclusiveConstraint(Decimal("2.5"))
        assert len(run(c, age_shape, integer(3))) == 0
        assert len(run(c, age_shape, Literal.typed("2.4", XSD_DOUBLE))) == 1

    def test_incomparable_violates(self, age_shape):
        """Test values of another category violate."""
        c = MinInclusiveConstraint(0)
        assert len(run(c, age_shape, Literal("ten"))) == 1
        assert len(run(c, age_shape, ex("x"))) == 1
        assert len(run(c, age_shape, Literal.typed("x", XSD_INTEGER))) == 1

    def test_dates(self, age_shape):
        """Test date bounds."""
        c = MaxExclusiveConstraint(Literal.typed("2024-01-01", f"{XSD}date"))
        assert len(run(c, age_shape, Literal.typed("2023-12-31", f"{XSD}date"))) == 0
        assert len(run(c, age_shape, Literal.typed("2024-01-01", f"{XSD}date"))) == 1

    def test_bound_coercion(self):
        """Test Python numbers become typed literals."""
        assert MinInclusiveConstraint(5).value == integer(5)
        assert MinInclusiveConstraint(Decimal("1.5")).value.datatype == XSD_DECIMAL
        assert MinInclusiveConstraint(1.5).value.datatype == XSD_DOUBLE

    @pytest.mark.parametrize("bound", ["5", True, None, Literal.typed("x", f"{EX}custom")])
    def test_unorderable_bound_rejected(self, bound):
        """Test bounds without an ordering are rejected."""
        with pytest.raises(ConfigurationError):
            MinInclusiveConstraint(bound)

    def test_to_graph(self, age_shape):
        """Test the bound literal is serialized as is."""
        graph = MinInclusiveConstraint(18).to_graph(age_shape)
        assert graph.value(age_shape.identity, Resource(SH_MIN_INCLUSIVE)) == integer(18)


# ============================================================================
# In / HasValue / Closed Tests
# ============================================================================

class TestOtherConstraints:
    """Tests for sh:in, sh:hasValue and sh:closed."""

    def test_in(self, person_shape):
        """Test membership is by term equality."""
        c = InConstraint([Literal("red"), Literal("green"), ex("blue")])
        assert len(run(c, person_shape, Literal("red"))) == 0
        assert len(run(c, person_shape, ex("blue"))) == 0
        assert len(run(c, person_shape, Literal("blue"))) == 1
        assert len(run(c, person_shape, Literal.lang("red", "en"))) == 1

    def test_in_to_graph(self, person_shape):
        """Test sh:in is written as an RDF list."""
        values = [Literal("a"), Literal("b")]
        graph = InConstraint(values).to_graph(person_shape)
        head = graph.value(person_shape.identity, Resource(SH_IN))
        assert graph.collection(head) == values

    def test_has_value(self, age_shape):
        """Test hasValue is judged over the whole value-node set."""
        c = HasValueConstraint(integer(1))
        assert len(run(c, age_shape, None, [integer(2), integer(1)])) == 0
        report = run(c, age_shape, None, [integer(2)])
        assert len(report) == 1
        assert report.results[0].value is None
        assert len(run(c, age_shape, None, [])) == 1

    def test_in_explicit_string_datatype(self, person_shape):
        """Test a plain literal matches the same value typed as xsd:string."""
        c = InConstraint([Literal("a", XSD_STRING)])
        assert len(run(c, person_shape, Literal("a"))) == 0
        assert len(run(InConstraint([Literal("a")]), person_shape, Literal("a", XSD_STRING))) == 0

    def test_has_value_explicit_string_datatype(self, age_shape):
        """Test hasValue treats "a" and "a"^^xsd:string as one term."""
        c = HasValueConstraint(Literal("a", XSD_STRING))
        assert len(run(c, age_shape, None, [Literal("a")])) == 0
        assert len(run(HasValueConstraint(Literal("a")), age_shape, None, [Literal.typed("a", XSD_STRING)])) == 0

    @pytest.mark.parametrize("constraint", [
        InConstraint([Literal("a"), Literal("b")]),
        ClosedConstraint(True, [f"{EX}nick", f"{EX}alias"]),
    ], ids=["in", "closed"])
    def test_list_to_graph_is_stable(self, person_shape, constraint):
        """Test repeated serialization gives the same triples."""
        assert constraint.to_graph(person_shape) == constraint.to_graph(person_shape)

    def test_closed(self):
        """Test undeclared properties are reported per triple."""
        name_shape = PropertyShape(identity=ex("NameShape"), property_path=f"{EX}name")
        person = NodeShape(identity=ex("PersonShape"))
        person.add_constraint(PropertyConstraint(name_shape.identity))
        person.add_constraint(ClosedConstraint(ignored_properties=[f"{EX}nick", RDF_TYPE]))
        shapes = ShapesGraph([person, name_shape])

        data = Graph()
        data.add(ALICE, RDF_TYPE, f"{EX}Person")
        data.add(ALICE, f"{EX}name", Literal("Alice"))
        data.add(ALICE, f"{EX}nick", Literal("Al"))
        data.add(ALICE, f"{EX}age", integer(30))

        closed = person.constraints[1]
        report = closed.evaluate(shapes, person, data, ALICE, ALICE, [ALICE])
        assert len(report) == 1
        result = report.results[0]
        assert result.source_constraint_component == CLOSED_CONSTRAINT_COMPONENT
        assert str(result.result_path) == f"{EX}age"
        assert result.value == integer(30)

    def test_closed_reports_rdf_type(self, person_shape):
        """Test rdf:type is only allowed when listed as ignored."""
        data = Graph()
        data.add(ALICE, RDF_TYPE, f"{EX}Person")
        report = run(ClosedConstraint(), person_shape, ALICE, data_graph=data)
        assert len(report) == 1
        assert str(report.results[0].result_path) == RDF_TYPE
        assert report.results[0].value == ex("Person")

        ignoring = ClosedConstraint(ignored_properties=[RDF_TYPE])
        assert len(run(ignoring, person_shape, ALICE, data_graph=data)) == 0

    def test_closed_literal_value_ignored(self, person_shape):
        """Test literals have no properties to check."""
        data = Graph().add(ALICE, f"{EX}age", integer(3))
        assert len(run(ClosedConstraint(), person_shape, Literal("x"), data_graph=data)) == 0

    def test_not_closed(self, person_shape):
        """Test closed=False never reports."""
        data = Graph().add(ALICE, f"{EX}age", integer(3))
        assert len(run(ClosedConstraint(False), person_shape, ALICE, data_graph=data)) == 0

    def test_closed_to_graph(self, person_shape):
        """Test closed flag and ignored list serialization."""
        graph = ClosedConstraint(True, [f"{EX}nick"]).to_graph(person_shape)
        assert graph.value(person_shape.identity, Resource(SH_CLOSED)) == Literal.typed(True, XSD_BOOLEAN)
        head = graph.value(person_shape.identity, Resource(SH_IGNORED_PROPERTIES))
        assert graph.collection(head) == [ex("nick")]


# ============================================================================
# Property Pair Tests
# ============================================================================

class TestPropertyPair:
    """Tests for sh:equals, sh:disjoint, sh:lessThan and sh:lessThanOrEquals."""

    @pytest.fixture
    def data(self):
        g = Graph()
        g.add(ALICE, f"{EX}givenName", Literal("Alice"))
        g.add(ALICE, f"{EX}firstName", Literal("Alice"))
        g.add(ALICE, f"{EX}end", integer(10))
        g.add(ALICE, f"{EX}end", integer(20))
        return g

    @pytest.fixture
    def shape(self):
        return PropertyShape(identity=ex("PairShape"), property_path=f"{EX}givenName")

    def test_equals(self, shape, data):
        """Test equal sets conform and differences are reported both ways."""
        c = EqualsConstraint(f"{EX}firstName")
        assert len(run(c, shape, None, [Literal("Alice")], data_graph=data)) == 0

        report = run(c, shape, None, [Literal("Bob")], data_graph=data)
        assert {r.value for r in report} == {Literal("Bob"), Literal("Alice")}

    def test_disjoint(self, shape, data):
        """Test shared values violate sh:disjoint."""
        c = DisjointConstraint(f"{EX}firstName")
        assert len(run(c, shape, Literal("Alice"), data_graph=data)) == 1
        assert len(run(c, shape, Literal("Al"), data_graph=data)) == 0

    def test_less_than(self, shape, data):
        """Test one result per failing pair."""
        c = LessThanConstraint(f"{EX}end")
        assert len(run(c, shape, integer(5), data_graph=data)) == 0
        assert len(run(c, shape, integer(15), data_graph=data)) == 1
        assert len(run(c, shape, integer(20), data_graph=data)) == 2

    def test_less_than_or_equals(self, shape, data):
        """Test equality is allowed."""
        c = LessThanOrEqualsConstraint(f"{EX}end")
        assert len(run(c, shape, integer(10), data_graph=data)) == 0
        assert len(run(c, shape, integer(11), data_graph=data)) == 1

    def test_less_than_incomparable(self, shape, data):
        """Test incomparable pairs fail."""
        c = LessThanConstraint(f"{EX}end")
        assert len(run(c, shape, Literal("a"), data_graph=data)) == 2

    def test_no_other_values(self, shape):
        """Test no comparison partners means no results."""
        c = LessThanConstraint(f"{EX}end")
        assert len(run(c, shape, integer(5), data_graph=Graph())) == 0

    def test_predicate_none_rejected(self):
        """Test a missing predicate is a configuration error."""
        with pytest.raises(ConfigurationError):
            EqualsConstraint(None)
