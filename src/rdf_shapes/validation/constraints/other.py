"""Other constraints: sh:in, sh:hasValue and sh:closed."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    CLOSED_CONSTRAINT_COMPONENT,
    HAS_VALUE_CONSTRAINT_COMPONENT,
    IN_CONSTRAINT_COMPONENT,
    SH_CLOSED,
    SH_HAS_VALUE,
    SH_IGNORED_PROPERTIES,
    SH_IN,
    XSD_BOOLEAN,
)
from rdf_shapes.terms import (
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    as_resource,
    default_identity_generator,
)
from rdf_shapes.validation.constraints.base import Constraint
from rdf_shapes.validation.paths import PropertyPath


class InConstraint(Constraint):
    """sh:in: value must be one of a fixed list of terms."""

    component = IN_CONSTRAINT_COMPONENT

    def __init__(
        self,
        values: Iterable[Term],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if values is None:
            raise self._reject('given "values" parameter is None')
        super().__init__(name, identity_generator)
        self._values = tuple(dict.fromkeys(values))
        self._lookup = frozenset(self._values)

    @property
    def values(self) -> tuple[Term, ...]:
        return self._values

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, (Resource, Literal)) and value_node not in self._lookup:
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            head = graph.add_collection(list(self._values), self._list_identities())
            graph.add(shape.identity, SH_IN, head)
        return graph


class HasValueConstraint(Constraint):
    """sh:hasValue: the value nodes must include a given term."""

    component = HAS_VALUE_CONSTRAINT_COMPONENT
    per_value_node = False

    def __init__(
        self,
        value: Term,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if value is None:
            raise self._reject('given "value" parameter is None')
        super().__init__(name, identity_generator)
        self._value = value

    @property
    def value(self) -> Term:
        return self._value

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if self._value not in all_value_nodes:
            report.add_result(self._new_result(shape, focus_node, None))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_HAS_VALUE, self._value)
        return graph


class ClosedConstraint(Constraint):
    """
    sh:closed: value nodes may only use the shape's declared properties.

    Declared properties are the predicate paths of the shape's sh:property
    shapes plus ``ignored_properties``. One result per offending triple, with
    the triple's predicate as path and its object as value.
    """

    component = CLOSED_CONSTRAINT_COMPONENT

    def __init__(
        self,
        closed: bool = True,
        ignored_properties: Iterable[Union[str, Resource]] = (),
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        super().__init__(name, identity_generator)
        self._closed = bool(closed)
        self._ignored = tuple(dict.fromkeys(as_resource(p) for p in ignored_properties))

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def ignored_properties(self) -> tuple[Resource, ...]:
        return self._ignored

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not self._closed or data_graph is None or not isinstance(value_node, Resource):
            return report

        allowed = set(self._ignored) | shape.declared_properties(shapes_graph)
        for triple in data_graph.triples(value_node):
            if triple.predicate not in allowed:
                report.add_result(self._new_result(
                    shape, focus_node, triple.object,
                    result_path=PropertyPath(triple.predicate),
                ))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_CLOSED, Literal.typed(self._closed, XSD_BOOLEAN))
            if self._ignored:
                head = graph.add_collection(list(self._ignored), self._list_identities())
                graph.add(shape.identity, SH_IGNORED_PROPERTIES, head)
        return graph
