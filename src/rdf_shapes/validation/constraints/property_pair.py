"""
Property pair constraints: sh:equals, sh:disjoint, sh:lessThan and
sh:lessThanOrEquals.

Each compares the value nodes with the focus node's values for another
predicate in the data graph.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, ClassVar, Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    DISJOINT_CONSTRAINT_COMPONENT,
    EQUALS_CONSTRAINT_COMPONENT,
    LESS_THAN_CONSTRAINT_COMPONENT,
    LESS_THAN_OR_EQUALS_CONSTRAINT_COMPONENT,
    SH_DISJOINT,
    SH_EQUALS,
    SH_LESS_THAN,
    SH_LESS_THAN_OR_EQUALS,
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


class PropertyPairConstraint(Constraint):
    """Shared configuration: the predicate whose values are compared."""

    parameter: ClassVar[str]

    def __init__(
        self,
        predicate: Union[str, Resource],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if predicate is None:
            raise self._reject('given "predicate" parameter is None')
        super().__init__(name, identity_generator)
        self._predicate = as_resource(predicate)

    @property
    def predicate(self) -> Resource:
        return self._predicate

    def _other_values(self, data_graph: Optional[Graph], focus_node: Term) -> list[Term]:
        if data_graph is None or not isinstance(focus_node, Resource):
            return []
        return list(dict.fromkeys(data_graph.objects(focus_node, self._predicate)))

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, type(self).parameter, self._predicate)
        return graph


class EqualsConstraint(PropertyPairConstraint):
    """
    sh:equals: value nodes and the other predicate's values must be the same set.

    One result per term present on only one side.
    """

    component = EQUALS_CONSTRAINT_COMPONENT
    parameter = SH_EQUALS
    per_value_node = False

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        others = self._other_values(data_graph, focus_node)
        other_set = set(others)
        value_set = set(all_value_nodes)
        for node in all_value_nodes:
            if node not in other_set:
                report.add_result(self._new_result(shape, focus_node, node))
        for node in others:
            if node not in value_set:
                report.add_result(self._new_result(shape, focus_node, node))
        return report


class DisjointConstraint(PropertyPairConstraint):
    """sh:disjoint: no value node may also be a value of the other predicate."""

    component = DISJOINT_CONSTRAINT_COMPONENT
    parameter = SH_DISJOINT

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if value_node is not None and value_node in self._other_values(data_graph, focus_node):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report


class OrderingConstraint(PropertyPairConstraint):
    """
    Value must be ordered before every value of the other predicate.

    One result per (value, other) pair that fails; pairs that cannot be
    compared also fail.
    """

    compare: ClassVar[Callable[[Any, Any], bool]]

    def _ordered(self, value: Term, other: Term) -> bool:
        if not isinstance(value, Literal) or not isinstance(other, Literal):
            return False
        left, right = value.comparison_key(), other.comparison_key()
        if left is None or right is None or left[0] != right[0]:
            return False
        try:
            return type(self).compare(left[1], right[1])
        except TypeError:
            return False

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not isinstance(value_node, (Resource, Literal)):
            return report
        for other in self._other_values(data_graph, focus_node):
            if not self._ordered(value_node, other):
                report.add_result(self._new_result(shape, focus_node, value_node))
        return report


class LessThanConstraint(OrderingConstraint):
    """sh:lessThan: value < each other value."""
    component = LESS_THAN_CONSTRAINT_COMPONENT
    parameter = SH_LESS_THAN
    compare = staticmethod(operator.lt)


class LessThanOrEqualsConstraint(OrderingConstraint):
    """sh:lessThanOrEquals: value <= each other value."""
    component = LESS_THAN_OR_EQUALS_CONSTRAINT_COMPONENT
    parameter = SH_LESS_THAN_OR_EQUALS
    compare = staticmethod(operator.le)
