"""Cardinality constraints: sh:minCount and sh:maxCount."""

from __future__ import annotations

from typing import Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    MAX_COUNT_CONSTRAINT_COMPONENT,
    MIN_COUNT_CONSTRAINT_COMPONENT,
    SH_MAX_COUNT,
    SH_MIN_COUNT,
    XSD_INTEGER,
)
from rdf_shapes.terms import IdentityGenerator, Literal, Resource, default_identity_generator
from rdf_shapes.validation.constraints.base import Constraint


class MinCountConstraint(Constraint):
    """sh:minCount: at least ``min_count`` value nodes."""

    component = MIN_COUNT_CONSTRAINT_COMPONENT
    per_value_node = False

    def __init__(
        self,
        min_count: int,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        bound = self._count_bound(min_count, "min_count")
        super().__init__(name, identity_generator)
        self._min_count = bound

    @property
    def min_count(self) -> int:
        return self._min_count

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if len(all_value_nodes) < self._min_count:
            report.add_result(self._new_result(shape, focus_node, None))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_MIN_COUNT, Literal.typed(self._min_count, XSD_INTEGER))
        return graph


class MaxCountConstraint(Constraint):
    """sh:maxCount: at most ``max_count`` value nodes."""

    component = MAX_COUNT_CONSTRAINT_COMPONENT
    per_value_node = False

    def __init__(
        self,
        max_count: int,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        bound = self._count_bound(max_count, "max_count")
        super().__init__(name, identity_generator)
        self._max_count = bound

    @property
    def max_count(self) -> int:
        return self._max_count

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if len(all_value_nodes) > self._max_count:
            report.add_result(self._new_result(shape, focus_node, None))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_MAX_COUNT, Literal.typed(self._max_count, XSD_INTEGER))
        return graph
