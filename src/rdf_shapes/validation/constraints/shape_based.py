"""
Shape-based constraints: sh:node, sh:property and sh:qualifiedValueShape.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    NODE_CONSTRAINT_COMPONENT,
    PROPERTY_CONSTRAINT_COMPONENT,
    QUALIFIED_MAX_COUNT_CONSTRAINT_COMPONENT,
    QUALIFIED_MIN_COUNT_CONSTRAINT_COMPONENT,
    SH_NODE,
    SH_PROPERTY,
    SH_QUALIFIED_MAX_COUNT,
    SH_QUALIFIED_MIN_COUNT,
    SH_QUALIFIED_VALUE_SHAPE,
    SH_QUALIFIED_VALUE_SHAPES_DISJOINT,
    XSD_BOOLEAN,
    XSD_INTEGER,
)
from rdf_shapes.terms import (
    IdentityGenerator,
    Literal,
    Resource,
    default_identity_generator,
)
from rdf_shapes.validation.constraints.base import Constraint
from rdf_shapes.validation.constraints.logical import ShapeRef, conforms_to, shape_identity

logger = logging.getLogger(__name__)


class NodeConstraint(Constraint):
    """sh:node: value must conform to the referenced node shape."""

    component = NODE_CONSTRAINT_COMPONENT

    def __init__(
        self,
        shape: ShapeRef,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        shape_id = shape_identity(shape)
        if shape_id is None:
            raise self._reject('given "shape" parameter is None')
        super().__init__(name, identity_generator)
        self._shape = shape_id

    @property
    def shape(self) -> Resource:
        return self._shape

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not isinstance(value_node, (Resource, Literal)):
            return report
        if conforms_to(shapes_graph, data_graph, self._shape, value_node, self._identity_generator) is False:
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_NODE, self._shape)
        return graph


class PropertyConstraint(Constraint):
    """
    sh:property: each value node is validated against a property shape.

    The property shape's own results are merged unchanged, so they carry the
    property shape as source shape and its path as result path.
    """

    component = PROPERTY_CONSTRAINT_COMPONENT

    def __init__(
        self,
        property_shape: ShapeRef,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        shape_id = shape_identity(property_shape)
        if shape_id is None:
            raise self._reject('given "property_shape" parameter is None')
        super().__init__(name, identity_generator)
        self._property_shape = shape_id

    @property
    def property_shape(self) -> Resource:
        return self._property_shape

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not isinstance(value_node, (Resource, Literal)):
            return report
        child = shapes_graph.select_shape(self._property_shape) if shapes_graph is not None else None
        if child is None:
            logger.warning(f"Property shape {self._property_shape} not found in shapes graph; skipped")
            return report
        return report.merge(child.evaluate(shapes_graph, data_graph, value_node, self._identity_generator))

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_PROPERTY, self._property_shape)
        return graph


class QualifiedValueShapeConstraint(Constraint):
    """
    sh:qualifiedValueShape with sh:qualifiedMinCount / sh:qualifiedMaxCount.

    Counts the value nodes conforming to the qualified shape. With
    ``disjoint`` set, a value node only counts if it conforms to none of the
    sibling qualified shapes.
    """

    component = QUALIFIED_MIN_COUNT_CONSTRAINT_COMPONENT
    per_value_node = False

    def __init__(
        self,
        shape: ShapeRef,
        min_count: Optional[int] = None,
        max_count: Optional[int] = None,
        disjoint: bool = False,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        shape_id = shape_identity(shape)
        if shape_id is None:
            raise self._reject('given "shape" parameter is None')
        if min_count is None and max_count is None:
            raise self._reject("at least one of min_count and max_count is required")
        if min_count is not None:
            min_count = self._count_bound(min_count, "min_count")
        if max_count is not None:
            max_count = self._count_bound(max_count, "max_count")
        super().__init__(name, identity_generator)
        self._shape = shape_id
        self._min_count = min_count
        self._max_count = max_count
        self._disjoint = bool(disjoint)

    @property
    def shape(self) -> Resource:
        return self._shape

    @property
    def min_count(self) -> Optional[int]:
        return self._min_count

    @property
    def max_count(self) -> Optional[int]:
        return self._max_count

    @property
    def disjoint(self) -> bool:
        return self._disjoint

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if shapes_graph is None or shapes_graph.select_shape(self._shape) is None:
            logger.warning(f"Qualified value shape {self._shape} not found in shapes graph; skipped")
            return report

        siblings = []
        if self._disjoint:
            siblings = [s for s in shapes_graph.qualified_siblings(shape.identity) if s != self._shape]

        gen = self._identity_generator
        count = 0
        for node in all_value_nodes:
            if not conforms_to(shapes_graph, data_graph, self._shape, node, gen):
                continue
            if any(conforms_to(shapes_graph, data_graph, s, node, gen) for s in siblings):
                continue
            count += 1

        if self._min_count is not None and count < self._min_count:
            report.add_result(self._new_result(
                shape, focus_node, None, component=QUALIFIED_MIN_COUNT_CONSTRAINT_COMPONENT,
            ))
        if self._max_count is not None and count > self._max_count:
            report.add_result(self._new_result(
                shape, focus_node, None, component=QUALIFIED_MAX_COUNT_CONSTRAINT_COMPONENT,
            ))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_QUALIFIED_VALUE_SHAPE, self._shape)
            if self._min_count is not None:
                graph.add(shape.identity, SH_QUALIFIED_MIN_COUNT, Literal.typed(self._min_count, XSD_INTEGER))
            if self._max_count is not None:
                graph.add(shape.identity, SH_QUALIFIED_MAX_COUNT, Literal.typed(self._max_count, XSD_INTEGER))
            if self._disjoint:
                graph.add(
                    shape.identity,
                    SH_QUALIFIED_VALUE_SHAPES_DISJOINT,
                    Literal.typed(True, XSD_BOOLEAN),
                )
        return graph
