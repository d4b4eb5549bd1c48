"""
Logical constraints: sh:not, sh:and, sh:or and sh:xone.

Child shapes are referenced by identity and looked up in the shapes graph at
evaluation time. Each child is evaluated with the value node as its focus
node; an empty child report means the value node conforms to it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    AND_CONSTRAINT_COMPONENT,
    NOT_CONSTRAINT_COMPONENT,
    OR_CONSTRAINT_COMPONENT,
    SH_AND,
    SH_NOT,
    SH_OR,
    SH_XONE,
    XONE_CONSTRAINT_COMPONENT,
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

if TYPE_CHECKING:
    from rdf_shapes.validation.shapes import Shape

logger = logging.getLogger(__name__)

ShapeRef = Union[str, Resource, "Shape"]


def shape_identity(ref) -> Optional[Resource]:
    """Resolve a shape reference (IRI, Resource or shape object) to its identity."""
    if ref is None:
        return None
    if isinstance(ref, (str, Resource)):
        return as_resource(ref)
    return ref.identity


def conforms_to(
    shapes_graph,
    data_graph: Optional[Graph],
    shape_id: Resource,
    focus_node: Term,
    identity_generator: IdentityGenerator,
) -> Optional[bool]:
    """
    Evaluate a referenced shape for one focus node.

    Returns None when the shape cannot be found; callers skip it.
    """
    child = shapes_graph.select_shape(shape_id) if shapes_graph is not None else None
    if child is None:
        logger.warning(f"Referenced shape {shape_id} not found in shapes graph; skipped")
        return None
    return child.evaluate(shapes_graph, data_graph, focus_node, identity_generator).conforms


class NotConstraint(Constraint):
    """sh:not: value must not conform to the child shape."""

    component = NOT_CONSTRAINT_COMPONENT

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
        if conforms_to(shapes_graph, data_graph, self._shape, value_node, self._identity_generator):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_NOT, self._shape)
        return graph


class ShapeListConstraint(Constraint):
    """
    Base for combinators over a list of child shapes.

    Subclasses decide satisfaction from the number of children the value
    node conforms to, out of the children that could be resolved.
    """

    parameter: str

    def __init__(
        self,
        shapes: Iterable[ShapeRef],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if shapes is None:
            raise self._reject('given "shapes" parameter is None')
        ids = [shape_identity(s) for s in shapes]
        if any(i is None for i in ids):
            raise self._reject("shape list contains None")
        super().__init__(name, identity_generator)
        self._shapes = tuple(dict.fromkeys(ids))

    @property
    def shapes(self) -> tuple[Resource, ...]:
        return self._shapes

    def _satisfied(self, conforming: int, total: int) -> bool:
        raise NotImplementedError

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not isinstance(value_node, (Resource, Literal)):
            return report

        outcomes = [
            conforms_to(shapes_graph, data_graph, child, value_node, self._identity_generator)
            for child in self._shapes
        ]
        resolved = [o for o in outcomes if o is not None]
        if not self._satisfied(sum(resolved), len(resolved)):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            head = graph.add_collection(list(self._shapes), self._list_identities())
            graph.add(shape.identity, self.parameter, head)
        return graph


class AndConstraint(ShapeListConstraint):
    """sh:and: value must conform to every child shape."""

    component = AND_CONSTRAINT_COMPONENT
    parameter = SH_AND

    def _satisfied(self, conforming: int, total: int) -> bool:
        return conforming == total


class OrConstraint(ShapeListConstraint):
    """sh:or: value must conform to at least one child shape."""

    component = OR_CONSTRAINT_COMPONENT
    parameter = SH_OR

    def _satisfied(self, conforming: int, total: int) -> bool:
        # Nothing resolvable: no basis for a violation
        return total == 0 or conforming >= 1


class XoneConstraint(ShapeListConstraint):
    """sh:xone: value must conform to exactly one child shape."""

    component = XONE_CONSTRAINT_COMPONENT
    parameter = SH_XONE

    def _satisfied(self, conforming: int, total: int) -> bool:
        return total == 0 or conforming == 1
