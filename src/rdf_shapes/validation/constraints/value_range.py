"""
Value range constraints: sh:minExclusive, sh:minInclusive, sh:maxExclusive
and sh:maxInclusive.

Values are compared with the bound by datatype category (numeric, string,
boolean, date, dateTime). A value that is not comparable with the bound
violates the constraint.
"""

from __future__ import annotations

import operator
from decimal import Decimal
from typing import Any, Callable, ClassVar, Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    MAX_EXCLUSIVE_CONSTRAINT_COMPONENT,
    MAX_INCLUSIVE_CONSTRAINT_COMPONENT,
    MIN_EXCLUSIVE_CONSTRAINT_COMPONENT,
    MIN_INCLUSIVE_CONSTRAINT_COMPONENT,
    SH_MAX_EXCLUSIVE,
    SH_MAX_INCLUSIVE,
    SH_MIN_EXCLUSIVE,
    SH_MIN_INCLUSIVE,
    XSD_DECIMAL,
    XSD_DOUBLE,
    XSD_INTEGER,
)
from rdf_shapes.terms import IdentityGenerator, Literal, Resource, default_identity_generator
from rdf_shapes.validation.constraints.base import Constraint


def to_bound_literal(value: Any) -> Optional[Literal]:
    """Coerce Python numbers to typed literals; literals pass through."""
    if isinstance(value, Literal):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Literal.typed(value, XSD_INTEGER)
    if isinstance(value, float):
        return Literal.typed(repr(value), XSD_DOUBLE)
    if isinstance(value, Decimal):
        return Literal.typed(value, XSD_DECIMAL)
    return None


class ValueRangeConstraint(Constraint):
    """Shared logic: the value must stand in ``compare`` relation to the bound."""

    predicate: ClassVar[str]
    compare: ClassVar[Callable[[Any, Any], bool]]

    def __init__(
        self,
        value: Union[Literal, int, float, Decimal],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        bound = to_bound_literal(value)
        if bound is None:
            raise self._reject(f"bound {value!r} is not a literal or number")
        if bound.comparison_key() is None:
            raise self._reject(f"bound {bound.n3()} has no ordering")
        super().__init__(name, identity_generator)
        self._value = bound
        self._key = bound.comparison_key()

    @property
    def value(self) -> Literal:
        return self._value

    def _satisfied(self, term: Any) -> bool:
        if not isinstance(term, Literal):
            return False
        key = term.comparison_key()
        if key is None or key[0] != self._key[0]:
            return False
        try:
            return type(self).compare(key[1], self._key[1])
        except TypeError:
            # e.g. timezone-aware vs naive dateTime
            return False

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, (Resource, Literal)) and not self._satisfied(value_node):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, type(self).predicate, self._value)
        return graph


class MinExclusiveConstraint(ValueRangeConstraint):
    """sh:minExclusive: value > bound."""
    component = MIN_EXCLUSIVE_CONSTRAINT_COMPONENT
    predicate = SH_MIN_EXCLUSIVE
    compare = staticmethod(operator.gt)


class MinInclusiveConstraint(ValueRangeConstraint):
    """sh:minInclusive: value >= bound."""
    component = MIN_INCLUSIVE_CONSTRAINT_COMPONENT
    predicate = SH_MIN_INCLUSIVE
    compare = staticmethod(operator.ge)


class MaxExclusiveConstraint(ValueRangeConstraint):
    """sh:maxExclusive: value < bound."""
    component = MAX_EXCLUSIVE_CONSTRAINT_COMPONENT
    predicate = SH_MAX_EXCLUSIVE
    compare = staticmethod(operator.lt)


class MaxInclusiveConstraint(ValueRangeConstraint):
    """sh:maxInclusive: value <= bound."""
    component = MAX_INCLUSIVE_CONSTRAINT_COMPONENT
    predicate = SH_MAX_INCLUSIVE
    compare = staticmethod(operator.le)
