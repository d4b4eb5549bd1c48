"""
Constraint contract.

Every rule kind is a Constraint subclass with immutable configuration. It
evaluates a value node (or, for set-level rules, the whole value-node set of
a focus node) into a ValidationReport, and serializes its configuration into
triples anchored on a shape.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence, Union

from rdf_shapes.graph import Graph
from rdf_shapes.terms import (
    DerivedIdentityGenerator,
    IdentityGenerator,
    Resource,
    Term,
    default_identity_generator,
)
from rdf_shapes.validation.report import ValidationReport, ValidationResult

if TYPE_CHECKING:
    from rdf_shapes.validation.paths import PropertyPath
    from rdf_shapes.validation.shapes import Shape, ShapesGraph

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a constraint is built from missing or invalid configuration."""
    pass


class Constraint(ABC):
    """
    Base class for all constraint kinds.

    Subclasses set ``component`` to their constraint-component IRI. Rules that
    judge the value-node set as a whole (cardinality, uniqueness, ...) set
    ``per_value_node = False``; the driver then calls them once per focus
    node with ``value_node=None``.
    """

    component: ClassVar[str]
    per_value_node: ClassVar[bool] = True

    def __init__(
        self,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        self._identity_generator = identity_generator
        if name is None:
            self._identity = identity_generator()
        elif isinstance(name, Resource):
            self._identity = name
        else:
            self._identity = Resource(name)

    @property
    def identity(self) -> Resource:
        """Constraint name, or a blank identity minted at construction."""
        return self._identity

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identity.n3()})"

    @abstractmethod
    def evaluate(
        self,
        shapes_graph: Optional["ShapesGraph"],
        shape: "Shape",
        data_graph: Optional[Graph],
        focus_node: Term,
        value_node: Optional[Term],
        all_value_nodes: Sequence[Term],
    ) -> ValidationReport:
        """
        Evaluate this constraint.

        Args:
            shapes_graph: Shapes available for nested shape references
            shape: Shape supplying severity, messages and path
            data_graph: Graph under validation
            focus_node: Node being validated
            value_node: Term under test (None for set-level rules)
            all_value_nodes: Every value node of the focus node

        Returns:
            A fresh report with one result per violation
        """

    @abstractmethod
    def to_graph(self, shape: Optional["Shape"]) -> Graph:
        """Serialize configuration as triples with the shape as subject."""

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def _new_report(self) -> ValidationReport:
        return ValidationReport.new(self._identity_generator)

    def _new_result(
        self,
        shape: "Shape",
        focus_node: Term,
        value: Optional[Term],
        component: Optional[str] = None,
        result_path: Optional["PropertyPath"] = None,
    ) -> ValidationResult:
        """Build a result carrying the shape's context."""
        return ValidationResult(
            source_shape=shape.identity,
            source_constraint_component=component or self.component,
            focus_node=focus_node,
            result_path=result_path if result_path is not None else shape.path,
            value=value,
            messages=shape.messages,
            identity=self._identity_generator(),
            severity=shape.severity,
        )

    def _reject(self, message: str) -> ConfigurationError:
        """Log and build a configuration error for the caller to raise."""
        logger.debug(f"Rejected {type(self).__name__}: {message}")
        return ConfigurationError(f"Cannot create {type(self).__name__}: {message}")

    def _list_identities(self) -> IdentityGenerator:
        """Stable node names for RDF lists written by to_graph."""
        return DerivedIdentityGenerator(self._identity, "l")

    def _count_bound(self, value: object, parameter: str) -> int:
        """Check a length or count parameter and clamp it at zero."""
        if value is None:
            raise self._reject(f'given "{parameter}" parameter is None')
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._reject(f'"{parameter}" must be an integer, got {value!r}')
        return max(value, 0)
