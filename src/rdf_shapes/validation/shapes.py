"""
SHACL shapes: the context constraints are evaluated in.

A shape supplies severity, messages and (for property shapes) a path to the
results its constraints produce. ``Shape.evaluate`` runs every constraint of
the shape for one focus node; logical and shape-based constraints use it to
recurse into child shapes.
"""

from __future__ import annotations

import contextvars
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Union

from rdf_shapes.graph import RDF_TYPE_RES, Graph
from rdf_shapes.namespaces import (
    SH_DEACTIVATED,
    SH_DESCRIPTION,
    SH_MESSAGE,
    SH_NAME,
    SH_NODE_SHAPE,
    SH_PATH,
    SH_PROPERTY_SHAPE,
    SH_SEVERITY,
    SH_TARGET_CLASS,
    SH_TARGET_NODE,
    SH_TARGET_OBJECTS_OF,
    SH_TARGET_SUBJECTS_OF,
    XSD_BOOLEAN,
)
from rdf_shapes.terms import (
    DerivedIdentityGenerator,
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    as_resource,
    default_identity_generator,
)
from rdf_shapes.validation.constraints.base import ConfigurationError, Constraint
from rdf_shapes.validation.constraints.shape_based import (
    PropertyConstraint,
    QualifiedValueShapeConstraint,
)
from rdf_shapes.validation.paths import PropertyPath
from rdf_shapes.validation.report import Severity, ValidationReport

logger = logging.getLogger(__name__)

# (shape, focus node) pairs being evaluated in the current context
_active: contextvars.ContextVar[frozenset] = contextvars.ContextVar(
    "rdf_shapes_active_shapes", default=frozenset()
)


@dataclass(eq=False)
class Shape:
    """Base class for node and property shapes."""

    identity: Resource
    severity: Severity = Severity.VIOLATION
    messages: tuple[Literal, ...] = ()
    deactivated: bool = False
    name: Optional[str] = None
    description: Optional[str] = None
    target_classes: list[Resource] = field(default_factory=list)
    target_nodes: list[Term] = field(default_factory=list)
    target_subjects_of: list[Resource] = field(default_factory=list)
    target_objects_of: list[Resource] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)

    shape_type = SH_NODE_SHAPE

    def __post_init__(self) -> None:
        if self.identity is None:
            raise ConfigurationError("Cannot create shape: identity is None")
        self.identity = as_resource(self.identity)
        self.messages = tuple(
            m if isinstance(m, Literal) else Literal(str(m)) for m in self.messages
        )
        self.target_classes = [as_resource(c) for c in self.target_classes]
        self.target_nodes = [n if isinstance(n, Literal) else as_resource(n) for n in self.target_nodes]
        self.target_subjects_of = [as_resource(p) for p in self.target_subjects_of]
        self.target_objects_of = [as_resource(p) for p in self.target_objects_of]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identity.n3()}, constraints={len(self.constraints)})"

    @property
    def path(self) -> Optional[PropertyPath]:
        """Property path; None for node shapes."""
        return None

    @property
    def has_targets(self) -> bool:
        return bool(
            self.target_classes or self.target_nodes
            or self.target_subjects_of or self.target_objects_of
        )

    def add_constraint(self, constraint: Constraint) -> "Shape":
        """Attach a constraint; returns the shape for chaining."""
        self.constraints.append(constraint)
        return self

    def value_nodes(self, data_graph: Optional[Graph], focus_node: Term) -> list[Term]:
        """Value nodes of a node shape: the focus node itself."""
        return [focus_node]

    def declared_properties(self, shapes_graph: Optional["ShapesGraph"]) -> set[Resource]:
        """Predicates of this shape's sh:property shapes (direct paths only)."""
        declared: set[Resource] = set()
        if shapes_graph is None:
            return declared
        for constraint in self.constraints:
            if isinstance(constraint, PropertyConstraint):
                child = shapes_graph.select_shape(constraint.property_shape)
                if child is not None and child.path is not None and not child.path.inverse:
                    declared.add(child.path.predicate)
        return declared

    def evaluate(
        self,
        shapes_graph: Optional["ShapesGraph"],
        data_graph: Optional[Graph],
        focus_node: Term,
        identity_generator: IdentityGenerator = default_identity_generator,
        value_nodes: Optional[Sequence[Term]] = None,
    ) -> ValidationReport:
        """
        Evaluate every constraint of this shape for one focus node.

        Per-value-node constraints run once per value node; set-level ones
        run once with ``value_node=None``. Results are merged in constraint
        order. A shape re-entered for the same focus node through recursive
        references is treated as satisfied.
        """
        report = ValidationReport.new(identity_generator)
        if self.deactivated:
            return report

        key = (self.identity, focus_node)
        active = _active.get()
        if key in active:
            logger.debug(f"Recursive evaluation of {self.identity} for {focus_node}; treated as conforming")
            return report

        if value_nodes is None:
            value_nodes = self.value_nodes(data_graph, focus_node)
        else:
            value_nodes = list(dict.fromkeys(value_nodes))

        token = _active.set(active | {key})
        try:
            for constraint in self.constraints:
                if constraint.per_value_node:
                    for value_node in value_nodes:
                        report.merge(constraint.evaluate(
                            shapes_graph, self, data_graph, focus_node, value_node, value_nodes
                        ))
                else:
                    report.merge(constraint.evaluate(
                        shapes_graph, self, data_graph, focus_node, None, value_nodes
                    ))
        finally:
            _active.reset(token)
        return report

    def to_graph(self) -> Graph:
        """Serialize the shape, its targets and all its constraints."""
        graph = Graph(identity=self.identity)
        s = self.identity
        graph.add(s, RDF_TYPE_RES, Resource(self.shape_type))
        graph.add(s, SH_SEVERITY, self.severity.resource)
        if self.deactivated:
            graph.add(s, SH_DEACTIVATED, Literal.typed(True, XSD_BOOLEAN))
        for message in self.messages:
            graph.add(s, SH_MESSAGE, message)
        if self.name:
            graph.add(s, SH_NAME, Literal(self.name))
        if self.description:
            graph.add(s, SH_DESCRIPTION, Literal(self.description))
        for cls in self.target_classes:
            graph.add(s, SH_TARGET_CLASS, cls)
        for node in self.target_nodes:
            graph.add(s, SH_TARGET_NODE, node)
        for pred in self.target_subjects_of:
            graph.add(s, SH_TARGET_SUBJECTS_OF, pred)
        for pred in self.target_objects_of:
            graph.add(s, SH_TARGET_OBJECTS_OF, pred)
        self._path_to_graph(graph)
        for constraint in self.constraints:
            graph.merge(constraint.to_graph(self))
        return graph

    def _path_to_graph(self, graph: Graph) -> None:
        pass


@dataclass(eq=False, repr=False)
class NodeShape(Shape):
    """A SHACL node shape."""


@dataclass(eq=False, repr=False)
class PropertyShape(Shape):
    """A SHACL property shape: constraints apply to the nodes reached by ``path``."""

    property_path: Optional[Union[PropertyPath, Resource, str]] = None

    shape_type = SH_PROPERTY_SHAPE

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.property_path is None:
            raise ConfigurationError(f"Cannot create PropertyShape {self.identity}: path is None")
        self.property_path = PropertyPath.of(self.property_path)

    @property
    def path(self) -> PropertyPath:
        return self.property_path

    def value_nodes(self, data_graph: Optional[Graph], focus_node: Term) -> list[Term]:
        if data_graph is None:
            return []
        return self.property_path.resolve(data_graph, focus_node)

    def _path_to_graph(self, graph: Graph) -> None:
        path_node = self.property_path.to_graph_node(graph, DerivedIdentityGenerator(self.identity, "p"))
        graph.add(self.identity, SH_PATH, path_node)


class ShapesGraph:
    """A collection of shapes addressable by identity."""

    def __init__(
        self,
        shapes: Optional[Sequence[Shape]] = None,
        identity: Optional[Resource] = None,
    ) -> None:
        self.identity = identity or default_identity_generator()
        self._shapes: dict[Resource, Shape] = {}
        for shape in shapes or ():
            self.add_shape(shape)

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(list(self._shapes.values()))

    def __contains__(self, identity: object) -> bool:
        if isinstance(identity, str):
            identity = Resource(identity)
        return identity in self._shapes

    def add_shape(self, shape: Shape) -> "ShapesGraph":
        """Register a shape, replacing any shape with the same identity."""
        if shape.identity in self._shapes:
            logger.debug(f"Replacing shape {shape.identity}")
        self._shapes[shape.identity] = shape
        return self

    def select_shape(self, identity: Union[str, Resource]) -> Optional[Shape]:
        """Get a shape by identity, or None."""
        return self._shapes.get(as_resource(identity))

    def node_shapes(self) -> list[NodeShape]:
        return [s for s in self._shapes.values() if isinstance(s, NodeShape)]

    def property_shapes(self) -> list[PropertyShape]:
        return [s for s in self._shapes.values() if isinstance(s, PropertyShape)]

    def qualified_siblings(self, property_shape: Resource) -> list[Resource]:
        """
        Qualified value shapes of sibling property shapes.

        Siblings share a parent shape (through sh:property) with
        ``property_shape``. The property shape's own qualified shapes are
        included; callers drop the one they are evaluating.
        """
        siblings: dict[Resource, None] = {}
        for parent in self._shapes.values():
            children = [
                c.property_shape for c in parent.constraints
                if isinstance(c, PropertyConstraint)
            ]
            if property_shape not in children:
                continue
            for child_id in children:
                child = self._shapes.get(child_id)
                if child is None:
                    continue
                for constraint in child.constraints:
                    if isinstance(constraint, QualifiedValueShapeConstraint):
                        siblings.setdefault(constraint.shape, None)
        return list(siblings)

    def to_graph(self) -> Graph:
        """Serialize every shape into one graph."""
        graph = Graph(identity=self.identity)
        for shape in self._shapes.values():
            graph.merge(shape.to_graph())
        return graph
