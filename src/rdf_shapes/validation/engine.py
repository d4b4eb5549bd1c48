"""
Shape evaluation driver.

Resolves focus nodes from shape targets, evaluates each shape for each focus
node and merges the per-constraint reports into one validation report.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from rdf_shapes.config import ValidatorConfig
from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import RDFS_CLASS
from rdf_shapes.terms import (
    IdentityGenerator,
    Resource,
    Term,
    default_identity_generator,
)
from rdf_shapes.validation.report import ValidationReport
from rdf_shapes.validation.shapes import Shape, ShapesGraph

logger = logging.getLogger(__name__)


def evaluate_shape(
    shapes_graph: Optional[ShapesGraph],
    shape: Shape,
    data_graph: Optional[Graph],
    focus_node: Term,
    identity_generator: IdentityGenerator = default_identity_generator,
) -> ValidationReport:
    """Evaluate one shape for one focus node."""
    return shape.evaluate(shapes_graph, data_graph, focus_node, identity_generator)


def evaluate_constraints(
    shapes_graph: Optional[ShapesGraph],
    shape: Shape,
    data_graph: Optional[Graph],
    focus_node: Term,
    value_nodes: Sequence[Term],
    identity_generator: IdentityGenerator = default_identity_generator,
) -> ValidationReport:
    """
    Evaluate a shape's constraints over value nodes resolved by the caller.

    The value nodes are de-duplicated (first occurrence wins) before any
    constraint sees them.
    """
    return shape.evaluate(
        shapes_graph, data_graph, focus_node, identity_generator, value_nodes=value_nodes
    )


class ShaclValidator:
    """Validates a data graph against the shapes of a shapes graph."""

    def __init__(
        self,
        shapes_graph: ShapesGraph,
        config: Optional[ValidatorConfig] = None,
    ) -> None:
        """Initialize validator with shapes graph."""
        self.shapes = shapes_graph
        self.config = config or ValidatorConfig()
        self.config.validate_or_raise()
        self.config.apply_log_level()
        self._identity_generator = self.config.make_identity_generator()

    @property
    def identity_generator(self) -> IdentityGenerator:
        return self._identity_generator

    def focus_nodes(self, shape: Shape, data_graph: Graph) -> list[Term]:
        """Get focus nodes for a shape based on its targets."""
        found: dict[Term, None] = {}

        # sh:targetNode - explicit nodes
        for node in shape.target_nodes:
            found.setdefault(node, None)

        # sh:targetClass - instances of the class or a subclass
        classes = list(shape.target_classes)
        # Implicit class target: the shape is itself a class
        if shape.identity in data_graph.instances_of(Resource(RDFS_CLASS)):
            classes.append(shape.identity)
        for cls in classes:
            for node in data_graph.instances_of(cls):
                found.setdefault(node, None)

        # sh:targetSubjectsOf - subjects of specific predicates
        for pred in shape.target_subjects_of:
            for triple in data_graph.triples(None, pred):
                found.setdefault(triple.subject, None)

        # sh:targetObjectsOf - objects of specific predicates
        for pred in shape.target_objects_of:
            for triple in data_graph.triples(None, pred):
                found.setdefault(triple.object, None)

        return list(found)

    def validate(self, data_graph: Graph) -> ValidationReport:
        """
        Validate a data graph against every active shape.

        Args:
            data_graph: Graph to validate

        Returns:
            ValidationReport with results in shape, focus node, constraint order
        """
        started = time.perf_counter()
        report = ValidationReport.new(self._identity_generator)

        for shape in self.shapes:
            if shape.deactivated and not self.config.include_deactivated:
                logger.debug(f"Skipping deactivated shape {shape.identity}")
                continue
            if self._limit_reached(report):
                break
            report.merge(self.validate_shape(shape, data_graph, _limit=self._remaining(report)))

        logger.info(
            f"Validated {len(data_graph)} triples against {len(self.shapes)} shapes: "
            f"{len(report)} results in {time.perf_counter() - started:.3f}s"
        )
        return report

    def validate_shape(
        self,
        shape: Shape,
        data_graph: Graph,
        focus_nodes: Optional[Iterable[Term]] = None,
        _limit: Optional[int] = None,
    ) -> ValidationReport:
        """
        Validate one shape, for its targeted focus nodes or the given ones.
        """
        report = ValidationReport.new(self._identity_generator)
        if focus_nodes is None:
            nodes = self.focus_nodes(shape, data_graph)
        else:
            nodes = list(dict.fromkeys(focus_nodes))
        logger.debug(f"Shape {shape.identity}: {len(nodes)} focus nodes")

        if shape.deactivated and self.config.include_deactivated:
            # Evaluate as if active
            shape = _activated(shape)

        for focus_node in nodes:
            if _limit is not None and len(report) >= _limit:
                break
            report.merge(shape.evaluate(self.shapes, data_graph, focus_node, self._identity_generator))
        return report

    def _limit_reached(self, report: ValidationReport) -> bool:
        return self.config.max_results > 0 and len(report) >= self.config.max_results

    def _remaining(self, report: ValidationReport) -> Optional[int]:
        if self.config.max_results <= 0:
            return None
        return self.config.max_results - len(report)


def _activated(shape: Shape) -> Shape:
    return replace(shape, deactivated=False)


def validate(
    shapes_graph: ShapesGraph,
    data_graph: Graph,
    config: Optional[ValidatorConfig] = None,
) -> ValidationReport:
    """Convenience wrapper: validate a data graph in one call."""
    return ShaclValidator(shapes_graph, config).validate(data_graph)
