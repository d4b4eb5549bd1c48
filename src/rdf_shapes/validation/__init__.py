"""
SHACL validation layer.

Reports, shapes, the constraint family and the evaluation driver.
"""

from rdf_shapes.validation.report import (
    Severity,
    ValidationResult,
    ValidationReport,
)
from rdf_shapes.validation.paths import PropertyPath
from rdf_shapes.validation.constraints import (
    Constraint,
    ConfigurationError,
    MaxLengthConstraint,
    PatternConstraint,
)
from rdf_shapes.validation.shapes import (
    Shape,
    NodeShape,
    PropertyShape,
    ShapesGraph,
)
from rdf_shapes.validation.engine import (
    ShaclValidator,
    evaluate_shape,
    evaluate_constraints,
    validate,
)

__all__ = [
    "Severity",
    "ValidationResult",
    "ValidationReport",
    "PropertyPath",
    "Shape",
    "NodeShape",
    "PropertyShape",
    "ShapesGraph",
    "ShaclValidator",
    "evaluate_shape",
    "evaluate_constraints",
    "validate",
    "Constraint",
    "ConfigurationError",
    "MaxLengthConstraint",
    "PatternConstraint",
]
