"""
rdf-shapes: SHACL constraint evaluation for RDF graphs.

Validates value nodes against a family of SHACL Core constraints, produces
validation reports and serializes constraints back into triples.
"""

__version__ = "0.1.0"

from rdf_shapes.terms import (
    Resource,
    Literal,
    Term,
    Triple,
    IdentityGenerator,
    UUIDIdentityGenerator,
    DerivedIdentityGenerator,
    SequentialIdentityGenerator,
)
from rdf_shapes.graph import Graph
from rdf_shapes.config import (
    ValidatorConfig,
    IdentityScheme,
    ConfigValidationError,
)
from rdf_shapes.validation import (
    Severity,
    ValidationResult,
    ValidationReport,
    PropertyPath,
    Shape,
    NodeShape,
    PropertyShape,
    ShapesGraph,
    ShaclValidator,
    validate,
    Constraint,
    ConfigurationError,
    MaxLengthConstraint,
    PatternConstraint,
)

__all__ = [
    # Terms
    "Resource",
    "Literal",
    "Term",
    "Triple",
    "IdentityGenerator",
    "UUIDIdentityGenerator",
    "DerivedIdentityGenerator",
    "SequentialIdentityGenerator",
    "Graph",
    # Configuration
    "ValidatorConfig",
    "IdentityScheme",
    "ConfigValidationError",
    # Validation
    "Severity",
    "ValidationResult",
    "ValidationReport",
    "PropertyPath",
    "Shape",
    "NodeShape",
    "PropertyShape",
    "ShapesGraph",
    "ShaclValidator",
    "validate",
    "Constraint",
    "ConfigurationError",
    "MaxLengthConstraint",
    "PatternConstraint",
]
