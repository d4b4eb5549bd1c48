"""
SHACL constraint family.

One class per rule kind, all implementing the Constraint contract.
"""

from rdf_shapes.validation.constraints.base import (
    Constraint,
    ConfigurationError,
)
from rdf_shapes.validation.constraints.cardinality import (
    MinCountConstraint,
    MaxCountConstraint,
)
from rdf_shapes.validation.constraints.string import (
    MinLengthConstraint,
    MaxLengthConstraint,
    PatternConstraint,
    LanguageInConstraint,
    UniqueLangConstraint,
    REGEX_FLAGS,
    flags_to_regex,
    regex_to_flags,
    strip_whitespace,
)
from rdf_shapes.validation.constraints.value_type import (
    NodeKind,
    ClassConstraint,
    DatatypeConstraint,
    NodeKindConstraint,
)
from rdf_shapes.validation.constraints.value_range import (
    ValueRangeConstraint,
    MinExclusiveConstraint,
    MinInclusiveConstraint,
    MaxExclusiveConstraint,
    MaxInclusiveConstraint,
)
from rdf_shapes.validation.constraints.other import (
    InConstraint,
    HasValueConstraint,
    ClosedConstraint,
)
from rdf_shapes.validation.constraints.property_pair import (
    EqualsConstraint,
    DisjointConstraint,
    LessThanConstraint,
    LessThanOrEqualsConstraint,
)
from rdf_shapes.validation.constraints.logical import (
    NotConstraint,
    AndConstraint,
    OrConstraint,
    XoneConstraint,
)
from rdf_shapes.validation.constraints.shape_based import (
    NodeConstraint,
    PropertyConstraint,
    QualifiedValueShapeConstraint,
)

__all__ = [
    "Constraint",
    "ConfigurationError",
    # Cardinality
    "MinCountConstraint",
    "MaxCountConstraint",
    # String-based
    "MinLengthConstraint",
    "MaxLengthConstraint",
    "PatternConstraint",
    "LanguageInConstraint",
    "UniqueLangConstraint",
    "REGEX_FLAGS",
    "flags_to_regex",
    "regex_to_flags",
    "strip_whitespace",
    # Value type
    "NodeKind",
    "ClassConstraint",
    "DatatypeConstraint",
    "NodeKindConstraint",
    # Value range
    "ValueRangeConstraint",
    "MinExclusiveConstraint",
    "MinInclusiveConstraint",
    "MaxExclusiveConstraint",
    "MaxInclusiveConstraint",
    # Other
    "InConstraint",
    "HasValueConstraint",
    "ClosedConstraint",
    # Property pair
    "EqualsConstraint",
    "DisjointConstraint",
    "LessThanConstraint",
    "LessThanOrEqualsConstraint",
    # Logical
    "NotConstraint",
    "AndConstraint",
    "OrConstraint",
    "XoneConstraint",
    # Shape-based
    "NodeConstraint",
    "PropertyConstraint",
    "QualifiedValueShapeConstraint",
]
