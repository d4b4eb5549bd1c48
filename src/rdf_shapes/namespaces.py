"""
Fixed vocabulary for rdf-shapes.

Namespace strings and the SHACL IRIs used by constraints, reports and
serialization. Constraint-component identifiers are stable: downstream
tooling branches on them.
"""

from __future__ import annotations

# Namespaces
SH = "http://www.w3.org/ns/shacl#"
XSD = "http://www.w3.org/2001/XMLSchema#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"


# =============================================================================
# RDF / RDFS terms
# =============================================================================

RDF_TYPE = f"{RDF}type"
RDF_FIRST = f"{RDF}first"
RDF_REST = f"{RDF}rest"
RDF_NIL = f"{RDF}nil"
RDF_LANG_STRING = f"{RDF}langString"
RDFS_CLASS = f"{RDFS}Class"
RDFS_SUBCLASS_OF = f"{RDFS}subClassOf"


# =============================================================================
# XSD datatypes
# =============================================================================

XSD_STRING = f"{XSD}string"
XSD_BOOLEAN = f"{XSD}boolean"
XSD_INTEGER = f"{XSD}integer"
XSD_DECIMAL = f"{XSD}decimal"
XSD_DOUBLE = f"{XSD}double"
XSD_FLOAT = f"{XSD}float"

# Datatypes whose lexical space is checked by sh:datatype
XSD_INTEGER_TYPES = frozenset({
    XSD_INTEGER,
    f"{XSD}int",
    f"{XSD}long",
    f"{XSD}short",
    f"{XSD}byte",
    f"{XSD}nonNegativeInteger",
    f"{XSD}positiveInteger",
    f"{XSD}nonPositiveInteger",
    f"{XSD}negativeInteger",
    f"{XSD}unsignedInt",
    f"{XSD}unsignedLong",
    f"{XSD}unsignedShort",
    f"{XSD}unsignedByte",
})
XSD_NUMERIC_TYPES = XSD_INTEGER_TYPES | {XSD_DECIMAL, XSD_DOUBLE, XSD_FLOAT}


# =============================================================================
# SHACL classes and shape predicates
# =============================================================================

SH_NODE_SHAPE = f"{SH}NodeShape"
SH_PROPERTY_SHAPE = f"{SH}PropertyShape"
SH_VALIDATION_REPORT = f"{SH}ValidationReport"
SH_VALIDATION_RESULT = f"{SH}ValidationResult"

SH_PATH = f"{SH}path"
SH_INVERSE_PATH = f"{SH}inversePath"
SH_SEVERITY = f"{SH}severity"
SH_MESSAGE = f"{SH}message"
SH_NAME = f"{SH}name"
SH_DESCRIPTION = f"{SH}description"
SH_DEACTIVATED = f"{SH}deactivated"
SH_TARGET_CLASS = f"{SH}targetClass"
SH_TARGET_NODE = f"{SH}targetNode"
SH_TARGET_SUBJECTS_OF = f"{SH}targetSubjectsOf"
SH_TARGET_OBJECTS_OF = f"{SH}targetObjectsOf"

# Report vocabulary
SH_CONFORMS = f"{SH}conforms"
SH_RESULT = f"{SH}result"
SH_FOCUS_NODE = f"{SH}focusNode"
SH_RESULT_PATH = f"{SH}resultPath"
SH_VALUE = f"{SH}value"
SH_SOURCE_SHAPE = f"{SH}sourceShape"
SH_SOURCE_CONSTRAINT_COMPONENT = f"{SH}sourceConstraintComponent"
SH_RESULT_MESSAGE = f"{SH}resultMessage"
SH_RESULT_SEVERITY = f"{SH}resultSeverity"


# =============================================================================
# Constraint parameters
# =============================================================================

SH_MIN_COUNT = f"{SH}minCount"
SH_MAX_COUNT = f"{SH}maxCount"
SH_CLASS = f"{SH}class"
SH_DATATYPE = f"{SH}datatype"
SH_NODE_KIND = f"{SH}nodeKind"
SH_MIN_EXCLUSIVE = f"{SH}minExclusive"
SH_MIN_INCLUSIVE = f"{SH}minInclusive"
SH_MAX_EXCLUSIVE = f"{SH}maxExclusive"
SH_MAX_INCLUSIVE = f"{SH}maxInclusive"
SH_MIN_LENGTH = f"{SH}minLength"
SH_MAX_LENGTH = f"{SH}maxLength"
SH_PATTERN = f"{SH}pattern"
SH_FLAGS = f"{SH}flags"
SH_LANGUAGE_IN = f"{SH}languageIn"
SH_UNIQUE_LANG = f"{SH}uniqueLang"
SH_EQUALS = f"{SH}equals"
SH_DISJOINT = f"{SH}disjoint"
SH_LESS_THAN = f"{SH}lessThan"
SH_LESS_THAN_OR_EQUALS = f"{SH}lessThanOrEquals"
SH_NOT = f"{SH}not"
SH_AND = f"{SH}and"
SH_OR = f"{SH}or"
SH_XONE = f"{SH}xone"
SH_NODE = f"{SH}node"
SH_PROPERTY = f"{SH}property"
SH_QUALIFIED_VALUE_SHAPE = f"{SH}qualifiedValueShape"
SH_QUALIFIED_MIN_COUNT = f"{SH}qualifiedMinCount"
SH_QUALIFIED_MAX_COUNT = f"{SH}qualifiedMaxCount"
SH_QUALIFIED_VALUE_SHAPES_DISJOINT = f"{SH}qualifiedValueShapesDisjoint"
SH_CLOSED = f"{SH}closed"
SH_IGNORED_PROPERTIES = f"{SH}ignoredProperties"
SH_HAS_VALUE = f"{SH}hasValue"
SH_IN = f"{SH}in"


# =============================================================================
# Constraint components
# =============================================================================

def constraint_component(local_name: str) -> str:
    """Build the component IRI for a rule kind, e.g. ``MaxLength``."""
    return f"{SH}{local_name}ConstraintComponent"


MIN_COUNT_CONSTRAINT_COMPONENT = constraint_component("MinCount")
MAX_COUNT_CONSTRAINT_COMPONENT = constraint_component("MaxCount")
CLASS_CONSTRAINT_COMPONENT = constraint_component("Class")
DATATYPE_CONSTRAINT_COMPONENT = constraint_component("Datatype")
NODE_KIND_CONSTRAINT_COMPONENT = constraint_component("NodeKind")
MIN_EXCLUSIVE_CONSTRAINT_COMPONENT = constraint_component("MinExclusive")
MIN_INCLUSIVE_CONSTRAINT_COMPONENT = constraint_component("MinInclusive")
MAX_EXCLUSIVE_CONSTRAINT_COMPONENT = constraint_component("MaxExclusive")
MAX_INCLUSIVE_CONSTRAINT_COMPONENT = constraint_component("MaxInclusive")
MIN_LENGTH_CONSTRAINT_COMPONENT = constraint_component("MinLength")
MAX_LENGTH_CONSTRAINT_COMPONENT = constraint_component("MaxLength")
PATTERN_CONSTRAINT_COMPONENT = constraint_component("Pattern")
LANGUAGE_IN_CONSTRAINT_COMPONENT = constraint_component("LanguageIn")
UNIQUE_LANG_CONSTRAINT_COMPONENT = constraint_component("UniqueLang")
EQUALS_CONSTRAINT_COMPONENT = constraint_component("Equals")
DISJOINT_CONSTRAINT_COMPONENT = constraint_component("Disjoint")
LESS_THAN_CONSTRAINT_COMPONENT = constraint_component("LessThan")
LESS_THAN_OR_EQUALS_CONSTRAINT_COMPONENT = constraint_component("LessThanOrEquals")
NOT_CONSTRAINT_COMPONENT = constraint_component("Not")
AND_CONSTRAINT_COMPONENT = constraint_component("And")
OR_CONSTRAINT_COMPONENT = constraint_component("Or")
XONE_CONSTRAINT_COMPONENT = constraint_component("Xone")
NODE_CONSTRAINT_COMPONENT = constraint_component("Node")
PROPERTY_CONSTRAINT_COMPONENT = constraint_component("Property")
QUALIFIED_MIN_COUNT_CONSTRAINT_COMPONENT = constraint_component("QualifiedMinCount")
QUALIFIED_MAX_COUNT_CONSTRAINT_COMPONENT = constraint_component("QualifiedMaxCount")
CLOSED_CONSTRAINT_COMPONENT = constraint_component("Closed")
HAS_VALUE_CONSTRAINT_COMPONENT = constraint_component("HasValue")
IN_CONSTRAINT_COMPONENT = constraint_component("In")
