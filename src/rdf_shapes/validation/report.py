"""
SHACL validation results and reports.

A report is an identity plus an append-only, ordered list of results. An
empty report means every evaluated constraint was satisfied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Optional

import polars as pl

from rdf_shapes.graph import RDF_TYPE_RES, Graph
from rdf_shapes.namespaces import (
    SH,
    SH_CONFORMS,
    SH_FOCUS_NODE,
    SH_RESULT,
    SH_RESULT_MESSAGE,
    SH_RESULT_PATH,
    SH_RESULT_SEVERITY,
    SH_SOURCE_CONSTRAINT_COMPONENT,
    SH_SOURCE_SHAPE,
    SH_VALIDATION_REPORT,
    SH_VALIDATION_RESULT,
    SH_VALUE,
    XSD_BOOLEAN,
)
from rdf_shapes.terms import (
    DerivedIdentityGenerator,
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    default_identity_generator,
    n3,
)

if TYPE_CHECKING:
    from rdf_shapes.validation.paths import PropertyPath


class Severity(Enum):
    """SHACL validation severity levels."""

    VIOLATION = f"{SH}Violation"
    WARNING = f"{SH}Warning"
    INFO = f"{SH}Info"

    @property
    def resource(self) -> Resource:
        return Resource(self.value)


@dataclass(frozen=True)
class ValidationResult:
    """A single validation result."""

    source_shape: Resource
    source_constraint_component: str
    focus_node: Term
    result_path: Optional["PropertyPath"]
    value: Optional[Term]
    messages: tuple[Literal, ...] = ()
    identity: Resource = field(default_factory=default_identity_generator)
    severity: Severity = Severity.VIOLATION

    @property
    def message(self) -> str:
        """First configured message, or an empty string."""
        return self.messages[0].value if self.messages else ""

    def content(self) -> tuple:
        """Every field except the identity, for comparing results."""
        return (
            self.source_shape,
            self.source_constraint_component,
            self.focus_node,
            self.result_path,
            self.value,
            self.messages,
            self.severity,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": str(self.identity),
            "focusNode": str(self.focus_node),
            "resultPath": str(self.result_path) if self.result_path is not None else None,
            "value": str(self.value) if self.value is not None else None,
            "sourceShape": str(self.source_shape),
            "sourceConstraintComponent": self.source_constraint_component,
            "resultMessage": [m.value for m in self.messages],
            "resultSeverity": self.severity.value,
        }

    def to_graph(self, graph: Optional[Graph] = None) -> Graph:
        """Emit this result's triples, anchored on its identity."""
        graph = graph if graph is not None else Graph()
        node = self.identity
        graph.add(node, RDF_TYPE_RES, Resource(SH_VALIDATION_RESULT))
        graph.add(node, SH_SOURCE_SHAPE, self.source_shape)
        graph.add(node, SH_SOURCE_CONSTRAINT_COMPONENT, Resource(self.source_constraint_component))
        graph.add(node, SH_FOCUS_NODE, self.focus_node)
        if self.result_path is not None:
            path_node = self.result_path.to_graph_node(graph, DerivedIdentityGenerator(node, "p"))
            graph.add(node, SH_RESULT_PATH, path_node)
        if self.value is not None:
            graph.add(node, SH_VALUE, self.value)
        for message in self.messages:
            graph.add(node, SH_RESULT_MESSAGE, message)
        graph.add(node, SH_RESULT_SEVERITY, self.severity.resource)
        return graph


class ValidationReport:
    """SHACL validation report."""

    def __init__(
        self,
        identity: Optional[Resource] = None,
        results: Optional[list[ValidationResult]] = None,
    ) -> None:
        self.identity = identity or default_identity_generator()
        self._results: list[ValidationResult] = list(results or [])

    @classmethod
    def new(cls, identity_generator: IdentityGenerator = default_identity_generator) -> "ValidationReport":
        """Create an empty report with a fresh identity."""
        return cls(identity=identity_generator())

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ValidationResult]:
        return iter(self._results)

    def __repr__(self) -> str:
        return f"ValidationReport(identity={self.identity.n3()}, results={len(self)})"

    @property
    def results(self) -> tuple[ValidationResult, ...]:
        """Results in the order they were added."""
        return tuple(self._results)

    @property
    def conforms(self) -> bool:
        """True when no result has been recorded."""
        return not self._results

    def add_result(self, result: ValidationResult) -> None:
        """Add a validation result."""
        self._results.append(result)

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        """Append another report's results, keeping their order."""
        self._results.extend(other._results)
        return self

    def violations(self) -> list[ValidationResult]:
        """Get all violations."""
        return [r for r in self._results if r.severity == Severity.VIOLATION]

    def warnings(self) -> list[ValidationResult]:
        """Get all warnings."""
        return [r for r in self._results if r.severity == Severity.WARNING]

    def infos(self) -> list[ValidationResult]:
        """Get all info messages."""
        return [r for r in self._results if r.severity == Severity.INFO]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": str(self.identity),
            "conforms": self.conforms,
            "results": [r.to_dict() for r in self._results],
            "violationCount": len(self.violations()),
            "warningCount": len(self.warnings()),
            "infoCount": len(self.infos()),
        }

    def to_graph(self) -> Graph:
        """Convert to an RDF graph anchored on the report identity."""
        graph = Graph(identity=self.identity)
        graph.add(self.identity, RDF_TYPE_RES, Resource(SH_VALIDATION_REPORT))
        graph.add(self.identity, SH_CONFORMS, Literal.typed(self.conforms, XSD_BOOLEAN))
        for result in self._results:
            graph.add(self.identity, SH_RESULT, result.identity)
            result.to_graph(graph)
        return graph

    def to_rdf(self) -> str:
        """Convert to RDF Turtle representation."""
        lines = [
            "@prefix sh: <http://www.w3.org/ns/shacl#> .",
            "",
            f"{self.identity.n3()} a sh:ValidationReport ;",
            f"    sh:conforms {'true' if self.conforms else 'false'} ;",
        ]

        if self._results:
            result_lines = [self._result_to_turtle(r) for r in self._results]
            lines.append("    sh:result " + ", ".join(result_lines) + " .")
        else:
            # Remove trailing semicolon
            lines[-1] = lines[-1].rstrip(" ;") + " ."

        return "\n".join(lines)

    def _result_to_turtle(self, result: ValidationResult) -> str:
        """Convert a single result to Turtle."""
        parts = ["[", "        a sh:ValidationResult"]
        parts.append(f"        sh:focusNode {n3(result.focus_node)}")

        if result.result_path is not None:
            parts.append(f"        sh:resultPath {result.result_path.n3()}")

        if result.value is not None:
            parts.append(f"        sh:value {n3(result.value)}")

        parts.append(f"        sh:sourceShape {result.source_shape.n3()}")
        parts.append(f"        sh:sourceConstraintComponent <{result.source_constraint_component}>")
        for message in result.messages:
            parts.append(f"        sh:resultMessage {message.n3()}")
        parts.append(f"        sh:resultSeverity <{result.severity.value}>")
        parts.append("    ]")

        return parts[0] + "\n" + " ;\n".join(parts[1:-1]) + "\n    ]"

    def to_dataframe(self) -> pl.DataFrame:
        """One row per result, for tabular inspection and aggregation."""
        records = [
            {
                "focus_node": str(r.focus_node),
                "result_path": str(r.result_path) if r.result_path is not None else None,
                "value": str(r.value) if r.value is not None else None,
                "source_shape": str(r.source_shape),
                "source_constraint_component": r.source_constraint_component,
                "severity": r.severity.name,
                "message": r.message or None,
            }
            for r in self._results
        ]
        return pl.DataFrame(records, schema={
            "focus_node": pl.Utf8,
            "result_path": pl.Utf8,
            "value": pl.Utf8,
            "source_shape": pl.Utf8,
            "source_constraint_component": pl.Utf8,
            "severity": pl.Utf8,
            "message": pl.Utf8,
        })
