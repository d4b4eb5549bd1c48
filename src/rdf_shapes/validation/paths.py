"""
Property paths.

Only the two single-step forms are supported: a predicate, and
``sh:inversePath`` over a predicate. Sequence, alternative and repetition
paths belong to the pattern-matching layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import SH_INVERSE_PATH
from rdf_shapes.terms import (
    IdentityGenerator,
    Resource,
    Term,
    as_resource,
    default_identity_generator,
)


@dataclass(frozen=True)
class PropertyPath:
    """A predicate path, optionally inverted."""

    predicate: Resource
    inverse: bool = False

    @classmethod
    def of(cls, predicate: Union[str, Resource, "PropertyPath"], inverse: bool = False) -> "PropertyPath":
        if isinstance(predicate, PropertyPath):
            return predicate
        return cls(as_resource(predicate), inverse)

    def __str__(self) -> str:
        return f"^{self.predicate}" if self.inverse else str(self.predicate)

    def n3(self) -> str:
        if self.inverse:
            return f"[ sh:inversePath {self.predicate.n3()} ]"
        return self.predicate.n3()

    def resolve(self, graph: Graph, node: Term) -> list[Term]:
        """Value nodes reached from ``node``, de-duplicated in first-seen order."""
        if self.inverse:
            values: list[Term] = list(graph.subjects(self.predicate, node))
        elif isinstance(node, Resource):
            values = graph.objects(node, self.predicate)
        else:
            values = []
        return list(dict.fromkeys(values))

    def to_graph_node(
        self,
        graph: Graph,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> Resource:
        """
        The term standing for this path, adding helper triples if needed.

        Inverse paths need a helper node, minted from ``identity_generator``.
        """
        if not self.inverse:
            return self.predicate
        node = identity_generator()
        graph.add(node, SH_INVERSE_PATH, self.predicate)
        return node
