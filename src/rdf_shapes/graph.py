"""
In-memory triple graph.

A small set-of-triples container with wildcard pattern lookup. It is the data
graph handed to constraints and the target of ``to_graph`` serialization.
Not a store: no indexes beyond a subject map, no persistence.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Union

import polars as pl

from rdf_shapes.namespaces import (
    RDF_FIRST,
    RDF_NIL,
    RDF_REST,
    RDF_TYPE,
    RDFS_SUBCLASS_OF,
)
from rdf_shapes.terms import (
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    Triple,
    default_identity_generator,
)

RDF_TYPE_RES = Resource(RDF_TYPE)
RDF_FIRST_RES = Resource(RDF_FIRST)
RDF_REST_RES = Resource(RDF_REST)
RDF_NIL_RES = Resource(RDF_NIL)
RDFS_SUBCLASS_OF_RES = Resource(RDFS_SUBCLASS_OF)


class Graph:
    """An insertion-ordered set of triples."""

    def __init__(
        self,
        triples: Optional[Iterable[Triple]] = None,
        identity: Optional[Resource] = None,
    ) -> None:
        self.identity = identity or default_identity_generator()
        # dict keeps insertion order and gives set semantics
        self._triples: dict[Triple, None] = {}
        self._by_subject: dict[Resource, list[Triple]] = {}
        if triples:
            self.update(triples)

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(list(self._triples))

    def __contains__(self, triple: object) -> bool:
        return triple in self._triples

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return set(self._triples) == set(other._triples)

    def __repr__(self) -> str:
        return f"Graph(identity={self.identity.n3()}, triples={len(self)})"

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_triple(self, triple: Triple) -> "Graph":
        """Add a triple; duplicates are ignored."""
        if triple not in self._triples:
            self._triples[triple] = None
            self._by_subject.setdefault(triple.subject, []).append(triple)
        return self

    def add(
        self,
        subject: Union[str, Resource],
        predicate: Union[str, Resource],
        obj: Union[Term, str],
    ) -> "Graph":
        """Add a triple from terms or IRI strings."""
        if isinstance(subject, str):
            subject = Resource(subject)
        if isinstance(predicate, str):
            predicate = Resource(predicate)
        if isinstance(obj, str):
            obj = Resource(obj)
        return self.add_triple(Triple(subject, predicate, obj))

    def update(self, triples: Iterable[Triple]) -> "Graph":
        """Add many triples."""
        for triple in triples:
            self.add_triple(triple)
        return self

    def merge(self, other: "Graph") -> "Graph":
        """Add all triples of another graph to this one."""
        return self.update(other)

    def add_collection(
        self,
        items: Sequence[Term],
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> Resource:
        """
        Encode items as an RDF list and return its head.

        An empty sequence is ``rdf:nil``.
        """
        if not items:
            return RDF_NIL_RES
        nodes = [identity_generator() for _ in items]
        for i, (node, item) in enumerate(zip(nodes, items)):
            self.add_triple(Triple(node, RDF_FIRST_RES, item))
            rest = nodes[i + 1] if i + 1 < len(nodes) else RDF_NIL_RES
            self.add_triple(Triple(node, RDF_REST_RES, rest))
        return nodes[0]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def triples(
        self,
        subject: Optional[Resource] = None,
        predicate: Optional[Resource] = None,
        obj: Optional[Term] = None,
    ) -> Iterator[Triple]:
        """Yield triples matching a pattern; None is a wildcard."""
        if subject is not None:
            candidates: Iterable[Triple] = self._by_subject.get(subject, [])
        else:
            candidates = self._triples
        for triple in candidates:
            if predicate is not None and triple.predicate != predicate:
                continue
            if obj is not None and triple.object != obj:
                continue
            yield triple

    def objects(self, subject: Resource, predicate: Resource) -> list[Term]:
        """Objects of (subject, predicate, ?)."""
        return [t.object for t in self.triples(subject, predicate)]

    def subjects(self, predicate: Resource, obj: Term) -> list[Resource]:
        """Subjects of (?, predicate, obj)."""
        return [t.subject for t in self.triples(None, predicate, obj)]

    def predicates(self, subject: Resource) -> list[Resource]:
        """Distinct predicates used by a subject, in first-seen order."""
        seen: dict[Resource, None] = {}
        for triple in self.triples(subject):
            seen.setdefault(triple.predicate, None)
        return list(seen)

    def value(self, subject: Resource, predicate: Resource) -> Optional[Term]:
        """First object of (subject, predicate, ?), or None."""
        for triple in self.triples(subject, predicate):
            return triple.object
        return None

    def superclasses(self, cls: Resource) -> set[Resource]:
        """The class and its transitive rdfs:subClassOf ancestors."""
        result = {cls}
        pending = [cls]
        while pending:
            current = pending.pop()
            for parent in self.objects(current, RDFS_SUBCLASS_OF_RES):
                if isinstance(parent, Resource) and parent not in result:
                    result.add(parent)
                    pending.append(parent)
        return result

    def types_of(self, node: Resource) -> set[Resource]:
        """rdf:type values of a node, closed over rdfs:subClassOf."""
        types: set[Resource] = set()
        for t in self.objects(node, RDF_TYPE_RES):
            if isinstance(t, Resource):
                types |= self.superclasses(t)
        return types

    def instances_of(self, cls: Resource) -> list[Resource]:
        """Nodes typed with ``cls`` or one of its subclasses."""
        found: dict[Resource, None] = {}
        for triple in self.triples(None, RDF_TYPE_RES):
            t = triple.object
            if isinstance(t, Resource) and cls in self.superclasses(t):
                found.setdefault(triple.subject, None)
        return list(found)

    def collection(self, head: Resource) -> list[Term]:
        """Decode an RDF list starting at ``head``."""
        items: list[Term] = []
        seen: set[Resource] = set()
        current: Optional[Term] = head
        while isinstance(current, Resource) and current != RDF_NIL_RES:
            if current in seen:
                break
            seen.add(current)
            first = self.value(current, RDF_FIRST_RES)
            if first is not None:
                items.append(first)
            current = self.value(current, RDF_REST_RES)
        return items

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_ntriples(self) -> str:
        """Serialize as N-Triples, one statement per line."""
        return "\n".join(t.n3() for t in self._triples)

    def to_dataframe(self) -> pl.DataFrame:
        """Columnar view of the graph."""
        rows = {
            "subject": [],
            "predicate": [],
            "object": [],
            "object_kind": [],
            "datatype": [],
            "language": [],
        }
        for t in self._triples:
            rows["subject"].append(str(t.subject))
            rows["predicate"].append(str(t.predicate))
            rows["object"].append(str(t.object))
            if isinstance(t.object, Literal):
                rows["object_kind"].append("literal")
                rows["datatype"].append(t.object.effective_datatype)
                rows["language"].append(t.object.language)
            else:
                rows["object_kind"].append("bnode" if t.object.is_blank else "iri")
                rows["datatype"].append(None)
                rows["language"].append(None)
        return pl.DataFrame(rows, schema={
            "subject": pl.Utf8,
            "predicate": pl.Utf8,
            "object": pl.Utf8,
            "object_kind": pl.Utf8,
            "datatype": pl.Utf8,
            "language": pl.Utf8,
        })
