"""Value type constraints: sh:class, sh:datatype and sh:nodeKind."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    CLASS_CONSTRAINT_COMPONENT,
    DATATYPE_CONSTRAINT_COMPONENT,
    NODE_KIND_CONSTRAINT_COMPONENT,
    SH,
    SH_CLASS,
    SH_DATATYPE,
    SH_NODE_KIND,
)
from rdf_shapes.terms import (
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    as_resource,
    default_identity_generator,
)
from rdf_shapes.validation.constraints.base import Constraint


class NodeKind(Enum):
    """SHACL node kinds for sh:nodeKind constraint."""

    IRI = f"{SH}IRI"
    BLANK_NODE = f"{SH}BlankNode"
    LITERAL = f"{SH}Literal"
    BLANK_NODE_OR_IRI = f"{SH}BlankNodeOrIRI"
    BLANK_NODE_OR_LITERAL = f"{SH}BlankNodeOrLiteral"
    IRI_OR_LITERAL = f"{SH}IRIOrLiteral"

    def accepts(self, term: Term) -> bool:
        """Check whether a term has one of the kinds this value allows."""
        is_literal = isinstance(term, Literal)
        is_blank = isinstance(term, Resource) and term.is_blank
        is_iri = isinstance(term, Resource) and not term.is_blank

        if self is NodeKind.IRI:
            return is_iri
        if self is NodeKind.BLANK_NODE:
            return is_blank
        if self is NodeKind.LITERAL:
            return is_literal
        if self is NodeKind.BLANK_NODE_OR_IRI:
            return is_blank or is_iri
        if self is NodeKind.BLANK_NODE_OR_LITERAL:
            return is_blank or is_literal
        return is_iri or is_literal


class ClassConstraint(Constraint):
    """
    sh:class: value must be a SHACL instance of the class.

    Instances are looked up in the data graph through rdf:type and
    rdfs:subClassOf. Literals are never instances.
    """

    component = CLASS_CONSTRAINT_COMPONENT

    def __init__(
        self,
        cls: Union[str, Resource],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if cls is None:
            raise self._reject('given "cls" parameter is None')
        super().__init__(name, identity_generator)
        self._cls = as_resource(cls)

    @property
    def cls(self) -> Resource:
        return self._cls

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, Resource):
            types = data_graph.types_of(value_node) if data_graph is not None else set()
            if self._cls not in types:
                report.add_result(self._new_result(shape, focus_node, value_node))
        elif isinstance(value_node, Literal):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_CLASS, self._cls)
        return graph


class DatatypeConstraint(Constraint):
    """
    sh:datatype: value must be a literal of the datatype with a valid lexical form.

    Plain literals are xsd:string, language-tagged ones rdf:langString.
    """

    component = DATATYPE_CONSTRAINT_COMPONENT

    def __init__(
        self,
        datatype: Union[str, Resource],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if datatype is None:
            raise self._reject('given "datatype" parameter is None')
        super().__init__(name, identity_generator)
        self._datatype = as_resource(datatype)

    @property
    def datatype(self) -> Resource:
        return self._datatype

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, Literal):
            if value_node.effective_datatype != self._datatype.iri or not value_node.is_well_formed():
                report.add_result(self._new_result(shape, focus_node, value_node))
        elif isinstance(value_node, Resource):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_DATATYPE, self._datatype)
        return graph


class NodeKindConstraint(Constraint):
    """sh:nodeKind: value must be of the given node kind."""

    component = NODE_KIND_CONSTRAINT_COMPONENT

    def __init__(
        self,
        node_kind: Union[NodeKind, str],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if node_kind is None:
            raise self._reject('given "node_kind" parameter is None')
        if not isinstance(node_kind, NodeKind):
            try:
                node_kind = NodeKind(str(node_kind))
            except ValueError as e:
                raise self._reject(f"unknown node kind {node_kind}") from e
        super().__init__(name, identity_generator)
        self._node_kind = node_kind

    @property
    def node_kind(self) -> NodeKind:
        return self._node_kind

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, (Resource, Literal)) and not self._node_kind.accepts(value_node):
            report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_NODE_KIND, Resource(self._node_kind.value))
        return graph
