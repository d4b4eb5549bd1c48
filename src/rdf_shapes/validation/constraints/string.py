"""
String-based constraints: sh:minLength, sh:maxLength, sh:pattern,
sh:languageIn and sh:uniqueLang.

Lengths are counted in Unicode code points. Blank nodes have no lexical form
to measure or match, so they always violate the length and pattern rules.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Union

from rdf_shapes.graph import Graph
from rdf_shapes.namespaces import (
    LANGUAGE_IN_CONSTRAINT_COMPONENT,
    MAX_LENGTH_CONSTRAINT_COMPONENT,
    MIN_LENGTH_CONSTRAINT_COMPONENT,
    PATTERN_CONSTRAINT_COMPONENT,
    SH_FLAGS,
    SH_LANGUAGE_IN,
    SH_MAX_LENGTH,
    SH_MIN_LENGTH,
    SH_PATTERN,
    SH_UNIQUE_LANG,
    UNIQUE_LANG_CONSTRAINT_COMPONENT,
    XSD_BOOLEAN,
    XSD_INTEGER,
    XSD_STRING,
)
from rdf_shapes.terms import (
    IdentityGenerator,
    Literal,
    Resource,
    Term,
    default_identity_generator,
)
from rdf_shapes.validation.constraints.base import Constraint
from rdf_shapes.validation.report import ValidationReport

if TYPE_CHECKING:
    from rdf_shapes.validation.shapes import Shape, ShapesGraph


# SHACL flag letter -> Python re flag, in serialization order.
# "x" has no flag: its whitespace removal is applied to the source.
REGEX_FLAGS: tuple[tuple[str, re.RegexFlag], ...] = (
    ("i", re.IGNORECASE),
    ("s", re.DOTALL),
    ("m", re.MULTILINE),
    ("x", re.RegexFlag(0)),
)

_FLAG_ORDER = "".join(letter for letter, _ in REGEX_FLAGS)


def flags_to_regex(flags: Optional[str]) -> re.RegexFlag:
    """
    Map a SHACL/XPath flag string to Python re flags.

    Raises:
        ValueError: for letters with no ``re`` equivalent (including ``q``)
    """
    result = re.RegexFlag(0)
    mapping = dict(REGEX_FLAGS)
    for letter in flags or "":
        if letter not in mapping:
            raise ValueError(f"unsupported regex flag {letter!r}")
        result |= mapping[letter]
    return result


def regex_to_flags(regex: re.Pattern) -> str:
    """Build the SHACL flag string of a compiled pattern (order: i, s, m, x)."""
    letters = {letter for letter, flag in REGEX_FLAGS if flag and regex.flags & flag}
    if regex.flags & re.VERBOSE:
        letters.add("x")
    return "".join(letter for letter in _FLAG_ORDER if letter in letters)


def strip_whitespace(source: str) -> str:
    """
    Apply the XPath ``x`` flag: drop whitespace outside character classes.

    Escaped characters are copied as they are. Unlike ``re.VERBOSE``, ``#``
    stays an ordinary character.
    """
    out = []
    in_class = False
    i = 0
    while i < len(source):
        c = source[i]
        if c == "\\" and i + 1 < len(source):
            out.append(source[i:i + 2])
            i += 2
            continue
        if in_class:
            if c == "]":
                in_class = False
        elif c == "[":
            in_class = True
        elif c in " \t\n\r":
            i += 1
            continue
        out.append(c)
        i += 1
    return "".join(out)


class MinLengthConstraint(Constraint):
    """sh:minLength: lexical form must have at least ``min_length`` characters."""

    component = MIN_LENGTH_CONSTRAINT_COMPONENT

    def __init__(
        self,
        min_length: int,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        bound = self._count_bound(min_length, "min_length")
        super().__init__(name, identity_generator)
        self._min_length = bound

    @property
    def min_length(self) -> int:
        return self._min_length

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, Resource):
            if value_node.is_blank or len(str(value_node)) < self._min_length:
                report.add_result(self._new_result(shape, focus_node, value_node))
        elif isinstance(value_node, Literal):
            if len(value_node.value) < self._min_length:
                report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_MIN_LENGTH, Literal.typed(self._min_length, XSD_INTEGER))
        return graph


class MaxLengthConstraint(Constraint):
    """
    sh:maxLength: lexical form must have at most ``max_length`` characters.

    Negative bounds are clamped to zero.
    """

    component = MAX_LENGTH_CONSTRAINT_COMPONENT

    def __init__(
        self,
        max_length: int,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        bound = self._count_bound(max_length, "max_length")
        super().__init__(name, identity_generator)
        self._max_length = bound

    @property
    def max_length(self) -> int:
        return self._max_length

    def evaluate(
        self,
        shapes_graph: Optional["ShapesGraph"],
        shape: "Shape",
        data_graph: Optional[Graph],
        focus_node: Term,
        value_node: Optional[Term],
        all_value_nodes: Sequence[Term],
    ) -> ValidationReport:
        report = self._new_report()
        if isinstance(value_node, Resource):
            if value_node.is_blank or len(str(value_node)) > self._max_length:
                report.add_result(self._new_result(shape, focus_node, value_node))
        elif isinstance(value_node, Literal):
            if len(value_node.value) > self._max_length:
                report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape: Optional["Shape"]) -> Graph:
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_MAX_LENGTH, Literal.typed(self._max_length, XSD_INTEGER))
        return graph


class PatternConstraint(Constraint):
    """
    sh:pattern: string form must match a regular expression.

    Accepts a compiled ``re.Pattern`` (its flags are kept) or a source
    string plus a SHACL flag string. Matching is unanchored, like
    ``fn:matches``. With ``x`` the source is compiled through
    ``strip_whitespace``.
    """

    component = PATTERN_CONSTRAINT_COMPONENT

    def __init__(
        self,
        pattern: Optional[Union[str, re.Pattern]],
        flags: Optional[str] = None,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if pattern is None:
            raise self._reject('given "pattern" parameter is None')

        try:
            extra_flags = flags_to_regex(flags)
        except ValueError as e:
            raise self._reject(str(e)) from e

        extended = "x" in (flags or "")
        if isinstance(pattern, re.Pattern):
            if not isinstance(pattern.pattern, str):
                raise self._reject("bytes patterns are not supported")
            source = pattern.pattern
            letters = (flags or "") + regex_to_flags(pattern)
            regex = self._compile(source, pattern.flags | extra_flags, extended) if flags else pattern
        else:
            source = pattern
            letters = flags or ""
            regex = self._compile(source, extra_flags, extended)

        super().__init__(name, identity_generator)
        self._regex = regex
        self._source = source
        self._flags = "".join(letter for letter in _FLAG_ORDER if letter in letters)

    def _compile(self, source: str, flags: re.RegexFlag, extended: bool) -> re.Pattern:
        try:
            return re.compile(strip_whitespace(source) if extended else source, flags)
        except re.error as e:
            raise self._reject(f"invalid regular expression {source!r}: {e}") from e

    @property
    def regex(self) -> re.Pattern:
        return self._regex

    @property
    def pattern(self) -> str:
        """Regular expression source as given, before any ``x`` stripping."""
        return self._source

    @property
    def flags(self) -> str:
        return self._flags

    def evaluate(
        self,
        shapes_graph: Optional["ShapesGraph"],
        shape: "Shape",
        data_graph: Optional[Graph],
        focus_node: Term,
        value_node: Optional[Term],
        all_value_nodes: Sequence[Term],
    ) -> ValidationReport:
        report = self._new_report()
        if isinstance(value_node, Resource):
            if value_node.is_blank or not self._regex.search(str(value_node)):
                report.add_result(self._new_result(shape, focus_node, value_node))
        elif isinstance(value_node, Literal):
            if not self._regex.search(value_node.value):
                report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape: Optional["Shape"]) -> Graph:
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_PATTERN, Literal.typed(self.pattern, XSD_STRING))
            flags = self.flags
            if flags:
                graph.add(shape.identity, SH_FLAGS, Literal.typed(flags, XSD_STRING))
        return graph


class LanguageInConstraint(Constraint):
    """sh:languageIn: value must be a literal tagged with one of the languages."""

    component = LANGUAGE_IN_CONSTRAINT_COMPONENT

    def __init__(
        self,
        languages: Iterable[str],
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        if languages is None:
            raise self._reject('given "languages" parameter is None')
        languages = list(languages)
        for lang in languages:
            if not isinstance(lang, str):
                raise self._reject(f"language tags must be strings, got {lang!r}")
        super().__init__(name, identity_generator)
        # Order kept for serialization; duplicates dropped
        self._languages = tuple(dict.fromkeys(lang.strip() for lang in languages if lang.strip()))

    @property
    def languages(self) -> tuple[str, ...]:
        return self._languages

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if isinstance(value_node, (Resource, Literal)):
            matched = isinstance(value_node, Literal) and any(
                value_node.language_matches(lang) for lang in self._languages
            )
            if not matched:
                report.add_result(self._new_result(shape, focus_node, value_node))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            head = graph.add_collection(
                [Literal.typed(lang, XSD_STRING) for lang in self._languages],
                self._list_identities(),
            )
            graph.add(shape.identity, SH_LANGUAGE_IN, head)
        return graph


class UniqueLangConstraint(Constraint):
    """
    sh:uniqueLang: no two value nodes may share a language tag.

    Set-level: one result per duplicated tag, without a value node.
    """

    component = UNIQUE_LANG_CONSTRAINT_COMPONENT
    per_value_node = False

    def __init__(
        self,
        unique_lang: bool = True,
        name: Optional[Union[str, Resource]] = None,
        identity_generator: IdentityGenerator = default_identity_generator,
    ) -> None:
        super().__init__(name, identity_generator)
        self._unique_lang = bool(unique_lang)

    @property
    def unique_lang(self) -> bool:
        return self._unique_lang

    def evaluate(self, shapes_graph, shape, data_graph, focus_node, value_node, all_value_nodes):
        report = self._new_report()
        if not self._unique_lang:
            return report

        counts: dict[str, int] = {}
        for node in all_value_nodes:
            if isinstance(node, Literal) and node.language:
                tag = node.language.lower()
                counts[tag] = counts.get(tag, 0) + 1

        for tag, n in counts.items():
            if n > 1:
                report.add_result(self._new_result(shape, focus_node, None))
        return report

    def to_graph(self, shape):
        graph = Graph()
        if shape is not None:
            graph.add(shape.identity, SH_UNIQUE_LANG, Literal.typed(self._unique_lang, XSD_BOOLEAN))
        return graph
