"""
RDF Term Model.

Terms are the values flowing through validation: focus nodes, value nodes,
shape identities and report identities.

- Resource: an IRI, or a blank node minted as an anonymous identifier
- Literal: lexical value with an optional datatype or language tag
- Triple: subject-predicate-object statement over terms

Identities for anonymous constraints, results and reports come from an
injectable identity generator so tests can use deterministic ids.
"""

from __future__ import annotations

import hashlib
import re
import threading
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from itertools import count
from typing import Any, Optional, Protocol, Union

from rdf_shapes.namespaces import (
    RDF_LANG_STRING,
    XSD,
    XSD_BOOLEAN,
    XSD_DECIMAL,
    XSD_DOUBLE,
    XSD_FLOAT,
    XSD_INTEGER_TYPES,
    XSD_STRING,
)

# Prefixes marking an IRI as a blank node label
BLANK_PREFIXES = ("bnode:", "_:")


# =============================================================================
# Terms
# =============================================================================

@dataclass(frozen=True, slots=True)
class Resource:
    """
    An IRI or blank node.

    Attributes:
        iri: The IRI string (``bnode:<label>`` for blank nodes)
        is_blank: True when the resource is an anonymous, non-dereferenceable
            node. Left unset, it is inferred from a ``bnode:`` or ``_:``
            prefix; an explicit False is kept.
    """
    iri: str
    is_blank: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.is_blank is None:
            object.__setattr__(self, "is_blank", self.iri.startswith(BLANK_PREFIXES))

    def __str__(self) -> str:
        return self.iri

    @classmethod
    def blank(cls, label: Optional[str] = None) -> "Resource":
        """Create a blank node, minting a fresh label if none is given."""
        if label is None:
            label = uuid.uuid4().hex
        elif label.startswith(BLANK_PREFIXES):
            label = label.split(":", 1)[1]
        return cls(iri=f"bnode:{label}", is_blank=True)

    @property
    def label(self) -> str:
        """Blank node label, or the IRI for named resources."""
        if self.is_blank and self.iri.startswith(BLANK_PREFIXES):
            return self.iri.split(":", 1)[1]
        return self.iri

    def n3(self) -> str:
        """N-Triples / Turtle form."""
        if self.is_blank:
            return f"_:{self.label}"
        return f"<{self.iri}>"


@dataclass(frozen=True, slots=True)
class Literal:
    """
    An RDF literal.

    ``value`` is the lexical form. String-based constraints (length, pattern)
    work on it regardless of datatype. An explicit xsd:string datatype is
    dropped, so ``"a"`` and ``"a"^^xsd:string`` are the same term.
    """
    value: str
    datatype: Optional[str] = None
    language: Optional[str] = None

    def __post_init__(self) -> None:
        if self.datatype is not None and self.language is not None:
            raise ValueError("A literal cannot have both a datatype and a language tag")
        if self.datatype == XSD_STRING:
            object.__setattr__(self, "datatype", None)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def typed(cls, value: Any, datatype: str) -> "Literal":
        """Create a typed literal, stringifying ``value``."""
        if isinstance(value, bool):
            value = "true" if value else "false"
        return cls(value=str(value), datatype=datatype)

    @classmethod
    def lang(cls, value: str, language: str) -> "Literal":
        """Create a language-tagged literal."""
        return cls(value=value, language=language)

    @property
    def effective_datatype(self) -> str:
        """Datatype IRI, defaulting per RDF 1.1 for plain and tagged literals."""
        if self.language is not None:
            return RDF_LANG_STRING
        return self.datatype or XSD_STRING

    def is_well_formed(self) -> bool:
        """Check the lexical form against the datatypes we know."""
        dt = self.effective_datatype
        if dt in XSD_INTEGER_TYPES:
            return _parse_integer(self.value) is not None
        if dt == XSD_DECIMAL:
            return _parse_decimal(self.value) is not None
        if dt in (XSD_DOUBLE, XSD_FLOAT):
            return _parse_float(self.value) is not None
        if dt == XSD_BOOLEAN:
            return self.value.strip() in ("true", "false", "1", "0")
        if dt in (f"{XSD}date", f"{XSD}dateTime"):
            return _parse_temporal(self.value, dt) is not None
        return True

    def comparison_key(self) -> Optional[tuple[str, Any]]:
        """
        Return a (category, value) pair for ordering comparisons.

        Values in different categories are not comparable. None means the
        literal has no usable ordering (ill-typed or unknown datatype).
        """
        dt = self.effective_datatype
        if dt in XSD_INTEGER_TYPES:
            parsed = _parse_integer(self.value)
            return None if parsed is None else ("numeric", Decimal(parsed))
        if dt == XSD_DECIMAL:
            parsed = _parse_decimal(self.value)
            return None if parsed is None else ("numeric", parsed)
        if dt in (XSD_DOUBLE, XSD_FLOAT):
            parsed = _parse_float(self.value)
            if parsed is None or parsed != parsed:  # NaN
                return None
            return ("numeric", Decimal(repr(parsed)) if abs(parsed) != float("inf") else parsed)
        if dt in (f"{XSD}date", f"{XSD}dateTime"):
            parsed = _parse_temporal(self.value, dt)
            return None if parsed is None else (dt, parsed)
        if dt == XSD_BOOLEAN:
            v = self.value.strip()
            if v not in ("true", "false", "1", "0"):
                return None
            return ("boolean", v in ("true", "1"))
        if dt in (XSD_STRING, RDF_LANG_STRING):
            return ("string", self.value)
        return None

    def language_matches(self, language_range: str) -> bool:
        """Basic language-range matching (RFC 4647), case-insensitive."""
        if self.language is None:
            return False
        tag = self.language.lower()
        rng = language_range.lower()
        if rng == "*":
            return True
        return tag == rng or tag.startswith(rng + "-")

    def n3(self) -> str:
        """N-Triples / Turtle form."""
        escaped = (
            self.value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        if self.language is not None:
            return f'"{escaped}"@{self.language}'
        if self.datatype is not None:
            return f'"{escaped}"^^<{self.datatype}>'
        return f'"{escaped}"'


Term = Union[Resource, Literal]


@dataclass(frozen=True, slots=True)
class Triple:
    """A subject-predicate-object statement."""
    subject: Resource
    predicate: Resource
    object: Term

    def n3(self) -> str:
        return f"{self.subject.n3()} {self.predicate.n3()} {self.object.n3()} ."


def n3(term: Any) -> str:
    """Render any term, falling back to a quoted string for unknown kinds."""
    if isinstance(term, (Resource, Literal)):
        return term.n3()
    return Literal(str(term)).n3()


def as_resource(value: Union[str, Resource]) -> Resource:
    """Coerce an IRI string to a Resource."""
    if isinstance(value, Resource):
        return value
    return Resource(value)


# =============================================================================
# Lexical parsing helpers
# =============================================================================

# XSD lexical spaces; Python's int()/Decimal()/fromisoformat() accept more
_INTEGER_LEXICAL = re.compile(r"[+-]?[0-9]+")
_DECIMAL_LEXICAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_DOUBLE_LEXICAL = re.compile(
    r"(?:[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?INF|NaN)"
)
_TIMEZONE = r"(?P<tz>Z|[+-][0-9]{2}:[0-9]{2})?"
_DATE_LEXICAL = re.compile(r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})" + _TIMEZONE)
_DATETIME_LEXICAL = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})T(?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?)"
    + _TIMEZONE
)


def _parse_integer(value: str) -> Optional[int]:
    v = value.strip()
    if not _INTEGER_LEXICAL.fullmatch(v):
        return None
    return int(v)


def _parse_decimal(value: str) -> Optional[Decimal]:
    v = value.strip()
    if not _DECIMAL_LEXICAL.fullmatch(v):
        return None
    try:
        return Decimal(v)
    except InvalidOperation:
        return None


def _parse_float(value: str) -> Optional[float]:
    v = value.strip()
    if not _DOUBLE_LEXICAL.fullmatch(v):
        return None
    if v.endswith("INF"):
        return float("-inf") if v.startswith("-") else float("inf")
    if v == "NaN":
        return float("nan")
    return float(v)


def _parse_temporal(value: str, datatype: str) -> Optional[Union[date, datetime]]:
    v = value.strip()
    if datatype == f"{XSD}date":
        m = _DATE_LEXICAL.fullmatch(v)
        if not m:
            return None
        try:
            return date.fromisoformat(m.group("date"))
        except ValueError:
            return None

    m = _DATETIME_LEXICAL.fullmatch(v)
    if not m:
        return None
    date_part, time_part, tz = m.group("date"), m.group("time"), m.group("tz")
    if "." in time_part:
        # fromisoformat before 3.11 only takes 3 or 6 fractional digits
        whole, fraction = time_part.split(".")
        time_part = f"{whole}.{fraction[:6].ljust(6, '0')}"
    if tz == "Z":
        tz = "+00:00"
    try:
        return datetime.fromisoformat(f"{date_part}T{time_part}{tz or ''}")
    except ValueError:
        return None


# =============================================================================
# Identity Generation
# =============================================================================

class IdentityGenerator(Protocol):
    """Source of fresh blank identities for constraints, results and reports."""

    def __call__(self) -> Resource: ...


class UUIDIdentityGenerator:
    """Mints collision-resistant blank nodes from uuid4."""

    def __call__(self) -> Resource:
        return Resource.blank(uuid.uuid4().hex)


class SequentialIdentityGenerator:
    """
    Deterministic identities: ``<prefix>1``, ``<prefix>2``, ...

    Thread-safe, so one generator can back concurrent evaluations.
    """

    def __init__(self, prefix: str = "bnode:r") -> None:
        if not prefix.startswith(BLANK_PREFIXES):
            prefix = f"bnode:{prefix}"
        self.prefix = prefix
        self._counter = count(1)
        self._lock = threading.Lock()

    def __call__(self) -> Resource:
        with self._lock:
            n = next(self._counter)
        return Resource(f"{self.prefix}{n}", is_blank=True)


class DerivedIdentityGenerator(SequentialIdentityGenerator):
    """
    Sequential identities keyed on an anchor term.

    A fresh generator for the same anchor yields the same identities, so
    helper nodes (RDF lists, inverse paths) serialize identically every time.
    """

    def __init__(self, anchor: Union[Resource, str], tag: str = "") -> None:
        digest = hashlib.sha256(str(anchor).encode()).hexdigest()[:16]
        super().__init__(f"bnode:{digest}{tag}")


default_identity_generator: IdentityGenerator = UUIDIdentityGenerator()
