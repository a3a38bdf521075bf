from frontlens.dom import Document, Element, Event, SoupElement
from frontlens.errors import AmbiguousMatchError, NoMatchError, QueryError
from frontlens.labels import resolve_label
from frontlens.matchers import (
    And,
    HasLabel,
    HasPlaceholder,
    HasRole,
    HasText,
    IsHidden,
    Matcher,
    Not,
    Or,
    SupportsMatch,
)
from frontlens.roles import resolve_role

__all__ = [
    "Document",
    "Element",
    "Event",
    "SoupElement",
    # Matchers
    "And",
    "HasLabel",
    "HasPlaceholder",
    "HasRole",
    "HasText",
    "IsHidden",
    "Matcher",
    "Not",
    "Or",
    "SupportsMatch",
    "resolve_label",
    "resolve_role",
    # Errors
    "AmbiguousMatchError",
    "NoMatchError",
    "QueryError",
]
