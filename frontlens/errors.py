"""Failures raised by strict single-match queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from frontlens.dom.base import Element


class QueryError(LookupError):
    """A strict query did not resolve to exactly one element."""

    def __init__(self, message: str, matcher: Any) -> None:
        super().__init__(message)
        self.matcher = matcher


class NoMatchError(QueryError):
    def __init__(self, matcher: Any) -> None:
        super().__init__(f"no element matched {matcher!r}", matcher)


class AmbiguousMatchError(QueryError):
    """More than one element matched; the caller has to narrow the matcher."""

    def __init__(self, matcher: Any, matches: list[Element]) -> None:
        super().__init__(f"ambiguous: {len(matches)} elements matched {matcher!r}", matcher)
        self.matches = matches

    @property
    def count(self) -> int:
        return len(self.matches)
