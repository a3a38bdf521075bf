"""Composable element predicates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from frontlens.labels import placeholder_of, resolve_label
from frontlens.roles import resolve_role

if TYPE_CHECKING:
    from frontlens.dom.base import Element


@runtime_checkable
class SupportsMatch(Protocol):
    """Anything with a ``matches`` method can be used wherever a matcher is expected."""

    def matches(self, elem: Element) -> bool: ...


class Matcher(ABC):
    """
    Base class for predicates over a single element.

    Subclass and implement :meth:`matches` to write a custom matcher, or pass
    any object with a ``matches`` method to the combinators. Matching must
    not modify the element or its document.

    Combinators chain left to right::

        HasRole("button").and_(HasText("bananas").or_(HasText("apples")))
        HasRole("button") & ~HasLabel("Cancel")
    """

    @abstractmethod
    def matches(self, elem: Element) -> bool: ...

    def and_(self, other: SupportsMatch) -> And:
        return And(self, other)

    def or_(self, other: SupportsMatch) -> Or:
        return Or(self, other)

    def not_(self) -> Not:
        return Not(self)

    def __and__(self, other: SupportsMatch) -> And:
        return And(self, other)

    def __rand__(self, other: SupportsMatch) -> And:
        return And(other, self)

    def __or__(self, other: SupportsMatch) -> Or:
        return Or(self, other)

    def __ror__(self, other: SupportsMatch) -> Or:
        return Or(other, self)

    def __invert__(self) -> Not:
        return Not(self)


@dataclass(frozen=True)
class HasRole(Matcher):
    """
    Matches elements with the given ARIA role, explicit or implied by the tag.

    The preferred query: ``HasRole("button") & HasText("Add")`` finds what a
    screen reader user would find. Comparison is exact and case-sensitive.
    """

    role: str

    def matches(self, elem: Element) -> bool:
        return resolve_role(elem) == self.role


@dataclass(frozen=True)
class HasLabel(Matcher):
    """Matches elements whose accessible label equals ``text`` exactly."""

    text: str

    def matches(self, elem: Element) -> bool:
        label = resolve_label(elem)
        return bool(label) and label == self.text


@dataclass(frozen=True)
class HasPlaceholder(Matcher):
    """Matches <input>/<textarea> elements whose placeholder equals ``text``."""

    text: str

    def matches(self, elem: Element) -> bool:
        return placeholder_of(elem) == self.text


@dataclass(frozen=True)
class HasText(Matcher):
    """
    Matches elements whose rendered text contains ``text``.

    Unlike the other built-ins this is a substring test, so a loose
    ``HasText("Value:")`` finds ``<p>Value: 0</p>``. Case-sensitive; hidden
    subtrees don't count as rendered text. Ancestors of the element holding
    the text match too, so combine with a role when one element is wanted.
    """

    text: str

    def matches(self, elem: Element) -> bool:
        return self.text in elem.inner_text


@dataclass(frozen=True)
class IsHidden(Matcher):
    """Matches elements carrying the ``hidden`` attribute."""

    def matches(self, elem: Element) -> bool:
        return elem.hidden


@dataclass(frozen=True)
class Not(Matcher):
    inner: SupportsMatch

    def matches(self, elem: Element) -> bool:
        return not self.inner.matches(elem)


@dataclass(frozen=True)
class And(Matcher):
    left: SupportsMatch
    right: SupportsMatch

    def matches(self, elem: Element) -> bool:
        return self.left.matches(elem) and self.right.matches(elem)


@dataclass(frozen=True)
class Or(Matcher):
    left: SupportsMatch
    right: SupportsMatch

    def matches(self, elem: Element) -> bool:
        return self.left.matches(elem) or self.right.matches(elem)
