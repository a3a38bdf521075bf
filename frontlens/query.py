"""Query engine: walk a subtree and evaluate a matcher against every descendant."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from frontlens.errors import AmbiguousMatchError, NoMatchError

if TYPE_CHECKING:
    from frontlens.dom.base import Element
    from frontlens.matchers import SupportsMatch

logger = logging.getLogger(__name__)


def iter_descendants(root: Element) -> Iterator[Element]:
    """
    Yield every descendant of ``root`` in document (depth-first pre-order) order.

    ``root`` itself is not yielded. Each element is visited once; the walk
    only reads the tree.
    """
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def get_all(root: Element, matcher: SupportsMatch) -> list[Element]:
    """All descendants matched by ``matcher``, in document order. Never raises on no match."""
    found = [element for element in iter_descendants(root) if matcher.matches(element)]
    logger.debug("%r matched %d element(s) under %r", matcher, len(found), root)
    return found


def get(root: Element, matcher: SupportsMatch) -> Element | None:
    """First match in document order, or None. Multiplicity is the caller's concern."""
    for element in iter_descendants(root):
        if matcher.matches(element):
            return element
    return None


def query(root: Element, matcher: SupportsMatch) -> Element:
    """
    The single descendant matched by ``matcher``.

    Raises
    ------
    NoMatchError
        Nothing matched.
    AmbiguousMatchError
        More than one element matched; the matcher is too loose.
    """
    found = get_all(root, matcher)
    if not found:
        raise NoMatchError(matcher)
    if len(found) > 1:
        raise AmbiguousMatchError(matcher, found)
    return found[0]
