"""Abstract element interface the query engine runs against."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator

from frontlens.query import get as _get
from frontlens.query import get_all as _get_all
from frontlens.query import query as _query

if TYPE_CHECKING:
    from frontlens.matchers import SupportsMatch

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Collapse whitespace runs to a single space and strip the ends."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


@dataclass
class Event:
    """A synthetic DOM event passed to listeners."""

    type: str
    target: Element
    current_target: Element | None = None
    propagation_stopped: bool = field(default=False, init=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


Listener = Callable[[Event], None]


class BaseDocument(ABC):
    """The document an element belongs to."""

    @abstractmethod
    def get_element_by_id(self, element_id: str) -> Element | None: ...

    @abstractmethod
    def iter_elements(self) -> Iterator[Element]:
        """All elements of the document in document order."""
        ...


class Element(ABC):
    """
    Handle to a node in a host document.

    Handles are borrowed: the document owns the tree, the query engine only
    reads it for the duration of a call. Implementations must hand out one
    handle per node so handles compare by identity.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    # ---- structure -------------------------------------------------------

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Lower-cased tag name."""
        ...

    @property
    @abstractmethod
    def children(self) -> list[Element]:
        """Element children in document order."""
        ...

    @property
    @abstractmethod
    def parent(self) -> Element | None: ...

    @property
    @abstractmethod
    def owner_document(self) -> BaseDocument: ...

    # ---- attributes ------------------------------------------------------

    @abstractmethod
    def get_attribute(self, name: str) -> str | None: ...

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute(name) is not None

    @property
    def id(self) -> str:
        return self.get_attribute("id") or ""

    @property
    def hidden(self) -> bool:
        return self.has_attribute("hidden")

    # ---- text ------------------------------------------------------------

    @abstractmethod
    def collect_text(
        self,
        *,
        rendered: bool = True,
        exclude: Callable[[Element], bool] | None = None,
    ) -> str:
        """
        Concatenate the text of this subtree.

        With ``rendered`` the text is what a user sees: non-rendered subtrees
        (script, style, hidden elements) are skipped and block elements are
        separated by whitespace. Descendants for which ``exclude`` returns
        True are skipped along with their subtree.
        """
        ...

    @property
    def text_content(self) -> str:
        """Raw text of every descendant text node."""
        return self.collect_text(rendered=False)

    @property
    def inner_text(self) -> str:
        """Rendered text with whitespace collapsed."""
        return normalize_text(self.collect_text(rendered=True))

    def ancestors(self) -> Iterator[Element]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    # ---- events ----------------------------------------------------------

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch_event(self, event: Event) -> None:
        """Run listeners on this element, then bubble up through the ancestors."""
        for node in (self, *self.ancestors()):
            event.current_target = node
            for listener in list(node._listeners.get(event.type, [])):
                listener(event)
            if event.propagation_stopped:
                break
        event.current_target = None

    def click(self) -> None:
        """Fire a synthetic click, as a user activating the element would."""
        self.dispatch_event(Event(type="click", target=self))

    # ---- queries ---------------------------------------------------------

    def get_all(self, matcher: SupportsMatch) -> list[Element]:
        return _get_all(self, matcher)

    def get(self, matcher: SupportsMatch) -> Element | None:
        return _get(self, matcher)

    def query(self, matcher: SupportsMatch) -> Element:
        return _query(self, matcher)

    def __repr__(self) -> str:
        element_id = self.id
        suffix = f"#{element_id}" if element_id else ""
        return f"<{type(self).__name__} {self.tag_name}{suffix}>"
