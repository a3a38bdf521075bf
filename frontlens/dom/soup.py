"""In-memory host document backed by BeautifulSoup."""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from bs4 import BeautifulSoup
from bs4.element import Doctype, NavigableString, PreformattedString, Tag

from frontlens.dom.base import BaseDocument, Element

logger = logging.getLogger(__name__)

# Subtrees that never produce rendered text
_NON_RENDERED_TAGS = frozenset({"head", "script", "style", "template", "noscript"})

# Elements whose boundaries separate words in rendered text
_BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "br", "dd", "details", "dialog",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
    "ol", "p", "pre", "section", "summary", "table", "td", "th", "tr", "ul",
})


class Document(BaseDocument):
    """
    A parsed HTML document.

    Usage:
        doc = Document()
        root = doc.mount('<label>Name <input /></label>')
        field = root.query(HasLabel("Name"))
        doc.unmount(root)
    """

    def __init__(self, html: str = "", *, parser: str = "html.parser") -> None:
        self.parser = parser
        self._soup = self._parse(html)
        self._handles: dict[int, SoupElement] = {}
        self._ensure_skeleton()

    def _parse(self, html: str) -> BeautifulSoup:
        # Every attribute stays a plain string ("class" included)
        return BeautifulSoup(html, self.parser, multi_valued_attributes=None)

    def _ensure_skeleton(self) -> None:
        """html.parser keeps fragments as-is; give them an <html><body> home."""
        if self._soup.body is not None:
            return
        body = self._soup.new_tag("body")
        html_tag = self._soup.find("html")
        if html_tag is None:
            html_tag = self._soup.new_tag("html")
            html_tag.append(self._soup.new_tag("head"))
            for node in list(self._soup.contents):
                if not isinstance(node, Doctype):
                    body.append(node.extract())
            self._soup.append(html_tag)
        else:
            for node in list(html_tag.contents):
                if not (isinstance(node, Tag) and node.name == "head"):
                    body.append(node.extract())
        html_tag.append(body)

    # ---- handles ---------------------------------------------------------

    def wrap(self, tag: Tag) -> SoupElement:
        """Return the one handle for ``tag``, creating it on first use."""
        handle = self._handles.get(id(tag))
        if handle is None:
            handle = SoupElement(self, tag)
            self._handles[id(tag)] = handle
        return handle

    def _adopt(self, handle: SoupElement) -> None:
        self._handles[id(handle._tag)] = handle

    def _release(self, tag: Tag, *, include_self: bool = True) -> None:
        """Drop cached handles for a subtree leaving the document."""
        if include_self:
            self._handles.pop(id(tag), None)
        for descendant in tag.find_all(True):
            self._handles.pop(id(descendant), None)

    # ---- document API ----------------------------------------------------

    @property
    def body(self) -> SoupElement:
        return self.wrap(self._soup.body)

    @property
    def document_element(self) -> SoupElement:
        return self.wrap(self._soup.find("html"))

    def create_element(self, tag_name: str) -> SoupElement:
        return self.wrap(self._soup.new_tag(tag_name.lower()))

    def get_element_by_id(self, element_id: str) -> SoupElement | None:
        if not element_id:
            return None
        tag = self._soup.find(attrs={"id": element_id})
        return self.wrap(tag) if tag is not None else None

    def select_one(self, selector: str) -> SoupElement | None:
        """First element matching a CSS selector."""
        tag = self._soup.select_one(selector)
        return self.wrap(tag) if tag is not None else None

    def iter_elements(self) -> Iterator[SoupElement]:
        for tag in self._soup.find_all(True):
            yield self.wrap(tag)

    def mount(self, html: str) -> SoupElement:
        """Insert ``html`` in a fresh <div> under <body> and return that container."""
        container = self.create_element("div")
        container.set_inner_html(html)
        self.body.append_child(container)
        logger.debug("mounted fixture %s", container.xpath)
        return container

    def unmount(self, element: SoupElement) -> None:
        """Detach a mounted fixture so later queries in this document can't see it."""
        parent = element.parent
        if parent is not None:
            parent.remove_child(element)

    def to_html(self) -> str:
        return str(self._soup)


class SoupElement(Element):
    """Element handle over a BeautifulSoup ``Tag``."""

    def __init__(self, document: Document, tag: Tag) -> None:
        super().__init__()
        self._document = document
        self._tag = tag

    # ---- structure -------------------------------------------------------

    @property
    def tag_name(self) -> str:
        return self._tag.name.lower()

    @property
    def children(self) -> list[SoupElement]:
        return [self._document.wrap(c) for c in self._tag.children if isinstance(c, Tag)]

    @property
    def parent(self) -> SoupElement | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return self._document.wrap(parent)

    @property
    def owner_document(self) -> Document:
        return self._document

    @property
    def xpath(self) -> str:
        """Absolute positional XPath, stable for an unchanged tree."""
        parts: list[str] = []
        current: Tag | None = self._tag
        while current is not None and not isinstance(current, BeautifulSoup):
            siblings = [
                s for s in current.previous_siblings
                if isinstance(s, Tag) and s.name == current.name
            ]
            parts.insert(0, f"{current.name}[{len(siblings) + 1}]")
            current = current.parent
        return "/" + "/".join(parts)

    # ---- attributes ------------------------------------------------------

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name.lower())
        if value is None:
            return None
        return value if isinstance(value, str) else " ".join(value)

    def set_attribute(self, name: str, value: str) -> None:
        self._tag[name.lower()] = value

    def remove_attribute(self, name: str) -> None:
        self._tag.attrs.pop(name.lower(), None)

    # ---- mutation --------------------------------------------------------

    def append_child(self, child: SoupElement) -> SoupElement:
        self._tag.append(child._tag.extract())
        self._document._adopt(child)
        return child

    def remove_child(self, child: SoupElement) -> SoupElement:
        if child._tag.parent is not self._tag:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        child._tag.extract()
        self._document._release(child._tag)
        return child

    def set_inner_html(self, html: str) -> None:
        self._document._release(self._tag, include_self=False)
        self._tag.clear()
        for node in _fragment_nodes(self._document._parse(html)):
            self._tag.append(node.extract())

    @property
    def inner_html(self) -> str:
        return self._tag.decode_contents()

    @property
    def outer_html(self) -> str:
        return str(self._tag)

    # ---- text ------------------------------------------------------------

    def collect_text(
        self,
        *,
        rendered: bool = True,
        exclude: Callable[[Element], bool] | None = None,
    ) -> str:
        if rendered and (self.hidden or self.tag_name in _NON_RENDERED_TAGS):
            return ""
        parts: list[str] = []
        self._collect(self._tag, parts, rendered, exclude)
        return "".join(parts)

    def _collect(
        self,
        tag: Tag,
        parts: list[str],
        rendered: bool,
        exclude: Callable[[Element], bool] | None,
    ) -> None:
        for node in tag.children:
            if isinstance(node, Tag):
                name = node.name.lower()
                if rendered and (name in _NON_RENDERED_TAGS or node.has_attr("hidden")):
                    continue
                if exclude is not None and exclude(self._document.wrap(node)):
                    continue
                block = rendered and name in _BLOCK_TAGS
                if block:
                    parts.append(" ")
                self._collect(node, parts, rendered, exclude)
                if block:
                    parts.append(" ")
            elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
                parts.append(str(node))


def _fragment_nodes(fragment: BeautifulSoup) -> list:
    """
    Top-level nodes of parsed markup, without a parser-added skeleton.

    lxml and html5lib wrap every fragment in <html><head><body>; metadata
    such as <title> or <meta> ends up in the head, everything else in body.
    """
    if fragment.body is None:
        nodes = list(fragment.contents)
    else:
        nodes = list(fragment.head.contents) if fragment.head is not None else []
        nodes.extend(fragment.body.contents)
    return [node for node in nodes if not isinstance(node, Doctype)]
