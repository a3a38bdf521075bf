from frontlens.dom.base import BaseDocument, Element, Event, normalize_text
from frontlens.dom.soup import Document, SoupElement

__all__ = ["BaseDocument", "Document", "Element", "Event", "SoupElement", "normalize_text"]
