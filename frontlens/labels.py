"""Accessible label resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frontlens.dom.base import normalize_text

if TYPE_CHECKING:
    from frontlens.dom.base import Element

# Elements a <label> can be associated with
# https://developer.mozilla.org/en-US/docs/Web/HTML/Element/label
LABELABLE_TAGS = frozenset({"button", "input", "meter", "output", "progress", "select", "textarea"})

PLACEHOLDER_TAGS = frozenset({"input", "textarea"})


def is_labelable(elem: Element) -> bool:
    tag = elem.tag_name.lower()
    if tag not in LABELABLE_TAGS:
        return False
    if tag == "input" and (elem.get_attribute("type") or "").strip().lower() == "hidden":
        return False
    return True


def labels_for(elem: Element) -> list[Element]:
    """
    The <label> elements associated with ``elem``.

    Explicit ``for`` associations come first in document order, then the
    nearest wrapping <label>.
    """
    if not is_labelable(elem):
        return []

    found: list[Element] = []
    element_id = elem.id
    if element_id:
        found.extend(
            candidate
            for candidate in elem.owner_document.iter_elements()
            if candidate.tag_name == "label" and candidate.get_attribute("for") == element_id
        )

    for ancestor in elem.ancestors():
        if ancestor.tag_name == "label":
            # A wrapping label pointing elsewhere labels that other element
            if ancestor.get_attribute("for") in (None, element_id) and ancestor not in found:
                found.append(ancestor)
            break
    return found


def label_text(label: Element) -> str:
    """Text of a <label>, leaving out the controls nested inside it."""
    return normalize_text(label.collect_text(exclude=is_labelable))


def _labelledby_text(elem: Element, ids: str) -> str:
    document = elem.owner_document
    parts: list[str] = []
    for ref_id in ids.split():
        ref = document.get_element_by_id(ref_id)
        if ref is None:
            # Dangling id: contributes nothing
            continue
        text = normalize_text(ref.text_content)
        if text:
            parts.append(text)
    return " ".join(parts)


def resolve_label(elem: Element) -> str:
    """
    Return the accessible label of ``elem``, or ``""`` when it has none.

    First non-empty source wins:
      1. ``aria-labelledby``: referenced elements' text, space separated
      2. ``aria-label``: verbatim
      3. associated <label>: ``for``/``id`` first, then a wrapping label
    """
    labelledby = elem.get_attribute("aria-labelledby")
    if labelledby:
        text = _labelledby_text(elem, labelledby)
        if text:
            return text

    aria_label = elem.get_attribute("aria-label")
    if aria_label:
        return aria_label

    for label in labels_for(elem):
        text = label_text(label)
        if text:
            return text
    return ""


def placeholder_of(elem: Element) -> str | None:
    """Placeholder hint of a text control; None for elements that can't carry one."""
    if elem.tag_name.lower() not in PLACEHOLDER_TAGS:
        return None
    return elem.get_attribute("placeholder")
