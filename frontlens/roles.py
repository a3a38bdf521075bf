"""Accessibility role resolution for elements."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping

if TYPE_CHECKING:
    from frontlens.dom.base import Element

# Roles that depend on the tag name alone
IMPLICIT_ROLES: Mapping[str, str] = MappingProxyType({
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dd": "definition",
    "dfn": "term",
    "dialog": "dialog",
    "dt": "term",
    "fieldset": "group",
    "figure": "figure",
    "form": "form",
    "frame": "region",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "hr": "separator",
    "img": "img",
    "li": "listitem",
    "main": "main",
    "menuitem": "menuitem",
    "meter": "meter",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "table": "table",
    "tbody": "rowgroup",
    "td": "cell",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "thead": "rowgroup",
    "tr": "row",
    "ul": "list",
})

# <input type=...> roles; unknown and missing types are text fields
INPUT_TYPE_ROLES: Mapping[str, str | None] = MappingProxyType({
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "hidden": None,
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
})


def _input_role(elem: Element) -> str | None:
    input_type = (elem.get_attribute("type") or "text").strip().lower()
    return INPUT_TYPE_ROLES.get(input_type, "textbox")


def _select_role(elem: Element) -> str:
    if elem.has_attribute("multiple"):
        return "listbox"
    try:
        size = int(elem.get_attribute("size") or "0")
    except ValueError:
        size = 0
    return "listbox" if size > 1 else "combobox"


def _th_role(elem: Element) -> str:
    scope = (elem.get_attribute("scope") or "").strip().lower()
    return "rowheader" if scope in ("row", "rowgroup") else "columnheader"


def _link_role(elem: Element) -> str | None:
    # <a> without href is a placeholder link, not a link
    return "link" if elem.has_attribute("href") else None


# Tags whose role depends on attribute values
_ATTRIBUTE_ROLES: Mapping[str, Callable[[Element], str | None]] = MappingProxyType({
    "a": _link_role,
    "area": _link_role,
    "input": _input_role,
    "link": _link_role,
    "select": _select_role,
    "th": _th_role,
})


def resolve_role(elem: Element) -> str | None:
    """
    Return the effective ARIA role of ``elem``.

    An explicit ``role`` attribute wins and is returned verbatim. Otherwise
    the role is inferred from the tag:

    | Tag                                      | Role                               |
    |------------------------------------------|------------------------------------|
    | `<a href>` `<area href>` `<link href>`   | link                               |
    | `<button>`                               | button                             |
    | `<input>` (no type, text, email, ...)    | textbox                            |
    | `<input type=checkbox>`                  | checkbox                           |
    | `<input type=radio>`                     | radio                              |
    | `<input type=range>`                     | slider                             |
    | `<input type=button/submit/reset/image>` | button                             |
    | `<input type=search>`                    | searchbox                          |
    | `<input type=number>`                    | spinbutton                         |
    | `<input type=hidden>`                    | (none)                             |
    | `<select>`                               | combobox, listbox if multiple/size |
    | `<textarea>`                             | textbox                            |
    | `<progress>` / `<meter>`                 | progressbar / meter                |
    | `<th>`                                   | columnheader, rowheader if scope=row |

    plus the fixed entries of :data:`IMPLICIT_ROLES`. Tags with no entry
    have no role and match no role query.
    """
    explicit = elem.get_attribute("role")
    if explicit is not None and explicit.strip():
        return explicit

    tag = elem.tag_name.lower()
    resolver = _ATTRIBUTE_ROLES.get(tag)
    if resolver is not None:
        return resolver(elem)
    return IMPLICIT_ROLES.get(tag)
