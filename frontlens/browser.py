"""Rendering adapter for a live Playwright page."""

from __future__ import annotations

import logging

from playwright.async_api import Page

from frontlens.dom.soup import Document, SoupElement

logger = logging.getLogger(__name__)


async def render(page: Page, html: str, *, parser: str = "html.parser") -> SoupElement:
    """
    Mount ``html`` as the page body and return a queryable snapshot of it.

    The returned element is the snapshot's <body>; queries never include
    the root itself, so every mounted element is reachable.
    """
    await page.set_content(html, wait_until="load")
    logger.debug("rendered %d characters of markup into %s", len(html), page.url)
    return await snapshot(page, parser=parser)


async def snapshot(
    page: Page,
    selector: str = "body",
    *,
    parser: str = "html.parser",
) -> SoupElement:
    """
    Read the page's current DOM into an in-memory :class:`Document`.

    The snapshot does not follow later changes on the page; take a new one
    after interacting. Raises ``LookupError`` when ``selector`` matches
    nothing in the snapshot.
    """
    markup = await page.content()
    document = Document(markup, parser=parser)
    root = document.select_one(selector)
    if root is None:
        raise LookupError(f"{selector!r} matched nothing on {page.url}")
    return root


async def click(page: Page, element: SoupElement, *, timeout: float = 5000) -> None:
    """Click the live counterpart of a snapshot element."""
    locator = page.locator(f"xpath={element.xpath}")
    await locator.click(timeout=timeout)
    logger.debug("clicked %r at %s", element, element.xpath)


async def tick(page: Page) -> None:
    """Let the page run pending event handlers and re-renders."""
    await page.wait_for_timeout(0)
