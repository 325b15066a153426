from __future__ import annotations

import logging
from typing import List, Optional

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import MENU_URL, REQUEST_TIMEOUT_SECONDS
from .models import Item, Snapshot
from .utils import get_http_session, retryable_request

logger = logging.getLogger(__name__)

SECTION_SELECTOR = ".menu-section"
SECTION_TITLE_SELECTOR = ".menu-section-title"
ITEM_SELECTOR = ".menu-item"
ITEM_TITLE_SELECTOR = ".menu-item-title"
ITEM_DESCRIPTION_SELECTOR = ".menu-item-description"
# The allergen codes live in the price slot, e.g. "(E, G)".
ITEM_DETAILS_SELECTOR = "span.menu-item-price-top"


@retryable_request
def _get(session: requests.Session, url: str, **kwargs: dict) -> requests.Response:
    """Thin wrapper around session.get with retry policy from utils.retryable_request."""
    return session.get(url, **kwargs)


def _child_text(el: Tag, selector: str) -> str:
    """Concatenated, stripped text of every descendant matching `selector`."""
    return "".join(child.get_text(strip=True) for child in el.select(selector)).strip()


def parse_attribute_codes(raw: str) -> List[str]:
    raw = (raw or "").strip().strip("()")
    return [code.strip() for code in raw.split(",") if code.strip()]


def _parse_item(el: Tag) -> Optional[Item]:
    name = _child_text(el, ITEM_TITLE_SELECTOR)
    if not name:
        return None
    return Item(
        name=name,
        description=_child_text(el, ITEM_DESCRIPTION_SELECTOR),
        attribute_codes=tuple(parse_attribute_codes(_child_text(el, ITEM_DETAILS_SELECTOR))),
    )


def parse_menu(html: str) -> Snapshot:
    """Build a snapshot from the menu page HTML.

    Sections without any named flavor are dropped.  If two sections share a
    title, the later one wins.
    """
    soup = BeautifulSoup(html, "html.parser")
    snapshot: Snapshot = {}

    for section in soup.select(SECTION_SELECTOR):
        category = _child_text(section, SECTION_TITLE_SELECTOR)
        items: List[Item] = []
        for el in section.select(ITEM_SELECTOR):
            item = _parse_item(el)
            if item is None:
                logger.debug("Skipping unnamed menu item in section %r", category)
                continue
            items.append(item)

        if not items:
            continue
        if category in snapshot:
            logger.debug("Section %r appears more than once; keeping the last one", category)
        snapshot[category] = items

    return snapshot


def fetch_flavors(
    url: str = MENU_URL,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> Snapshot:
    """Fetch the menu page and return its flavors by section.

    Raises utils.HTTPError (or a requests exception) once retries are spent.
    """
    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    try:
        logger.info("Visiting %s", url)
        resp = _get(session, url, timeout=timeout)
        snapshot = parse_menu(resp.text)
    finally:
        if close_session:
            session.close()

    logger.info(
        "Found %d flavors in %d sections",
        sum(len(items) for items in snapshot.values()),
        len(snapshot),
    )
    return snapshot


__all__ = ["parse_menu", "parse_attribute_codes", "fetch_flavors"]
