from __future__ import annotations

from typing import Callable, List, Sequence

from .log import get_logger
from .model import LinkEntry, new_link_id
from .url_norm import normalize_url_input

log = get_logger(__name__)

DEFAULT_SEED_TITLE = "Apple"
DEFAULT_SEED_URL = "https://www.apple.com"


def seed_if_empty(
    links: Sequence[LinkEntry],
    *,
    title: str = DEFAULT_SEED_TITLE,
    url: str = DEFAULT_SEED_URL,
    id_factory: Callable[[], str] = new_link_id,
) -> List[LinkEntry]:
    """Return ``links`` unchanged, or a one-entry list when it is empty.

    The seed URL goes through the same normalization as user input. One that can't be
    normalized is replaced by ``DEFAULT_SEED_URL``.
    """
    if links:
        return list(links)
    normalized = normalize_url_input(url)
    if normalized is None:
        log.warning("Seed URL %r is not a valid URL; using %s", url, DEFAULT_SEED_URL)
        normalized = DEFAULT_SEED_URL
    clean_title = (title or "").strip() or None
    return [LinkEntry(id=id_factory(), title=clean_title, url_string=normalized)]
