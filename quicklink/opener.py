from __future__ import annotations

import webbrowser
from typing import Callable, Optional

from .log import get_logger
from .model import LinkEntry

log = get_logger(__name__)


def open_link(entry: LinkEntry, *, opener: Optional[Callable[[str], bool]] = None) -> bool:
    """Hand the entry's URL to the system's default handler."""
    opener = opener or webbrowser.open
    ok = bool(opener(entry.url_string))
    if not ok:
        log.warning("No handler opened %s", entry.url_string)
    return ok
