from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Tuple

from .log import get_logger
from .model import LinkEntry, new_link_id
from .persistence import PersistError
from .seed import DEFAULT_SEED_TITLE, DEFAULT_SEED_URL, seed_if_empty
from .url_norm import normalize_url_input

log = get_logger(__name__)


class Persistence(Protocol):
    def save(self, links: Sequence[LinkEntry]) -> None: ...

    def load(self) -> List[LinkEntry]: ...


Listener = Callable[["LinkStore"], None]


class LinkStore:
    """Ordered list of links with optimistic saves.

    Every mutation is applied in memory first and then saved. If the save fails the list goes
    back to exactly what it was and ``error_message`` holds the failure; the next successful
    save clears it. Callers must serialize access; there is no locking.
    """

    def __init__(
        self,
        persistence: Persistence,
        *,
        id_factory: Callable[[], str] = new_link_id,
        seed: bool = True,
        seed_title: str = DEFAULT_SEED_TITLE,
        seed_url: str = DEFAULT_SEED_URL,
    ):
        self.persistence = persistence
        self.id_factory = id_factory
        self._listeners: List[Listener] = []
        self._error_message: Optional[str] = None

        links = persistence.load()
        if seed:
            links = seed_if_empty(links, title=seed_title, url=seed_url, id_factory=id_factory)
        self._links: List[LinkEntry] = list(links)
        log.debug("Loaded link store with %d links", len(self._links))

    @property
    def links(self) -> Tuple[LinkEntry, ...]:
        return tuple(self._links)

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` after any operation that changes links or error_message."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def add_link(self, title: str, url_input: str) -> Optional[LinkEntry]:
        normalized = normalize_url_input(url_input)
        if normalized is None:
            log.debug("Ignoring add with invalid URL input: %r", url_input)
            return None
        clean_title = (title or "").strip() or None
        entry = LinkEntry(id=self.id_factory(), title=clean_title, url_string=normalized)

        if self._commit(self._links + [entry]):
            return entry
        return None

    def remove_link(self, entry: LinkEntry) -> bool:
        idx = next((i for i, e in enumerate(self._links) if e.id == entry.id), None)
        if idx is None:
            return False
        return self._commit(self._links[:idx] + self._links[idx + 1 :])

    def remove_at_indices(self, offsets: Iterable[int]) -> bool:
        drop = {i for i in offsets if 0 <= i < len(self._links)}
        if not drop:
            return False
        return self._commit([e for i, e in enumerate(self._links) if i not in drop])

    def _commit(self, updated: List[LinkEntry]) -> bool:
        before_links = self._links
        before_error = self._error_message

        self._links = updated
        try:
            self.persistence.save(self._links)
        except PersistError as e:
            self._links = before_links
            self._error_message = str(e) or "Could not save links."
            log.warning("Save failed, changes rolled back: %s", self._error_message)
            ok = False
        else:
            self._error_message = None
            ok = True

        if self._links != before_links or self._error_message != before_error:
            self._notify()
        return ok

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
