from __future__ import annotations

from typing import List, Sequence, Set

from pydantic import ValidationError

from .kv_store import KeyValueStore
from .log import get_logger
from .model import LinkEntry, LinkRecord, LinkRecordList

log = get_logger(__name__)

DEFAULT_STORAGE_KEY = "quicklink.links"


class PersistError(Exception):
    """Saving the link list failed; nothing was written."""


class LinkPersistence:
    """Reads and writes the whole link list as one JSON blob in a single storage slot."""

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.kv = kv
        self.key = key

    def save(self, links: Sequence[LinkEntry]) -> None:
        try:
            payload = LinkRecordList([LinkRecord.from_entry(e) for e in links])
            data = payload.model_dump_json(exclude_none=True).encode("utf-8")
        except (ValidationError, ValueError, TypeError) as e:
            raise PersistError(f"Could not encode links: {e}") from e
        try:
            self.kv.set(self.key, data)
        except Exception as e:
            raise PersistError(f"Could not save links: {e}") from e
        log.debug("Saved %d links to slot %s", len(links), self.key)

    def load(self) -> List[LinkEntry]:
        try:
            raw = self.kv.get(self.key)
        except Exception as e:
            log.warning("Could not read links from slot %s: %s", self.key, e)
            return []
        if raw is None:
            return []
        try:
            records = LinkRecordList.model_validate_json(raw).root
        except (ValidationError, ValueError) as e:
            log.warning("Ignoring unreadable link data in slot %s: %s", self.key, e)
            return []

        out: List[LinkEntry] = []
        seen: Set[str] = set()
        for r in records:
            if r.id in seen:
                log.warning("Dropping link with duplicate id %s", r.id)
                continue
            seen.add(r.id)
            out.append(r.to_entry())
        return out


class FailingPersistence:
    """Wraps a persistence adapter so every save fails. Loads still go through."""

    def __init__(self, inner: LinkPersistence, message: str = "Simulated save failure"):
        self.inner = inner
        self.message = message

    def save(self, links: Sequence[LinkEntry]) -> None:
        raise PersistError(self.message)

    def load(self) -> List[LinkEntry]:
        return self.inner.load()
