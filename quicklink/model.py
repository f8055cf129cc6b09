from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field, RootModel


def new_link_id() -> str:
    return str(uuid.uuid4()).upper()


@dataclass(frozen=True)
class LinkEntry:
    id: str
    title: Optional[str]
    url_string: str

    @property
    def display_title(self) -> str:
        """Title shown in a list row; falls back to the URL when no title was given."""
        return self.title if self.title else self.url_string


class LinkRecord(BaseModel):
    """On-disk shape of one entry. Field names match the stored JSON."""

    id: str = Field(..., min_length=1)
    title: Optional[str] = None
    urlString: str = Field(..., min_length=1)

    @staticmethod
    def from_entry(entry: LinkEntry) -> "LinkRecord":
        return LinkRecord(id=entry.id, title=entry.title, urlString=entry.url_string)

    def to_entry(self) -> LinkEntry:
        return LinkEntry(id=self.id, title=self.title, url_string=self.urlString)


class LinkRecordList(RootModel[List[LinkRecord]]):
    pass
