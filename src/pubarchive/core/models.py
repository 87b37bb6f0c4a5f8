"""Document identity and site metadata models"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Optional


DATE_ISO_FMT = '%Y-%m-%d'
DATE_HUMAN_FMT = '%A, %d %B %Y'
TIMESTAMP_FMT = '%Y-%m-%dT%H:%M:%SZ'


class DateSource(str, Enum):
    """Where a document's calendar date came from."""
    embedded = "embedded"       # leading YYYY-MM-DD in the filename
    modified = "modified"       # filesystem modification time


@dataclass(frozen=True)
class ParsedName:
    """Result of splitting a filename into title text and an optional embedded date."""
    source: DateSource
    title: str
    date: Optional[date] = None     # set only when source is embedded


@dataclass(frozen=True)
class Site:
    """Site-wide metadata shared by every rendered page and the feed."""
    title: str = ""
    url: str = ""
    description: str = ""


@dataclass(frozen=True)
class Document:
    """One publishable source file and its derived identity; never mutated after load."""
    source_path:       Path
    extension:         str          # matched extension including the dot
    title:             str          # may be empty
    slug:              str          # never empty
    raw_contents:      str
    rendered_contents: str
    date_time:         datetime
    url:               str          # /{year}/{month}/{slug}.html
    output_dir:        Path
    output_path:       Path

    @property
    def date_iso(self) -> str:
        return self.date_time.strftime(DATE_ISO_FMT)

    @property
    def date_human(self) -> str:
        return self.date_time.strftime(DATE_HUMAN_FMT)

    @property
    def timestamp(self) -> str:
        return self.date_time.strftime(TIMESTAMP_FMT)

    @property
    def year(self) -> str:
        return self.date_time.strftime('%Y')

    @property
    def month(self) -> str:
        return self.date_time.strftime('%m')

    @property
    def year_month(self) -> str:
        return self.date_time.strftime('%Y/%m')

    @property
    def display_title(self) -> str:
        """Title for link text; untitled notes fall back to their human date."""
        return self.title or self.date_human
