"""Derive a Document's identity (title, date, slug, url, output path) from a source file"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from pubarchive.core.models import DATE_ISO_FMT, DateSource, Document, ParsedName
from pubarchive.core.utils.paths import join_path
from pubarchive.core.utils.slug import slugify
from pubarchive.core.utils.timestamps import modified_at


logger = logging.getLogger(__name__)

DRAFT_MARKER = "DRAFT"
DATED_NAME_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})(?:\s(.*))?$', re.DOTALL)


def match_extension(filename: str, extensions: Iterable[str]) -> Optional[str]:
    """Return the first configured extension (with its dot) that filename ends with."""
    for ext in extensions:
        suffix = f".{ext}"
        if filename.endswith(suffix):
            return suffix
    return None


def parse_name(stem: str) -> ParsedName:
    """Split an extension-less filename into its title and optional leading ISO date.

    A prefix that looks like a date but is not a real calendar day falls back
    to the modified-time branch with the full stem as title.
    """
    m = DATED_NAME_RE.match(stem)
    if m:
        try:
            embedded = datetime.strptime(m.group(1), DATE_ISO_FMT).date()
        except ValueError:
            logger.debug("Ignoring invalid date prefix in %r", stem)
        else:
            return ParsedName(source=DateSource.embedded, title=(m.group(2) or '').strip(), date=embedded)
    return ParsedName(source=DateSource.modified, title=stem.strip())


def resolve_datetime(parsed: ParsedName, modified: datetime) -> datetime:
    """Embedded dates keep the file's time-of-day; otherwise the full mtime is used."""
    if parsed.source is DateSource.embedded:
        return datetime.combine(parsed.date, modified.time())
    return modified


def derive_slug(title: str, date_time: datetime) -> str:
    """Slug from title, or the ISO date when the title yields nothing."""
    return slugify(title) or date_time.strftime(DATE_ISO_FMT)


def render_contents(raw: str, extension: str) -> str:
    """Upgrade plain text to paragraphs and line breaks; HTML passes through untouched."""
    if extension == ".html":
        return raw
    text = raw.replace("\r", "")
    text = text.replace("\n\n", "</p><p>")
    text = text.replace("\n", "<br />")
    return f"<p>{text}</p>"


def document_url(date_time: datetime, slug: str) -> str:
    return f"/{date_time:%Y}/{date_time:%m}/{slug}.html"


def build_document(path: Path, extensions: Iterable[str], output_root: Path) -> Document | None:
    """Build a Document for one source file, or None for drafts and unsupported files."""
    filename = path.name
    if filename.startswith(DRAFT_MARKER):
        logger.debug("Skipping draft %s", path)
        return None

    extension = match_extension(filename, extensions)
    if extension is None:
        logger.debug("Skipping unsupported file %s", path)
        return None

    parsed = parse_name(filename[:-len(extension)])
    date_time = resolve_datetime(parsed, modified_at(path))
    slug = derive_slug(parsed.title, date_time)

    # bytes, so carriage returns survive into raw_contents
    raw = path.read_bytes().decode("utf-8")
    output_dir = join_path(output_root, f"{date_time:%Y}", f"{date_time:%m}")

    return Document(
        source_path=path,
        extension=extension,
        title=parsed.title,
        slug=slug,
        raw_contents=raw,
        rendered_contents=render_contents(raw, extension),
        date_time=date_time,
        url=document_url(date_time, slug),
        output_dir=output_dir,
        output_path=join_path(output_dir, f"{slug}.html"),
    )
