"""Site build orchestration: directories, indexes, pages, assets and feed"""

import logging
import re
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from pubarchive.config import Settings, require_data_dir
from pubarchive.core.discover import collect_documents
from pubarchive.core.feed import build_rss
from pubarchive.core.grouping import group_by_year, unique_output_folders
from pubarchive.core.models import Document, Site
from pubarchive.core.templates import Templates, load_templates, render_index, render_recent_posts, render_single
from pubarchive.core.utils.paths import join_path


logger = logging.getLogger(__name__)

ASSET_RE = re.compile(r'"\./([^"]+)"')
HOME_TITLE = "home"
FEED_FILE = "rss.xml"


@dataclass
class BuildReport:
    """Counts collected over one build run."""
    documents:      int = 0
    folders:        int = 0
    indexes:        int = 0
    pages_written:  int = 0
    pages_skipped:  int = 0
    assets_copied:  int = 0
    assets_skipped: int = 0
    feed:           Optional[Path] = None


def create_directories(output_root: Path, docs: list[Document]) -> int:
    """Create the output root plus every year and year/month folder. Returns folders created."""
    output_root.mkdir(parents=True, exist_ok=True)
    created = 0
    for folder in unique_output_folders(docs):
        path = output_root / folder
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
            created += 1
    return created


def write_indexes(
    templates: Templates,
    site: Site,
    output_root: Path,
    docs: list[Document],
    recent_posts: str,
    now: datetime,
    ) -> list[Path]:
    """Write the home index and one index per year. Returns the written paths."""
    written = []
    home = join_path(output_root, "index.html")
    home.write_text(render_index(templates, site, HOME_TITLE, docs, f"{now:%Y}", recent_posts), encoding="utf-8")
    written.append(home)

    for year, year_docs in group_by_year(docs).items():
        path = join_path(output_root, year, "index.html")
        path.write_text(
            render_index(templates, site, f"Posts from {year}", year_docs, year, recent_posts),
            encoding="utf-8",
        )
        written.append(path)
    return written


def write_page(doc: Document, html: str, overwrite: bool) -> bool:
    """Write one document page. Returns False when it already existed and was left alone.

    Without overwrite the file is opened in exclusive-create mode, so the
    existence check and the write cannot be split by another writer.
    """
    if overwrite:
        doc.output_path.write_text(html, encoding="utf-8")
        return True
    try:
        with doc.output_path.open("x", encoding="utf-8") as f:
            f.write(html)
    except FileExistsError:
        return False
    return True


def write_pages(
    templates: Templates,
    site: Site,
    docs: list[Document],
    overwrite: bool,
    recent_posts: str,
    ) -> tuple[int, int]:
    """Render every document page idempotently. Returns (written, skipped)."""
    written = skipped = 0
    for doc in docs:
        if not overwrite and doc.output_path.exists():
            logger.debug("Page exists, skipping %s", doc.output_path)
            skipped += 1
            continue
        if write_page(doc, render_single(templates, site, doc, recent_posts), overwrite):
            written += 1
        else:
            skipped += 1
    return written, skipped


def find_assets(doc: Document) -> list[str]:
    """Relative names of every quoted "./name" reference in the rendered contents."""
    return ASSET_RE.findall(doc.rendered_contents)


def _escapes(name: str) -> bool:
    """True for absolute names and names that climb out with a .. segment."""
    path = Path(name)
    return path.is_absolute() or ".." in path.parts


def copy_assets(output_root: Path, docs: list[Document]) -> tuple[int, int]:
    """Copy referenced assets next to each document's page; existing copies are never replaced.

    Absolute names and names containing a .. segment would land outside the
    output tree; they are skipped with a warning. Returns (copied, skipped).
    """
    copied = skipped = 0
    for doc in docs:
        for name in find_assets(doc):
            if _escapes(name):
                logger.warning("Asset %r in %s escapes its directory, skipping", name, doc.source_path)
                continue
            source = doc.source_path.parent / name
            destination = join_path(output_root, doc.year, doc.month, name)
            if destination.exists():
                logger.debug("Asset exists, skipping %s", destination)
                skipped += 1
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy(source, destination)
            copied += 1
    return copied, skipped


def write_feed(output_root: Path, site: Site, docs: list[Document]) -> Path:
    path = join_path(output_root, FEED_FILE)
    path.write_text(build_rss(site, docs), encoding="utf-8")
    return path


def run_build(settings: Settings, now: datetime = None) -> BuildReport:
    """Run the full pipeline: discover -> load -> directories -> indexes -> pages -> assets -> feed."""
    data_dir = require_data_dir(settings)
    output_root = Path(settings.output_dir)
    templates = load_templates(Path(settings.template_dir))
    site = settings.site
    now = now or datetime.now()
    report = BuildReport()

    docs = collect_documents(data_dir, settings.public_dir, settings.extensions, output_root)
    report.documents = len(docs)

    report.folders = create_directories(output_root, docs)
    recent_posts = render_recent_posts(templates, docs, settings.recent_count)

    report.indexes = len(write_indexes(templates, site, output_root, docs, recent_posts, now))
    report.pages_written, report.pages_skipped = write_pages(
        templates, site, docs, settings.overwrite, recent_posts,
    )
    logger.info("Pages: %d written, %d skipped", report.pages_written, report.pages_skipped)

    report.assets_copied, report.assets_skipped = copy_assets(output_root, docs)
    report.feed = write_feed(output_root, site, docs)
    return report
