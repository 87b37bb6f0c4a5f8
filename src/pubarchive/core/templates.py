"""Literal {{token}} substitution and page composition from the template set"""

import re
from dataclasses import dataclass
from pathlib import Path

from pubarchive.core.feed import summarize
from pubarchive.core.models import Document, Site


TOKEN_RE = re.compile(r"\{\{([\w-]+)\}\}")

SHELL_TEMPLATE = "template.html"
ARCHIVE_TEMPLATE = "archive.html"
SINGLE_TEMPLATE = "single.html"
RECENT_POST_TEMPLATE = "recent-post.html"
ARCHIVE_ITEM_TEMPLATE = "archive-item.html"

DEFAULT_ARCHIVE_ITEM = "<li><span>{{dateisoshort}}</span><a href='{{url}}'>{{title}}</a></li>"
STARTER_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class Templates:
    """Template texts used to compose every rendered page."""
    shell:        str
    archive:      str
    single:       str
    recent_post:  str = ""
    archive_item: str = DEFAULT_ARCHIVE_ITEM


def render_template(template: str, values: dict[str, str]) -> str:
    """Replace each {{key}} with its value; tokens without a value are left as-is.

    Substitution is a single pass over the template, so tokens inside inserted
    values are never expanded.
    """
    return TOKEN_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def _read_optional(path: Path, default: str) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else default


def load_templates(template_dir: Path) -> Templates:
    """Read the template set; the shell, archive and single templates are required."""
    return Templates(
        shell=(template_dir / SHELL_TEMPLATE).read_text(encoding="utf-8"),
        archive=(template_dir / ARCHIVE_TEMPLATE).read_text(encoding="utf-8"),
        single=(template_dir / SINGLE_TEMPLATE).read_text(encoding="utf-8"),
        recent_post=_read_optional(template_dir / RECENT_POST_TEMPLATE, ""),
        archive_item=_read_optional(template_dir / ARCHIVE_ITEM_TEMPLATE, DEFAULT_ARCHIVE_ITEM),
    )


def document_values(doc: Document) -> dict[str, str]:
    """Token values describing a single document."""
    return {
        "title": doc.display_title,
        "url": doc.url,
        "summary": summarize(doc.raw_contents),
        "dateiso": doc.timestamp,
        "dateisoshort": doc.date_iso,
        "datehuman": doc.date_human,
        "dateyear": doc.year,
    }


def site_values(site: Site) -> dict[str, str]:
    return {
        "site-title": site.title,
        "site-description": site.description,
        "site-url": site.url,
    }


def render_recent_posts(templates: Templates, docs: list[Document], count: int) -> str:
    """Render the first count documents with the recent-post template; empty without one."""
    if not templates.recent_post:
        return ""
    return "".join(render_template(templates.recent_post, document_values(d)) for d in docs[:count])


def render_shell(
    templates: Templates,
    site: Site,
    title: str,
    content: str,
    year: str,
    recent_posts: str = "",
    ) -> str:
    """Wrap already-rendered content in the site shell template."""
    return render_template(templates.shell, {
        **site_values(site),
        "title": title,
        "dateyear": year,
        "recent-posts": recent_posts,
        "content": content,
    })


def render_archive(templates: Templates, title: str, docs: list[Document]) -> str:
    """Render the archive template listing docs, one archive item per document."""
    items = "".join(render_template(templates.archive_item, document_values(d)) for d in docs)
    return render_template(templates.archive, {
        "title": title,
        "archive-item": items,
        "content": f"<ul>{items}</ul>",
    })


def render_index(
    templates: Templates,
    site: Site,
    title: str,
    docs: list[Document],
    year: str,
    recent_posts: str = "",
    ) -> str:
    """Full archive index page: archive list nested in the site shell."""
    archive = render_archive(templates, title, docs)
    return render_shell(templates, site, title, archive, year, recent_posts)


def render_single(templates: Templates, site: Site, doc: Document, recent_posts: str = "") -> str:
    """Full page for one document: single template nested in the site shell."""
    single = render_template(templates.single, {
        **document_values(doc),
        "content": doc.rendered_contents,
    })
    return render_shell(templates, site, doc.display_title, single, doc.year, recent_posts)


def write_starter_templates(template_dir: Path) -> list[tuple[Path, bool]]:
    """Copy the bundled template set into template_dir, never replacing existing files.

    Returns (path, written) pairs for every bundled template.
    """
    template_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for name in (SHELL_TEMPLATE, ARCHIVE_TEMPLATE, SINGLE_TEMPLATE, RECENT_POST_TEMPLATE, ARCHIVE_ITEM_TEMPLATE):
        dest = template_dir / name
        if dest.exists():
            results.append((dest, False))
            continue
        dest.write_text((STARTER_DIR / name).read_text(encoding="utf-8"), encoding="utf-8")
        results.append((dest, True))
    return results
