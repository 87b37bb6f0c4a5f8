"""RSS 2.0 feed generation"""

from datetime import datetime, timezone
from xml.sax.saxutils import escape

from pubarchive.core.models import Document, Site


SUMMARY_LENGTH = 160
ELLIPSIS = "..."


def summarize(text: str, limit: int = SUMMARY_LENGTH) -> str:
    """First limit characters of text, with an ellipsis when anything was cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def rfc822_date(value: datetime) -> str:
    value = value.replace(tzinfo=timezone.utc)
    return value.strftime("%a, %d %b %Y %H:%M:%S %z")


def absolute_link(site: Site, url: str) -> str:
    return f"{site.url}{url}"


def build_rss(site: Site, docs: list[Document]) -> str:
    """Render an RSS 2.0 document with one item per document, in the given order."""
    items = []
    for doc in docs:
        link = escape(absolute_link(site, doc.url))
        items.append("\n".join([
            "<item>",
            f"<title>{escape(doc.display_title)}</title>",
            f"<description>{escape(summarize(doc.raw_contents))}</description>",
            f"<link>{link}</link>",
            f'<guid isPermaLink="true">{link}</guid>',
            f"<pubDate>{rfc822_date(doc.date_time)}</pubDate>",
            "</item>",
        ]))
    return "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        "<channel>",
        f"<title>{escape(site.title)}</title>",
        f"<description>{escape(site.description)}</description>",
        f"<link>{escape(site.url)}/</link>",
        *items,
        "</channel>",
        "</rss>",
        "",
    ])
