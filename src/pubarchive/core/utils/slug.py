"""Slug generation for document identifiers"""

import re


_NON_SLUG_RE = re.compile(r'[^A-Za-z0-9 -]')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug.

    Only ASCII letters, digits, spaces and hyphens survive; each space becomes a
    hyphen, so runs of spaces become runs of hyphens. May return an empty string.
    """
    text = _NON_SLUG_RE.sub('', text)
    return text.replace(' ', '-').strip('-').lower()
