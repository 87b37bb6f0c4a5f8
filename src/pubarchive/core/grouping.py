"""Group documents into yearly buckets and output folders"""

from pubarchive.core.models import Document


def group_by_year(docs: list[Document]) -> dict[str, list[Document]]:
    """Map each year to its documents, keeping the input order within each year."""
    groups: dict[str, list[Document]] = {}
    for doc in docs:
        groups.setdefault(doc.year, []).append(doc)
    return groups


def unique_output_folders(docs: list[Document]) -> list[str]:
    """Return each distinct '{year}' and '{year}/{month}' folder once, in first-seen order."""
    return list(dict.fromkeys(folder for doc in docs for folder in (doc.year, doc.year_month)))
