"""Unit tests for core/grouping.py"""

from datetime import datetime
from pathlib import Path

from pubarchive.core.grouping import group_by_year, unique_output_folders
from pubarchive.core.models import Document


def _doc(slug: str, when: datetime) -> Document:
    out = Path("out") / f"{when:%Y}" / f"{when:%m}"
    return Document(
        source_path=Path(f"{slug}.md"),
        extension=".md",
        title=slug,
        slug=slug,
        raw_contents="",
        rendered_contents="<p></p>",
        date_time=when,
        url=f"/{when:%Y}/{when:%m}/{slug}.html",
        output_dir=out,
        output_path=out / f"{slug}.html",
    )


DOCS = [
    _doc("e", datetime(2024, 5, 2)),
    _doc("d", datetime(2024, 5, 1)),
    _doc("c", datetime(2024, 1, 9)),
    _doc("b", datetime(2022, 12, 31)),
    _doc("a", datetime(2022, 3, 3)),
]


def test_group_by_year_buckets_in_source_order():
    groups = group_by_year(DOCS)
    assert list(groups) == ["2024", "2022"]
    assert [d.slug for d in groups["2024"]] == ["e", "d", "c"]
    assert [d.slug for d in groups["2022"]] == ["b", "a"]


def test_group_by_year_partitions_collection():
    """Every document lands in exactly one bucket."""
    groups = group_by_year(DOCS)
    flattened = [d for bucket in groups.values() for d in bucket]
    assert sorted(flattened, key=lambda d: d.slug) == sorted(DOCS, key=lambda d: d.slug)
    assert len(flattened) == len(DOCS)


def test_group_by_year_empty():
    assert group_by_year([]) == {}


def test_unique_output_folders():
    folders = unique_output_folders(DOCS)
    assert folders == ["2024", "2024/05", "2024/01", "2022", "2022/12", "2022/03"]


def test_unique_output_folders_each_backed_by_a_document():
    folders = unique_output_folders(DOCS)
    assert len(folders) == len(set(folders))
    for folder in folders:
        assert any(folder in (d.year, d.year_month) for d in DOCS)
