"""Root test configuration: environment isolation and source-tree builders"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from pubarchive.config import Settings


MTIME = datetime(2023, 7, 4, 10, 0, 0)

SHELL_TPL = "<html><title>{{title}} | {{site-title}}</title><body>{{content}}<aside>{{recent-posts}}</aside><footer>{{dateyear}}</footer></body></html>"
ARCHIVE_TPL = "<section><h1>{{title}}</h1>{{content}}</section>"
SINGLE_TPL = "<article><h1>{{title}}</h1><time datetime='{{dateiso}}'>{{datehuman}}</time>{{content}}</article>"


def _set_mtime(path: Path, when: datetime = MTIME) -> None:
    """Pin a file's modification time to a naive UTC datetime."""
    ts = when.replace(tzinfo=timezone.utc).timestamp()
    os.utime(path, (ts, ts))


def _write_source(directory: Path, name: str, contents: str = "Body", when: datetime = MTIME) -> Path:
    """Create a source file with a fixed modification time."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(contents, encoding="utf-8")
    _set_mtime(path, when)
    return path


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no PUBARCHIVE_* variables set."""
    for key in list(os.environ):
        if key.startswith("PUBARCHIVE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="template_dir")
def template_dir_fixture(tmp_path):
    d = tmp_path / "template"
    d.mkdir()
    (d / "template.html").write_text(SHELL_TPL, encoding="utf-8")
    (d / "archive.html").write_text(ARCHIVE_TPL, encoding="utf-8")
    (d / "single.html").write_text(SINGLE_TPL, encoding="utf-8")
    return d


@pytest.fixture(name="data_dir")
def data_dir_fixture(tmp_path):
    return tmp_path / "data"


@pytest.fixture(name="output_dir")
def output_dir_fixture(tmp_path):
    return tmp_path / "output"


@pytest.fixture(name="settings")
def settings_fixture(data_dir, output_dir, template_dir):
    return Settings(
        data_dir=str(data_dir),
        output_dir=str(output_dir),
        template_dir=str(template_dir),
        site_title="Field Notes",
        site_url="https://notes.example.com/",
        site_description="A personal archive",
    )


@pytest.fixture(name="write_source")
def write_source_fixture():
    """Factory creating source files with a pinned modification time."""
    return _write_source
