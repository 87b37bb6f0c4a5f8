"""Public-directory discovery and per-directory document loading"""

import logging
from pathlib import Path
from typing import Iterable

from pubarchive.core.identity import build_document
from pubarchive.core.models import Document


logger = logging.getLogger(__name__)


def find_public_dirs(root: Path, marker: str, _seen: set[Path] = None) -> list[Path]:
    """Return every directory under root whose name ends with marker.

    Matched directories are leaves of the search; only non-matching
    directories are descended into. Symlinked directories are followed, but
    a directory already walked is not entered again, so link cycles end.
    Unreadable directories raise OSError.
    """
    seen = _seen if _seen is not None else {root.resolve()}
    found: list[Path] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue
        if entry.name.endswith(marker):
            found.append(entry)
            continue
        real = entry.resolve()
        if real in seen:
            logger.debug("Already walked %s, skipping", entry)
            continue
        seen.add(real)
        found.extend(find_public_dirs(entry, marker, seen))
    return found


def load_documents(directory: Path, extensions: Iterable[str], output_root: Path) -> list[Document]:
    """Build Documents for the direct children of one public directory.

    Drafts, unsupported files, subdirectories and entries that disappear
    mid-scan are dropped. Any other failure is raised as RuntimeError naming
    the offending file.
    """
    extensions = list(extensions)
    docs = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        try:
            if not path.is_file():
                continue
            doc = build_document(path, extensions, output_root)
        except FileNotFoundError:
            logger.debug("Skipping vanished entry %s", path)
            continue
        except Exception as e:
            raise RuntimeError(f"Failed to load {path}: {e}") from e
        if doc is not None:
            docs.append(doc)
    return docs


def collect_documents(root: Path, marker: str, extensions: Iterable[str], output_root: Path) -> list[Document]:
    """Load every public directory under root and return documents newest first.

    The sort is stable, so documents sharing a timestamp keep discovery order.
    """
    dirs = find_public_dirs(root, marker)
    logger.info("Found %d public director%s under %s", len(dirs), "y" if len(dirs) == 1 else "ies", root)
    extensions = list(extensions)
    docs = [doc for d in dirs for doc in load_documents(d, extensions, output_root)]
    docs.sort(key=lambda doc: doc.date_time, reverse=True)
    logger.info("Loaded %d document(s)", len(docs))
    return docs
