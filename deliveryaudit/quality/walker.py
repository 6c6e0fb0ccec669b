"""
Directory walking for the code-quality scan.

Walks a source tree depth-first, skipping hidden and dependency-cache
directories, and yields (path, content) for every file the caller
wants to see. Entries are visited in name order so a given tree always
scans the same way.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Tuple
import logging
import os

logger = logging.getLogger(__name__)

DEPENDENCY_CACHE_DIR = "node_modules"
DEFAULT_EXTENSIONS = (".ts", ".js")


@dataclass
class ScanSummary:
    """What a scan saw, independent of what the detectors found."""
    root_found: bool
    files_visited: int = 0


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def default_skip_dir(name: str) -> bool:
    """Skip hidden directories and the dependency cache."""
    return is_hidden(name) or name == DEPENDENCY_CACHE_DIR


def extension_filter(extensions: Iterable[str]) -> Callable[[str], bool]:
    """Build a file-name predicate matching any of the given extensions."""
    suffixes = tuple(extensions)
    return lambda name: name.endswith(suffixes)


def read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def walk_tree(
    root: str,
    skip_dir: Callable[[str], bool] = default_skip_dir,
    visit_file: Callable[[str], bool] = extension_filter(DEFAULT_EXTENSIONS),
) -> Iterator[Tuple[str, str]]:
    """Lazily yield (path, content) for matching files under root.

    Unreadable files are skipped. A missing root yields nothing; use
    scan() when the caller needs to tell that apart from an empty tree.

    Args:
        root: Directory to walk
        skip_dir: Predicate on a directory name; True means don't descend
        visit_file: Predicate on a file name; True means read and yield it

    Yields:
        (path, content) tuples, path joined onto root
    """
    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        logger.debug(f"Cannot list {root}: {e}")
        return

    for entry in entries:
        path = os.path.join(root, entry.name)

        if entry.is_dir(follow_symlinks=False):
            if not skip_dir(entry.name):
                yield from walk_tree(path, skip_dir, visit_file)
            continue

        if not visit_file(entry.name):
            continue

        try:
            content = read_source(path)
        except OSError as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            continue

        yield path, content


def scan(
    root: str,
    extensions: Iterable[str],
    visit: Callable[[str, str], None],
) -> ScanSummary:
    """Call visit(path, content) for every matching, readable file under root.

    Args:
        root: Directory to scan
        extensions: File extensions to include, e.g. (".ts", ".js")
        visit: Callback invoked once per file, in traversal order

    Returns:
        ScanSummary; root_found is False when root is not a directory
    """
    if not os.path.isdir(root):
        logger.warning(f"Scan root not found: {root}")
        return ScanSummary(root_found=False)

    summary = ScanSummary(root_found=True)
    for path, content in walk_tree(root, default_skip_dir, extension_filter(extensions)):
        visit(path, content)
        summary.files_visited += 1

    return summary
