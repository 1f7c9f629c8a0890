"""
File Selector
=============
Builds the ordered list of files to lint under one site's content root.

Selection rules:
    1. Every file with a lintable extension, walked recursively.
    2. Everything under the reserved subdirectory (cms/includes) is removed.
    3. Files directly inside the reserved subdirectory whose name starts with
       the inline prefix (case-insensitive) are added back.

The reserved subdirectory holds server-side template fragments. Only the
inline_ ones are plain JavaScript; the rest mix template syntax in and
would only produce noise.

Ordering is deterministic: directories and files are visited in sorted
order, and re-included inline files are appended last, sorted by name.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, List

from sitelint.core.config import INLINE_PREFIX, LINT_EXTENSIONS, RESERVED_SUBDIR

logger = logging.getLogger(__name__)


def _has_lint_extension(fname: str, extensions: Iterable[str]) -> bool:
    return fname.lower().endswith(tuple(extensions))


def discover_source_files(root: str, extensions: Iterable[str] = LINT_EXTENSIONS) -> List[str]:
    """
    Recursively walk root, returning absolute paths of lintable files.
    Directories and files are visited in sorted order.
    """
    found: list[str] = []
    for dirpath, dirs, files in os.walk(root):
        # Sort in-place so os.walk descends deterministically
        dirs.sort()
        for fname in sorted(files):
            if _has_lint_extension(fname, extensions):
                found.append(os.path.abspath(os.path.join(dirpath, fname)))
    return found


def _is_within(path: str, directory: str) -> bool:
    try:
        Path(path).relative_to(directory)
        return True
    except ValueError:
        return False


def inline_files(
    reserved_dir: str,
    prefix: str = INLINE_PREFIX,
    extensions: Iterable[str] = LINT_EXTENSIONS,
) -> List[str]:
    """Files directly inside reserved_dir (non-recursive) named with the inline prefix."""
    prefix = prefix.lower()
    selected: list[str] = []
    for entry in sorted(os.listdir(reserved_dir)):
        full = os.path.join(reserved_dir, entry)
        if not os.path.isfile(full):
            continue
        if entry.lower().startswith(prefix) and _has_lint_extension(entry, extensions):
            selected.append(os.path.abspath(full))
    return selected


def select_files(
    root: str,
    reserved_subdir: str = RESERVED_SUBDIR,
    prefix: str = INLINE_PREFIX,
    extensions: Iterable[str] = LINT_EXTENSIONS,
) -> List[str]:
    """
    Produce the candidate file set for one site's content root.

    Parameters
    ----------
    root : str
        The site's www directory. Callers skip sites where it is missing.
    reserved_subdir : str
        Relative path (forward slashes) of the override directory under root.
    prefix : str
        Filename prefix that re-includes a file from the override directory.
    extensions : Iterable[str]
        Lowercase extensions, leading dot included.

    Returns
    -------
    List[str]
        Absolute file paths. Empty means nothing to lint.
    """
    extensions = tuple(extensions)
    files = discover_source_files(root, extensions)

    reserved_dir = os.path.abspath(os.path.join(root, *reserved_subdir.split("/")))
    if not os.path.isdir(reserved_dir):
        return files

    kept = [f for f in files if not _is_within(f, reserved_dir)]
    readded = inline_files(reserved_dir, prefix, extensions)
    logger.debug(
        "%s: dropped %d file(s) under %s, re-included %d inline file(s)",
        root, len(files) - len(kept), reserved_subdir, len(readded),
    )
    return kept + readded
