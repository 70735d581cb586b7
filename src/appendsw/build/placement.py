"""Decide where the custom code goes and write it there."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from appendsw.core.exceptions import FileIOError
from appendsw.core.schema import Mode

log = logging.getLogger(__name__)

#: Service worker generated by the app build; target of ``replace`` and the default append.
BUILD_SW_FILE_PATH = PurePath("build", "service-worker.js")

#: Directory receiving the file in ``dev`` mode.
DEV_DIR = "public"

#: Directory receiving the file in ``build`` mode.
BUILD_DIR = "build"


def resolve_target(mode: Mode, entry: str | PurePath) -> PurePath:
    """Return the target path, relative to the project root, for ``mode`` and the entry file.

    Pure: depends only on the mode and the entry's base name.
    """
    basename = PurePath(entry).name
    if mode is Mode.DEV:
        return PurePath(DEV_DIR, basename)
    if mode is Mode.BUILD:
        return PurePath(BUILD_DIR, basename)
    return BUILD_SW_FILE_PATH


def join_code(existing: str, content: str) -> str:
    """Append ``content`` after ``existing`` on a new line.

    The separator newline is not doubled when ``existing`` already ends with one.
    """
    if existing.endswith("\n"):
        return existing + content
    return existing + "\n" + content


def read_text(path: Path) -> str:
    """Read a whole file as UTF-8; raise FileIOError on any failure."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FileIOError(f"Cannot read {path}: {e.strerror or e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise FileIOError(f"Cannot read {path}: not valid UTF-8 ({e.reason})", path=str(path)) from e


def write_text(path: Path, content: str) -> None:
    """Overwrite a file with UTF-8 text; raise FileIOError on any failure."""
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileIOError(f"Cannot write {path}: {e.strerror or e}", path=str(path)) from e


def place(content: str, entry: str | PurePath, mode: Mode, root: Path | None = None) -> Path:
    """Write ``content`` to the target chosen by ``mode`` and return the target path.

    ``dev``, ``build`` and ``replace`` overwrite the target. The default mode
    reads the existing service worker and appends to it; a failed read
    raises before anything is written.
    """
    target = Path(root or Path.cwd()) / resolve_target(mode, entry)
    if mode is Mode.DEFAULT:
        existing = read_text(target)
        log.debug("Appending %d chars to %s (%d chars)", len(content), target, len(existing))
        write_text(target, join_code(existing, content))
    else:
        log.debug("Writing %d chars to %s", len(content), target)
        write_text(target, content)
    return target
