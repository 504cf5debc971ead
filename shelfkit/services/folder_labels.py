"""
Folder labels for the file browser.

Decides which menu entries are eligible for transliteration reversal and
produces their display text. Only directories are converted; the virtual
"Collections" folder keeps its name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import get_settings
from .translit import TransliterationReverter, get_reverter

logger = logging.getLogger(__name__)


@dataclass
class FolderEntry:
    """A file browser entry as the host menu sees it."""
    text: str
    path: Optional[str] = None
    file: Optional[str] = None
    is_file: bool = False
    is_collections_entry: bool = False


def is_virtual_collections_entry(
    entry: FolderEntry | None,
    text: str | None = None,
    *,
    segment: str | None = None,
) -> bool:
    """True for the injected "Collections" folder (flag, path or text marker)."""
    if entry is None:
        return False
    if entry.is_collections_entry:
        return True
    segment = segment or get_settings().collections_segment
    if entry.path and segment in entry.path:
        return True
    if text and segment in text:
        return True
    return False


def is_directory_entry(
    entry: FolderEntry | None,
    text: str | None = None,
    *,
    check_filesystem: bool = True,
) -> bool:
    """
    Directory check in host order: trailing slash, explicit file flag,
    then the filesystem via ``path`` or ``file``.

    With ``check_filesystem=False`` only the slash and the flag count.
    The HTTP gateway passes False: client-supplied paths are never stat-ed.
    """
    if entry is None:
        return False
    text = entry.text if text is None else text
    if text.endswith("/"):
        return True
    if entry.is_file:
        return False
    target = entry.path or entry.file
    if target and check_filesystem:
        return Path(target).is_dir()
    return False


def folder_label(
    entry: FolderEntry,
    reverter: TransliterationReverter | None = None,
    *,
    check_filesystem: bool = True,
) -> str:
    """Display text for an entry, reverted to Cyrillic when eligible."""
    text = entry.text
    if not text:
        return text
    if not is_directory_entry(entry, text, check_filesystem=check_filesystem):
        return text
    if is_virtual_collections_entry(entry, text):
        logger.debug("Skipping virtual collections entry: %r", text)
        return text
    reverter = reverter or get_reverter()
    return reverter.convert(text).converted


def sort_folder_names(
    names: Iterable[str],
    reverter: TransliterationReverter | None = None,
) -> List[str]:
    """Sort names so transliterated and Cyrillic entries interleave."""
    reverter = reverter or get_reverter()
    return reverter.sort_names(names)
