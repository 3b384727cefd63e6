from __future__ import annotations

import re
from typing import Any

from reproducible_onyxia.config.resolver import lookup, stringify
from reproducible_onyxia.defaults import DOCUMENT_BLOCK_KEY, UNKNOWN_CHAPTER, UNVERSIONED

_PATH_SEPARATORS_RE = re.compile(r"[/\\]")
_NON_ALNUM_RUN_RE = re.compile(r"[^a-z0-9]+")


def _name_from_path(current_file_path: str | None) -> str | None:
    if not current_file_path:
        return None
    base = _PATH_SEPARATORS_RE.split(str(current_file_path))[-1]
    stem, dot, _ext = base.rpartition(".")
    name = stem if dot and stem else base
    return name or None


def slugify_title(title: str) -> str:
    return _NON_ALNUM_RUN_RE.sub("-", title.lower()).strip("-")


def extract_chapter_name(document_meta: Any, current_file_path: str | None) -> str:
    """Derive the chapter identifier used in the launcher URL.

    Order: explicit ``reproducible.chapter-name``, input file stem, slugified
    document title, then ``unknown-chapter``.
    """

    explicit = lookup(lookup(document_meta, DOCUMENT_BLOCK_KEY), "chapter-name")
    if explicit is not None:
        text = stringify(explicit)
        if text:
            return text

    from_path = _name_from_path(current_file_path)
    if from_path:
        return from_path

    title = lookup(document_meta, "title")
    if title is not None:
        slug = slugify_title(stringify(title))
        if slug:
            return slug

    return UNKNOWN_CHAPTER


def normalize_version(raw: str | None) -> str:
    # Every dot becomes a hyphen, including build metadata (lossy on purpose).
    if raw is None:
        return UNVERSIONED
    return raw.replace(".", "-")
