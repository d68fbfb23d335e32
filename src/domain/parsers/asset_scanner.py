"""Scanner for embedded image references in problem rich text."""

import posixpath
import re
from collections.abc import Mapping
from urllib.parse import unquote, urlparse

from loguru import logger

# Three alternatives instead of a quote backreference: "..." / '...' / bare value.
IMG_TAG_PATTERN = re.compile(
    r"""<img[^>]*\ssrc\s*=\s*"([^"]+)"[^>]*>"""
    r"""|<img[^>]*\ssrc\s*=\s*'([^']+)'[^>]*>"""
    r"""|<img[^>]*\ssrc\s*=\s*([^\s>'"]+)[^>]*>"""
)

HASH_MODULUS = 10000
DEFAULT_BASENAME = "image"
_UNSAFE_FILENAME_CHARS = re.compile(r"[\x00-\x1f\x7f/\\]")


def _reference_of(match: re.Match) -> str:
    return match.group(1) or match.group(2) or match.group(3) or ""


def extract_references(text: str) -> list[str]:
    """
    Return every image `src` value found in text, in order of occurrence.

    Duplicates are kept; callers deduplicate.
    """
    if not text:
        return []
    return [ref for ref in map(_reference_of, IMG_TAG_PATTERN.finditer(text)) if ref]


def rewrite_references(text: str, mapping: Mapping[str, str] | None) -> str:
    """
    Replace each image tag whose reference is in mapping by the bare local path.

    Tags with unknown references are left byte-for-byte unchanged.
    """
    if not text or not mapping:
        return text

    def _replace(match: re.Match) -> str:
        reference = _reference_of(match)
        local_path = mapping.get(reference)
        if local_path is None:
            logger.debug(f"No local asset for {reference}, keeping tag")
            return match.group(0)
        return local_path

    return IMG_TAG_PATTERN.sub(_replace, text)


def reference_hash(reference: str) -> int:
    """Rolling hash of the full reference string, in [0, 10000)."""
    value = 0
    for char in reference:
        value = (value * 31 + ord(char)) % HASH_MODULUS
    return value


def local_filename(reference: str) -> str:
    """
    Build `<name>_<hash>.<ext>` for a reference.

    The hash suffix keeps same-named files from different URLs apart.
    Control characters and path separators decoded from the URL are dropped.
    """
    path = unquote(urlparse(reference).path)
    basename = posixpath.basename(path.rstrip("/"))
    basename = _UNSAFE_FILENAME_CHARS.sub("", basename).strip(". ") or DEFAULT_BASENAME
    name, ext = posixpath.splitext(basename)
    if not name:
        name, ext = basename, ""
    return f"{name}_{reference_hash(reference):04d}{ext}"
