"""
Relative reference resolution against a working-directory URL.

Absolute references (anything with a scheme) are returned untouched. A
scheme-less reference inherits the working directory's scheme, and, when it
also names no host, its host and path prefix.
"""

import posixpath
import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from .errors import MalformedReference

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _clean(path: str) -> str:
    """Lexical cleanup: collapse separators, drop `.`, fold `..`."""
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    # normpath keeps a leading "//" (POSIX allows it); a URL path should not
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _join(base: str, ref: str) -> str:
    parts = [p for p in (base, ref) if p]
    if not parts:
        return ""
    return _clean("/".join(parts))


def resolve(reference: str, working_directory: Optional[str] = None) -> str:
    """Turn `reference` into an absolute URL using `working_directory` as its base."""
    if _CONTROL_CHARS.search(reference):
        raise MalformedReference(reference, "invalid control character in URL")
    if _BAD_ESCAPE.search(reference):
        raise MalformedReference(reference, "invalid URL escape")
    try:
        u = urlsplit(reference)
    except ValueError as exc:
        raise MalformedReference(reference, str(exc)) from exc

    if u.scheme or working_directory is None:
        return reference

    try:
        wd = urlsplit(working_directory)
    except ValueError as exc:
        raise MalformedReference(working_directory, str(exc)) from exc

    netloc = u.netloc
    path = u.path
    if not netloc:
        # Just a path
        netloc = wd.netloc
        path = _join(wd.path, _clean(u.path))
    return urlunsplit((wd.scheme, netloc, path, u.query, u.fragment))


def directory_of(url: str) -> Optional[str]:
    """The URL of the directory holding `url`, or None when there is nothing to rebase on."""
    u = urlsplit(url)
    dirname = posixpath.dirname(u.path)
    if not u.scheme and not u.netloc and not dirname:
        return None
    return urlunsplit((u.scheme, u.netloc, dirname, "", ""))


def file_url(path: str) -> str:
    """file:// URL for a local filesystem path."""
    return urlunsplit(("file", "", quote(str(path)), "", ""))
