"""
Resource fetching abstraction.

The parser never opens files or sockets itself. It asks a Fetcher for config
text (eager) and for kernel/initrd handles (lazy), so tests can inject an
in-memory fetcher instead of touching disk or network.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Protocol
from urllib.parse import unquote, urlsplit

import httpx

from .errors import NotFound, TransportError, UnsupportedScheme


class ResourceHandle(Protocol):
    """Random-access view of a resource. Reads are independent and repeatable."""

    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to `size` bytes starting at `offset`; b"" past the end."""
        ...


class Fetcher(Protocol):
    """Protocol for fetching resources by URL."""

    def fetch(self, url: str) -> bytes:
        """Return the full content. Raises NotFound or TransportError."""
        ...

    def lazy_fetch(self, url: str) -> ResourceHandle:
        """Return a handle without reading the content. Raises NotFound or TransportError."""
        ...


def _local_path(url: str) -> Path:
    return Path(unquote(urlsplit(url).path))


class LazyFile:
    """Local file handle; the file is opened per read, never buffered whole."""

    def __init__(self, url: str, path: Path):
        self.url = url
        self.path = path

    def read_at(self, offset: int, size: int) -> bytes:
        try:
            fd = os.open(self.path, os.O_RDONLY)
        except FileNotFoundError as exc:
            raise NotFound(self.url, str(exc)) from exc
        except OSError as exc:
            raise TransportError(self.url, str(exc)) from exc
        try:
            return os.pread(fd, size, offset)
        finally:
            os.close(fd)

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        return f"LazyFile({self.url!r})"


class FileFetcher:
    """Serves file:// URLs and bare paths from the local filesystem."""

    def fetch(self, url: str) -> bytes:
        path = _local_path(url)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFound(url, str(exc)) from exc
        except (PermissionError, OSError) as exc:
            raise TransportError(url, str(exc)) from exc

    def lazy_fetch(self, url: str) -> LazyFile:
        path = _local_path(url)
        try:
            if not path.is_file():
                raise NotFound(url, "no such file")
        except (PermissionError, OSError) as exc:
            raise TransportError(url, str(exc)) from exc
        return LazyFile(url, path)


class HttpResource:
    """HTTP handle reading byte ranges on demand."""

    def __init__(self, url: str, client: httpx.Client):
        self.url = url
        self._client = client

    def read_at(self, offset: int, size: int) -> bytes:
        if size <= 0:
            return b""
        headers = {"Range": f"bytes={offset}-{offset + size - 1}"}
        try:
            r = self._client.get(self.url, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(self.url, str(exc)) from exc
        if r.status_code == 416:
            return b""
        _check_status(self.url, r)
        if r.status_code == 206:
            return r.content[:size]
        # Server ignored the Range header and sent everything
        return r.content[offset:offset + size]

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        return f"HttpResource({self.url!r})"


def _check_status(url: str, r: httpx.Response) -> None:
    if r.status_code in (404, 410):
        raise NotFound(url, f"HTTP {r.status_code}")
    if r.status_code >= 400:
        raise TransportError(url, f"HTTP {r.status_code}")


class HttpFetcher:
    """Serves http:// and https:// URLs through an httpx client."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30.0):
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, url: str) -> bytes:
        try:
            r = self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc)) from exc
        _check_status(url, r)
        return r.content

    def lazy_fetch(self, url: str) -> HttpResource:
        try:
            r = self._client.head(url)
            if r.status_code in (405, 501):
                # Server refuses HEAD; ask for the first byte instead
                r = self._client.get(url, headers={"Range": "bytes=0-0"})
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc)) from exc
        if r.status_code != 416:
            _check_status(url, r)
        return HttpResource(url, self._client)

    def close(self) -> None:
        self._client.close()


class Schemes:
    """Fetcher that dispatches on the URL scheme."""

    def __init__(self, fetchers: Optional[Dict[str, Fetcher]] = None):
        self.fetchers: Dict[str, Fetcher] = dict(fetchers or {})

    def register(self, scheme: str, fetcher: Fetcher) -> None:
        self.fetchers[scheme.lower()] = fetcher

    def _get(self, url: str) -> Fetcher:
        scheme = urlsplit(url).scheme.lower()
        fetcher = self.fetchers.get(scheme)
        if fetcher is None:
            raise UnsupportedScheme(url, f"no fetcher for scheme {scheme!r}")
        return fetcher

    def fetch(self, url: str) -> bytes:
        return self._get(url).fetch(url)

    def lazy_fetch(self, url: str) -> ResourceHandle:
        return self._get(url).lazy_fetch(url)

    def close(self) -> None:
        """Close every registered fetcher that holds a connection."""
        for fetcher in set(self.fetchers.values()):
            close = getattr(fetcher, "close", None)
            if close is not None:
                close()


def default_schemes(http_timeout: float = 30.0) -> Schemes:
    """File and HTTP(S) fetchers; scheme-less references are local paths."""
    local = FileFetcher()
    web = HttpFetcher(timeout=http_timeout)
    return Schemes({
        "": local,
        "file": local,
        "http": web,
        "https": web,
    })
