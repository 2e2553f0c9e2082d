from typing import Dict, Optional, Set

import pytest

from syslinuxcfg.errors import NotFound, TransportError


class FakeHandle:
    """Stands in for a lazily fetched kernel/initrd."""

    def __init__(self, url: str, data: bytes):
        self.url = url
        self._data = data

    def read_at(self, offset: int, size: int) -> bytes:
        return self._data[offset:offset + size]

    def __str__(self) -> str:
        return self.url


class FakeFetcher:
    """In-memory fetcher keyed by absolute URL. Records every URL requested."""

    def __init__(self, files: Optional[Dict[str, str]] = None, broken: Optional[Set[str]] = None):
        self.files: Dict[str, bytes] = {k: v.encode() for k, v in (files or {}).items()}
        self.broken = set(broken or ())
        self.fetched = []
        self.lazy_fetched = []

    def _lookup(self, url: str) -> bytes:
        if url in self.broken:
            raise TransportError(url, "connection reset")
        if url not in self.files:
            raise NotFound(url, "no such file")
        return self.files[url]

    def fetch(self, url: str) -> bytes:
        self.fetched.append(url)
        return self._lookup(url)

    def lazy_fetch(self, url: str) -> FakeHandle:
        self.lazy_fetched.append(url)
        return FakeHandle(url, self._lookup(url))


@pytest.fixture
def make_fetcher():
    return FakeFetcher
