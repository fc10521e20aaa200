"""Shared fixtures: an offline fetcher serving canned index and release pages."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, List

import pytest
from bs4 import BeautifulSoup

from osac.core.config import DEFAULT_BASE_URL
from osac.core.errors import HTTPStatusError

BASE = DEFAULT_BASE_URL

INDEX_HTML = """
<html><body>
<div class="product">
  <h2 class="product-name">iOS</h2>
  <ul><li><a href="/release/ios-130.html">13.0</a></li></ul>
</div>
<div class="product">
  <h2 class="product-name">macOS</h2>
  <ul>
    <li><a href="/release/10.15/">10.15</a></li>
    <li><a href="/release/10.14/">10.14</a></li>
  </ul>
</div>
<div class="product">
  <h2 class="product-name">macOS</h2>
  <ul><li><a href="/release/shadowed/">shadowed</a></li></ul>
</div>
<div class="product">
  <h2 class="product-name">Developer Tools</h2>
  <ul></ul>
</div>
</body></html>
"""

RELEASE_HTML = """
<html><body>
<table>
  <tr class="project-row">
    <td class="project-name"><a href="/source/bash/">bash-3.2</a></td>
    <td class="project-downloads"><a href="/tarballs/bash/bash-3.2.tar.gz">tar.gz</a></td>
  </tr>
  <tr class="project-row">
    <td class="project-name">Projects</td>
    <td class="project-downloads">Downloads</td>
  </tr>
  <tr class="project-row">
    <td class="project-name newproject"><a href="/source/zlib/">
      zlib-1.2.11
    </a></td>
    <td class="project-downloads"><a href="/tarballs/zlib/zlib-1.2.11.tar.gz">tar.gz</a></td>
  </tr>
  <tr class="project-row">
    <td class="project-name"><a href="/source/apache_mod/">apache-mod-1.3</a></td>
    <td class="project-downloads"><a href="/tarballs/apache_mod/apache_mod.tar.gz">tar.gz</a></td>
  </tr>
</table>
</body></html>
"""

DOWNLOADS = {
    BASE + "/tarballs/bash/bash-3.2.tar.gz": [b"bash-", b"archive"],
    BASE + "/tarballs/zlib/zlib-1.2.11.tar.gz": [b"zlib archive"],
    BASE + "/tarballs/apache_mod/apache_mod.tar.gz": [b"apache", b"", b" archive"],
}


class FakeStreamResponse:
    def __init__(self, chunks: List[bytes]):
        self.chunks = chunks

    def iter_content(self, chunk_size=1):
        return iter(self.chunks)


class FakeFetcher:
    """Stands in for DocumentFetcher; serves pages and downloads from dicts."""

    def __init__(self, pages: Dict[str, str], downloads: Dict[str, List[bytes]] = None):
        self.pages = dict(pages)
        self.downloads = dict(downloads or {})
        self.calls: List[str] = []
        self.closed = False

    def fetch(self, url: str) -> BeautifulSoup:
        self.calls.append(url)
        if url not in self.pages:
            raise HTTPStatusError(url, 404)
        return BeautifulSoup(self.pages[url], 'lxml')

    @contextmanager
    def stream(self, url: str):
        self.calls.append(url)
        if url not in self.downloads:
            raise HTTPStatusError(url, 404)
        yield FakeStreamResponse(self.downloads[url])

    def close(self):
        self.closed = True


@pytest.fixture
def site_pages() -> Dict[str, str]:
    return {
        BASE: INDEX_HTML,
        BASE + "/release/10.15/": RELEASE_HTML,
        BASE + "/release/10.14/": "<html><body><p>no projects</p></body></html>",
    }


@pytest.fixture
def fake_fetcher(site_pages) -> FakeFetcher:
    return FakeFetcher(site_pages, DOWNLOADS)
