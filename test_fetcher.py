#!/usr/bin/env python3
"""
Tests for the document fetcher, file manager and package downloader.

The HTTP session is replaced with unittest.mock objects, so nothing here
touches the network.
"""

from pathlib import Path
from unittest import mock

import pytest
import requests
from bs4 import ParserRejectedMarkup

from osac.core.document_fetcher import DocumentFetcher
from osac.core.downloader import PackageDownloader
from osac.core.errors import DocumentParseError, DownloadError, HTTPStatusError, TransportError
from osac.core.models import Package
from osac.utils.file_manager import FileManager
from osac.utils.naming import release_directory_name, url_filename

BASE = "https://opensource.apple.com"


def make_response(status_code=200, content=b"", chunks=None):
    response = mock.MagicMock()
    response.status_code = status_code
    response.content = content
    response.iter_content.return_value = iter(chunks or [])
    response.__enter__.return_value = response
    return response


def make_fetcher(*responses, **kwargs):
    session = mock.MagicMock()
    session.get.side_effect = list(responses)
    return DocumentFetcher(session=session, **kwargs), session


def make_package(path, name="bash"):
    return Package(name=name, version="1.0", updated=False, url=BASE + path)


# --- fetcher ---

def test_fetch_parses_html():
    response = make_response(content=b'<div class="product"><p class="product-name">macOS</p></div>')
    fetcher, session = make_fetcher(response, timeout=5)

    doc = fetcher.fetch(BASE)

    assert doc.select_one(".product-name").get_text() == "macOS"
    session.get.assert_called_once_with(BASE, timeout=5, stream=False)
    response.__exit__.assert_called_once()


def test_fetch_sets_user_agent():
    fetcher, session = make_fetcher(user_agent="osac-test/0")
    session.headers.update.assert_called_once()
    headers = session.headers.update.call_args[0][0]
    assert headers['User-Agent'] == "osac-test/0"


def test_fetch_non_200_status():
    response = make_response(status_code=404)
    fetcher, _ = make_fetcher(response)

    with pytest.raises(HTTPStatusError) as excinfo:
        fetcher.fetch(BASE + "/missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == BASE + "/missing"
    response.close.assert_called_once()


def test_fetch_only_accepts_200():
    fetcher, _ = make_fetcher(make_response(status_code=204))
    with pytest.raises(HTTPStatusError):
        fetcher.fetch(BASE)


def test_fetch_transport_failure():
    fetcher, _ = make_fetcher(requests.exceptions.ConnectionError("connection refused"))
    with pytest.raises(TransportError) as excinfo:
        fetcher.fetch(BASE)
    assert "connection refused" in str(excinfo.value)


def test_fetch_parse_failure():
    fetcher, _ = make_fetcher(make_response(content=b"\x00"))
    with mock.patch("osac.core.document_fetcher.BeautifulSoup",
                    side_effect=ParserRejectedMarkup("rejected")):
        with pytest.raises(DocumentParseError):
            fetcher.fetch(BASE)


def test_fetcher_context_manager_closes_session():
    fetcher, session = make_fetcher()
    with fetcher:
        pass
    session.close.assert_called_once()


# --- naming / file manager ---

def test_url_filename():
    assert url_filename(BASE + "/tarballs/bash/bash-3.2.tar.gz") == "bash-3.2.tar.gz"
    assert url_filename(BASE + "/dl/zlib.tar.gz?mirror=1#x") == "zlib.tar.gz"
    assert url_filename(BASE + "/dl/") == ""


def test_release_directory_name():
    assert release_directory_name("mac", "10.15") == "mac-10.15"


def test_create_release_directory(tmp_path):
    files = FileManager(str(tmp_path))

    path = files.create_release_directory("mac", "10.15")

    assert path == (tmp_path / "mac-10.15").absolute()
    assert path.is_dir()


def test_create_release_directory_refuses_existing(tmp_path):
    (tmp_path / "mac-10.15").mkdir()
    with pytest.raises(DownloadError) as excinfo:
        FileManager(str(tmp_path)).create_release_directory("mac", "10.15")
    assert "already exists" in str(excinfo.value)


def test_create_release_directory_missing_parent(tmp_path):
    with pytest.raises(DownloadError):
        FileManager(str(tmp_path / "nope")).create_release_directory("mac", "10.15")


def test_target_path_without_filename(tmp_path):
    files = FileManager(str(tmp_path))
    assert files.target_path(tmp_path, BASE + "/a/b.tar.gz") == tmp_path / "b.tar.gz"
    with pytest.raises(DownloadError):
        files.target_path(tmp_path, BASE + "/a/")


# --- downloader ---

def test_download_streams_each_package(tmp_path):
    fetcher, session = make_fetcher(
        make_response(chunks=[b"abc", b"", b"def"]),
        make_response(chunks=[b"zlib"]),
    )
    files = FileManager(str(tmp_path))
    downloader = PackageDownloader(fetcher, files)
    progress = mock.Mock()
    packages = [make_package("/t/bash-3.2.tar.gz"), make_package("/t/zlib.tar.gz", "zlib")]

    written = downloader.download(packages, tmp_path, progress=progress)

    assert written == [tmp_path / "bash-3.2.tar.gz", tmp_path / "zlib.tar.gz"]
    assert (tmp_path / "bash-3.2.tar.gz").read_bytes() == b"abcdef"
    assert (tmp_path / "zlib.tar.gz").read_bytes() == b"zlib"
    assert progress.call_args_list == [
        mock.call(1, 2, tmp_path / "bash-3.2.tar.gz"),
        mock.call(2, 2, tmp_path / "zlib.tar.gz"),
    ]
    session.get.assert_any_call(BASE + "/t/zlib.tar.gz", timeout=None, stream=True)


def test_download_stops_at_first_failure(tmp_path):
    fetcher, session = make_fetcher(
        make_response(chunks=[b"ok"]),
        make_response(status_code=500),
        make_response(chunks=[b"never"]),
    )
    downloader = PackageDownloader(fetcher, FileManager(str(tmp_path)))
    packages = [make_package("/a.tar.gz"), make_package("/b.tar.gz"), make_package("/c.tar.gz")]

    with pytest.raises(DownloadError) as excinfo:
        downloader.download(packages, tmp_path)

    assert excinfo.value.url == BASE + "/b.tar.gz"
    assert (tmp_path / "a.tar.gz").read_bytes() == b"ok"
    assert not (tmp_path / "c.tar.gz").exists()
    assert session.get.call_count == 2


def test_download_interrupted_stream(tmp_path):
    response = make_response()
    response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("reset")
    fetcher, _ = make_fetcher(response)
    downloader = PackageDownloader(fetcher, FileManager(str(tmp_path)))

    with pytest.raises(DownloadError) as excinfo:
        downloader.download_one(make_package("/a.tar.gz"), tmp_path / "a.tar.gz")

    assert excinfo.value.path == str(tmp_path / "a.tar.gz")


def test_download_unwritable_target(tmp_path):
    fetcher, _ = make_fetcher(make_response(chunks=[b"x"]))
    downloader = PackageDownloader(fetcher, FileManager(str(tmp_path)))

    with pytest.raises(DownloadError):
        downloader.download_one(make_package("/a.tar.gz"), Path(tmp_path / "missing" / "a.tar.gz"))
