"""
Package download utilities.

Archives are downloaded one after another and streamed straight to disk. The
first failure stops the run; files already written stay where they are.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import requests

from osac.core.document_fetcher import DocumentFetcher
from osac.core.errors import DownloadError, FetchError
from osac.core.models import Package
from osac.utils.file_manager import FileManager


CHUNK_SIZE = 64 * 1024

ProgressCallback = Callable[[int, int, Path], None]


class PackageDownloader:
    def __init__(self, fetcher: DocumentFetcher, files: FileManager):
        self.fetcher = fetcher
        self.files = files
        self.logger = logging.getLogger(__name__)

    def download(self, packages: Sequence[Package], directory: Path,
                 progress: Optional[ProgressCallback] = None) -> List[Path]:
        """
        Download packages into an existing directory.

        progress, if given, is called as (index, total, path) before each
        file is fetched. Returns the paths written, in package order.
        """
        written: List[Path] = []
        total = len(packages)
        for i, package in enumerate(packages, 1):
            path = self.files.target_path(directory, package.url)
            if progress:
                progress(i, total, path)
            self.download_one(package, path)
            written.append(path)

        self.logger.info(f"Downloaded {len(written)} packages into {directory}")
        return written

    def download_one(self, package: Package, path: Path) -> int:
        """Stream one archive to path. Returns the number of bytes written."""
        self.logger.debug(f"Downloading {package.url} -> {path}")
        size = 0
        try:
            with self.fetcher.stream(package.url) as response, open(path, 'wb') as out:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        out.write(chunk)
                        size += len(chunk)
        except FetchError as e:
            raise DownloadError(f"download: couldn't download file: {package.url} ({e})",
                                url=package.url, path=str(path)) from e
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"download: couldn't copy bytes to file: {path} ({e})",
                                url=package.url, path=str(path)) from e
        except OSError as e:
            raise DownloadError(f"download: couldn't create file: {path} ({e})",
                                url=package.url, path=str(path)) from e

        self.logger.info(f"Saved {package.name} ({size} bytes): {path.name}")
        return size
