"""
osac Orchestrator: wires the fetcher, resolvers and downloader together for
the list and get commands.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .config import RunConfig, PRODUCTS
from .document_fetcher import DocumentFetcher
from .downloader import PackageDownloader
from .models import Release, Package
from .package_resolver import PackageResolver
from .release_resolver import ReleaseResolver
from osac.utils.file_manager import FileManager


class OsacController:
    def __init__(self, config: RunConfig, fetcher: Optional[DocumentFetcher] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.fetcher = fetcher or DocumentFetcher(user_agent=config.user_agent, timeout=config.timeout)
        self.releases = ReleaseResolver(self.fetcher, config.base_url)
        self.packages = PackageResolver(self.fetcher, self.releases)
        self.files = FileManager(config.output_dir)
        self.downloader = PackageDownloader(self.fetcher, self.files)

    def list_products(self) -> List[str]:
        """Recognized product keys; no network access."""
        return list(PRODUCTS)

    def list_releases(self, product: str) -> List[Release]:
        return self.releases.list_releases(product)

    def list_packages(self, product: str, release: str) -> List[Package]:
        return self.packages.list_packages(product, release)

    def get(self, product: str, release: str, package: Optional[str] = None,
            progress: Optional[Callable[[int, int, Path], None]] = None) -> List[Path]:
        """
        Download every package of a release, or only the one named `package`,
        into '<output_dir>/<product>-<release>'.

        The directory is created only once the listing has resolved, so usage
        errors leave nothing behind.
        """
        if package is None:
            selected = self.packages.list_packages(product, release)
        else:
            selected = [self.packages.find_package(product, release, package)]

        self.logger.info(f"Downloading {len(selected)} packages of {product} {release}")
        directory = self.files.create_release_directory(product, release)
        return self.downloader.download(selected, directory, progress=progress)

    def close(self):
        self.fetcher.close()

    def __enter__(self) -> "OsacController":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
