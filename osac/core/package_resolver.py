"""
Package Listing Module

This module resolves a (product, release) pair to the release detail page and
extracts one Package per downloadable project row.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from osac.core.document_fetcher import DocumentFetcher
from osac.core.errors import UnknownReleaseError, UnknownPackageError, MarkupError
from osac.core.models import Release, Package
from osac.core.release_resolver import ReleaseResolver
from osac.utils.naming import absolute_url, split_project_name


PROJECT_ROW_SELECTOR = ".project-row"
PROJECT_NAME_SELECTOR = ".project-name"
PROJECT_DOWNLOADS_SELECTOR = ".project-downloads"
UPDATED_CLASS = "newproject"


class PackageResolver:
    """
    Resolves a release into the packages listed on its detail page.
    
    Each '.project-row' with a link inside its '.project-name' element yields
    a Package; rows without that link have nothing to download and are skipped.
    """
    
    def __init__(self, fetcher: DocumentFetcher, releases: ReleaseResolver):
        self.fetcher = fetcher
        self.releases = releases
        self.base_url = releases.base_url
        self.logger = logging.getLogger(__name__)
    
    def find_release(self, product: str, release: str) -> Release:
        """
        Look up a release by its exact display name.
        
        Raises:
            UnknownReleaseError: If no release of the product has that name
        """
        for candidate in self.releases.list_releases(product):
            if candidate.release == release:
                return candidate
        raise UnknownReleaseError(product, release)
    
    def list_packages(self, product: str, release: str) -> List[Package]:
        """
        List the packages of a release.
        
        Two fetches per call: the index page (to find the release URL) and
        the release detail page.
        
        Args:
            product: One of the recognized product keys
            release: Release display name as listed by ReleaseResolver
            
        Returns:
            Packages in row order
            
        Raises:
            UnknownProductError: If the product key is not recognized
            UnknownReleaseError: If the release is not listed for the product
            FetchError: If either page cannot be retrieved
            MarkupError: If a qualifying row has no download href
        """
        target = self.find_release(product, release)
        self.logger.debug(f"Release {release!r} of {product} resolved to {target.url}")
        doc = self.fetcher.fetch(target.url)
        return self.extract_packages(doc)
    
    def extract_packages(self, doc: BeautifulSoup) -> List[Package]:
        """Extract packages from an already fetched release detail page."""
        packages: List[Package] = []
        skipped = 0
        
        for row in doc.select(PROJECT_ROW_SELECTOR):
            package = self._parse_row(row)
            if package is None:
                skipped += 1
                continue
            packages.append(package)
        
        self.logger.info(f"Found {len(packages)} packages ({skipped} rows without a project link)")
        return packages
    
    def find_package(self, product: str, release: str, name: str) -> Package:
        """
        Look up a single package of a release by name.
        
        Raises:
            UnknownPackageError: If no package carries that name
        """
        for package in self.list_packages(product, release):
            if package.name == name:
                return package
        raise UnknownPackageError(product, release, name)
    
    def _parse_row(self, row) -> Optional[Package]:
        name_nodes = row.select(PROJECT_NAME_SELECTOR)
        links = [a for node in name_nodes for a in node.select("a")]
        if not links:
            return None
        
        updated = any(UPDATED_CLASS in (node.get('class') or []) for node in name_nodes)
        label = "".join(a.get_text() for a in links).strip()
        name, version = split_project_name(label)
        
        href = self._download_href(row)
        if href is None:
            raise MarkupError(f"document: couldn't find href in downloads of: {name}")
        
        return Package(name=name, version=version, updated=updated, url=absolute_url(self.base_url, href))
    
    def _download_href(self, row) -> Optional[str]:
        for node in row.select(PROJECT_DOWNLOADS_SELECTOR):
            anchor = node.find('a')
            if anchor is not None:
                return anchor.get('href')
        return None
