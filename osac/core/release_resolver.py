"""
Release Listing Module

This module reads the top-level index page and extracts the releases listed
under one product section.
"""

import logging
from typing import List

from bs4 import BeautifulSoup

from osac.core.config import PRODUCTS, DEFAULT_BASE_URL
from osac.core.document_fetcher import DocumentFetcher
from osac.core.errors import UnknownProductError, MarkupError
from osac.core.models import Release
from osac.utils.naming import absolute_url
from osac.utils.validators import is_known_product


PRODUCT_SELECTOR = ".product"
PRODUCT_NAME_SELECTOR = ".product-name"
RELEASE_ANCHOR_SELECTOR = "ul > li > a"


class ReleaseResolver:
    """
    Resolves a product key into its ordered list of releases.
    
    The index page holds one '.product' section per product line; the first
    section whose '.product-name' text equals the product's display name is
    used, and each 'ul > li > a' inside it becomes a Release in document order.
    """
    
    def __init__(self, fetcher: DocumentFetcher, base_url: str = DEFAULT_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url
        self.logger = logging.getLogger(__name__)
    
    def list_releases(self, product: str) -> List[Release]:
        """
        Fetch the index page and list the releases of a product.
        
        Args:
            product: One of the recognized product keys
            
        Returns:
            Releases in document order; empty if no section matches
            
        Raises:
            UnknownProductError: If the key is not recognized
            FetchError: If the index page cannot be retrieved
            MarkupError: If a release anchor has no href
        """
        if not is_known_product(product, PRODUCTS):
            raise UnknownProductError(product)
        
        doc = self.fetcher.fetch(self.base_url)
        return self.extract_releases(doc, product)
    
    def extract_releases(self, doc: BeautifulSoup, product: str) -> List[Release]:
        """Extract the releases of a product from an already fetched index page."""
        display_name = PRODUCTS[product]
        releases: List[Release] = []
        
        for section in doc.select(PRODUCT_SELECTOR):
            if self._section_name(section) != display_name:
                continue
            
            for anchor in section.select(RELEASE_ANCHOR_SELECTOR):
                name = anchor.get_text()
                href = anchor.get('href')
                if href is None:
                    raise MarkupError(f"document: couldn't get href from: ({product}, {name})")
                releases.append(Release(product=product, release=name, url=absolute_url(self.base_url, href)))
            break
        else:
            self.logger.info(f"No product section named {display_name!r} on {self.base_url}")
        
        self.logger.info(f"Found {len(releases)} releases for {product}")
        return releases
    
    def _section_name(self, section) -> str:
        # all .product-name nodes in the section, concatenated
        return "".join(node.get_text() for node in section.select(PRODUCT_NAME_SELECTOR))
