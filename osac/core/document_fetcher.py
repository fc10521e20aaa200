"""
Document Fetcher Module

This module performs the single GET requests the resolvers and the downloader
need and turns HTML responses into queryable BeautifulSoup trees.
"""

from contextlib import contextmanager
from typing import Iterator, Optional
import logging

import requests
from bs4 import BeautifulSoup, ParserRejectedMarkup

from osac.core.config import DEFAULT_USER_AGENT
from osac.core.errors import TransportError, HTTPStatusError, DocumentParseError


class DocumentFetcher:
    """
    Fetches pages from the release index site.
    
    One GET per call, no retries and no caching: every listing re-fetches
    the page it needs. Failures are raised as FetchError subclasses:
    - TransportError for network failures
    - HTTPStatusError for any status other than 200
    - DocumentParseError when the body cannot be parsed
    """
    
    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.
        
        Args:
            user_agent: User-Agent header sent with every request
            timeout: Per-request timeout in seconds (None keeps the transport default)
            session: Existing session to use instead of creating one
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)
        
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })
    
    def fetch(self, url: str) -> BeautifulSoup:
        """
        Retrieve an HTML page and parse it.
        
        Args:
            url: Absolute URL of the page
            
        Returns:
            Parsed document tree
            
        Raises:
            TransportError: If the request fails
            HTTPStatusError: If the status code is not 200
            DocumentParseError: If the body cannot be parsed as HTML
        """
        self.logger.debug(f"Fetching document: {url}")
        
        with self._get(url, stream=False) as response:
            body = response.content
        
        try:
            doc = BeautifulSoup(body, 'lxml')
        except (ParserRejectedMarkup, ValueError) as e:
            self.logger.error(f"Couldn't parse document from {url}: {e}")
            raise DocumentParseError(url, str(e)) from e
        
        self.logger.info(f"Fetched {len(body)} bytes from {url}")
        return doc
    
    @contextmanager
    def stream(self, url: str) -> Iterator[requests.Response]:
        """
        Open a streaming GET for a binary download.
        
        The response is closed when the block exits, on success or error.
        
        Raises:
            TransportError: If the request fails
            HTTPStatusError: If the status code is not 200
        """
        self.logger.debug(f"Streaming: {url}")
        with self._get(url, stream=True) as response:
            yield response
    
    def _get(self, url: str, stream: bool) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout, stream=stream)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error for {url}: {e}")
            raise TransportError(url, str(e)) from e
        
        if response.status_code != 200:
            response.close()
            self.logger.error(f"HTTP error {response.status_code} for {url}")
            raise HTTPStatusError(url, response.status_code)
        
        return response
    
    def close(self):
        """Close the HTTP session."""
        self.session.close()
        self.logger.debug("Document fetcher session closed")
    
    def __enter__(self) -> "DocumentFetcher":
        return self
    
    def __exit__(self, exc_type, exc, tb):
        self.close()
