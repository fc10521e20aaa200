"""
Package label and filename helpers.
"""

import posixpath
from typing import Tuple
from urllib.parse import urlparse, urljoin, unquote


UNKNOWN_VERSION = "problem"
LABEL_SEPARATOR = "-"


def split_project_name(label: str) -> Tuple[str, str]:
    """
    Split a 'name-version' project label into (name, version).
    
    Only a label with exactly one hyphen is split. Anything else keeps the
    first segment as the name and UNKNOWN_VERSION as the version, so
    hyphenated project names such as 'apache-mod-1.3' are not recovered.
    
    Args:
        label: Trimmed link text from a project row
        
    Returns:
        Tuple of (name, version); never raises
    """
    parts = label.split(LABEL_SEPARATOR)
    if len(parts) == 2:
        return parts[0], parts[1]
    return parts[0], UNKNOWN_VERSION


def release_directory_name(product: str, release: str) -> str:
    """Directory name for a bulk download: '<product>-<release>'."""
    return f"{product}{LABEL_SEPARATOR}{release}"


def url_filename(url: str) -> str:
    """Final path segment of a download URL, ignoring query and fragment."""
    path = unquote(urlparse(url).path)
    return posixpath.basename(path)


def absolute_url(base_url: str, href: str) -> str:
    """
    Resolve an href scraped from the site against the normalized base URL.
    
    Root-relative hrefs are appended to the base so a mirror path such as
    'https://mirror.example.org/apple' is kept; anything else (page-relative
    or already absolute) goes through urljoin.
    """
    if href.startswith('/') and not href.startswith('//'):
        return base_url + href
    return urljoin(base_url + '/', href)
