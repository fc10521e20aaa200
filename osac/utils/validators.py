"""
Validation helpers for settings and selectors.
"""

import re
from urllib.parse import urlparse, urlunparse
from typing import Tuple, Mapping


# one or more dot-separated DNS labels
HOSTNAME_RE = re.compile(r'^(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))*$')


def validate_url(url: str) -> Tuple[bool, str, str]:
    """
    Validate the base URL of the release index site and normalize it.
    
    A bare host gets 'https://'. Scheme and host are lowercased, query and
    fragment dropped, and trailing slashes removed, since hrefs from the
    index are joined onto it.
    
    Returns:
        Tuple of (is_valid, normalized_url, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "", "URL cannot be empty"
    
    url = url.strip()
    parsed = urlparse(url if '://' in url else 'https://' + url)
    
    if parsed.scheme not in ('http', 'https'):
        return False, "", "URL must use HTTP or HTTPS protocol"
    
    try:
        host = parsed.hostname or ""
        parsed.port
    except ValueError as e:
        return False, "", f"Invalid port: {e}"
    
    if not HOSTNAME_RE.match(host):
        return False, "", "Invalid domain format"
    
    normalized = urlunparse((parsed.scheme, parsed.netloc.lower(), parsed.path.rstrip('/'), '', '', ''))
    return True, normalized, ""


def is_known_product(product: str, products: Mapping[str, str]) -> bool:
    """Check a product key against the recognized products, case-sensitively."""
    return isinstance(product, str) and product in products
