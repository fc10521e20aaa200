"""
Defines the exceptions raised by the resolvers, fetcher and downloader.

Nothing below the CLI terminates the process: every failure is raised as one
of these types and the entry point decides how to report it.
"""

from typing import Optional


class OsacError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(OsacError):
    """Raised for issues related to settings loading or validation."""


class UsageError(OsacError):
    """Base for errors caused by a selector the site does not know about."""


class UnknownProductError(UsageError):
    """Raised when a product key is not one of the recognized products."""

    def __init__(self, product: str):
        self.product = product
        super().__init__(f"unknown product: {product}")


class UnknownReleaseError(UsageError):
    """Raised when no release of the product carries the requested name."""

    def __init__(self, product: str, release: str):
        self.product = product
        self.release = release
        super().__init__(f"couldn't find the release: {release} (product: {product})")


class UnknownPackageError(UsageError):
    """Raised when a release has no package with the requested name."""

    def __init__(self, product: str, release: str, package: str):
        self.product = product
        self.release = release
        self.package = package
        super().__init__(
            f"couldn't find the package: {package} (product: {product}, release: {release})"
        )


class FetchError(OsacError):
    """Base for failures retrieving or parsing a remote document."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class TransportError(FetchError):
    """Raised when the HTTP request itself fails (DNS, connection, TLS...)."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"http: couldn't get url: {url}"
        if reason:
            message += f" ({reason})"
        super().__init__(url, message)


class HTTPStatusError(FetchError):
    """Raised when the server answers with anything other than 200."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"http: got non 200 status code: {url} {status_code}")


class DocumentParseError(FetchError):
    """Raised when a response body cannot be turned into a document tree."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"document: couldn't create document from http response: {url}"
        if reason:
            message += f" ({reason})"
        super().__init__(url, message)


class MarkupError(OsacError):
    """
    Raised when the page structure violates an assumption the resolvers rely
    on, such as a release anchor or download link without an href.
    """


class DownloadError(OsacError):
    """Raised when a package archive cannot be fetched or written to disk."""

    def __init__(self, message: str, url: Optional[str] = None, path: Optional[str] = None):
        self.url = url
        self.path = path
        super().__init__(message)
