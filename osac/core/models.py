"""
Value records produced by the resolvers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Release:
    product: str  # product key, e.g. 'mac'
    release: str  # display name, also the lookup key for packages
    url: str      # absolute URL of the release detail page


@dataclass(frozen=True)
class Package:
    name: str
    version: str   # UNKNOWN_VERSION when the label couldn't be split
    updated: bool  # row flagged as new/updated in this release
    url: str       # absolute download URL

    @property
    def label(self) -> str:
        """The listing line: 'name (version)' with '*' for updated packages."""
        return f"{self.name} ({self.version}){'*' if self.updated else ''}"
