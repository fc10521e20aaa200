"""
File Management Utilities

This module decides where downloaded package archives go: one directory per
(product, release) and one file per package named after its download URL.
"""

from pathlib import Path
import logging

from osac.core.errors import DownloadError
from osac.utils.naming import release_directory_name, url_filename


class FileManager:
    """
    Manages the output layout for package downloads.
    
    A download never reuses an existing directory: '<product>-<release>' must
    not exist yet, which keeps two runs from mixing their files.
    """
    
    def __init__(self, base_output_dir: str = "."):
        """
        Initialize the file manager.
        
        Args:
            base_output_dir: Directory in which release directories are created
        """
        self.base_output_dir = Path(base_output_dir)
        self.logger = logging.getLogger(__name__)
    
    def release_directory(self, product: str, release: str) -> Path:
        """Path of the download directory for a (product, release) pair."""
        return self.base_output_dir / release_directory_name(product, release)
    
    def create_release_directory(self, product: str, release: str) -> Path:
        """
        Create the download directory for a (product, release) pair.
        
        Args:
            product: Product key
            release: Release display name
            
        Returns:
            Absolute path of the created directory
            
        Raises:
            DownloadError: If the directory exists or cannot be created
        """
        path = self.release_directory(product, release).absolute()
        
        try:
            path.mkdir()
        except FileExistsError as e:
            raise DownloadError(f"download: directory already exists: {path}", path=str(path)) from e
        except OSError as e:
            raise DownloadError(f"download: couldn't create directory: {path} ({e})", path=str(path)) from e
        
        self.logger.info(f"Created download directory: {path}")
        return path
    
    def target_path(self, directory: Path, url: str) -> Path:
        """
        Path a package archive is written to inside a release directory.
        
        Raises:
            DownloadError: If the URL has no usable final path segment
        """
        filename = url_filename(url)
        if filename in ('', '.', '..'):
            raise DownloadError(f"download: no filename in url: {url}", url=url)
        return Path(directory) / filename
