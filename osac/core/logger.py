"""
Logging System

This module provides centralized logging configuration for osac. Listing
output goes to stdout, so every handler configured here writes either to a
log file or to stderr.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path


APP_NAME = "osac"


class OsacLogger:
    """
    Centralized logging system for the osac application.
    
    Sets up a rotating debug log, a rotating error log and a console handler
    whose level follows the requested verbosity.
    """
    
    def __init__(self, log_dir: str, app_name: str = APP_NAME):
        """
        Initialize the logging system.
        
        Args:
            log_dir: Directory to store log files
            app_name: Name of the application for log formatting
        """
        self.log_dir = Path(log_dir)
        self.app_name = app_name
    
    def setup_logger(self, level: int = logging.WARNING) -> logging.Logger:
        """
        Set up the main application logger with file and console handlers.
        
        Args:
            level: Console logging level (default: WARNING)
            
        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.app_name)
        logger.setLevel(logging.DEBUG)
        
        # Reconfiguring replaces the previous handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        
        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        
        console_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        )
        
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)
        
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            
            file_handler = logging.handlers.RotatingFileHandler(
                self.log_dir / f"{self.app_name}.log",
                maxBytes=5*1024*1024,  # 5MB
                backupCount=3,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            
            error_handler = logging.handlers.RotatingFileHandler(
                self.log_dir / f"{self.app_name}_errors.log",
                maxBytes=1*1024*1024,  # 1MB
                backupCount=3,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(detailed_formatter)
            
            logger.addHandler(file_handler)
            logger.addHandler(error_handler)
        except OSError as e:
            logger.warning(f"File logging disabled, couldn't use {self.log_dir}: {e}")
        
        return logger
    
    def log_system_info(self):
        """Log system information for debugging."""
        logger = logging.getLogger(f"{self.app_name}.system")
        
        logger.debug("=== osac started ===")
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Platform: {sys.platform}")
        logger.debug(f"Working directory: {os.getcwd()}")
        logger.debug(f"Log directory: {self.log_dir.absolute()}")


def verbosity_to_level(verbose: int) -> int:
    """Map the CLI -v count to a console logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def initialize_logging(log_dir: str, level: int = logging.WARNING) -> logging.Logger:
    """
    Configure the osac logger tree for this process.
    
    Args:
        log_dir: Directory for log files
        level: Console logging level
    """
    osac_logger = OsacLogger(log_dir)
    logger = osac_logger.setup_logger(level)
    osac_logger.log_system_info()
    return logger
