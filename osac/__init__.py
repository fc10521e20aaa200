"""
osac: Open Source Archive Client

A command-line client for discovering and downloading the open-source package
archives published on Apple's release index (opensource.apple.com).
"""

__version__ = "1.0"
__author__ = "osac Project"
__description__ = "Open Source Archive Client"
