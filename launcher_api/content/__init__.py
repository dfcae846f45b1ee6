"""Flat-file content served to the launcher.

The `news.py` module reads the news feed; `clients.py` resolves, hashes and
streams the downloadable client binaries.
"""
