"""Route groups for the launcher backend.

This module collects logically-related endpoints:
- news: the launcher news feed
- version: current launcher and game versions
- download: client binaries and their metadata
"""
