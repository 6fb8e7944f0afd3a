"""
cleanblog - layered blogging backend.

Users register and log in, articles are created, read, updated and
deleted by their authors, and reads go through a cache-aside layer.
"""

__version__ = "0.1.0"
