"""Crawl an EDDN archive, download and import FSS signal files, and dump installations."""

__version__ = "0.1.0"