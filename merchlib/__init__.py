"""Utilities for backend services: decimals, UUIDs, crypto, key locks, queues, caching, HTTP, logging and Markdown."""

__version__ = "0.1.0"