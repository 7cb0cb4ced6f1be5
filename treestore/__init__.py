"""Paged record storage for a tree-structured document database: pages, records, values and sibling-node lookup."""

__version__ = "0.1.0"