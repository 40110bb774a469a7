"""Marketplace-aware QA scoring for e-commerce product listings."""

__version__ = "0.1.0"
