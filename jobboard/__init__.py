"""Data-access layer for job postings and the companies that own them."""

__version__ = "0.1.0"
