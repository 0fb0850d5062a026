"""Job board backend: accounts, job postings and applications."""

__version__ = "1.0.0"
