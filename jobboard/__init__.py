"""Job board service: job postings, recruiters and job applications."""

__version__ = "0.1.0"
