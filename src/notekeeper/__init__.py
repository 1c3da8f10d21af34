"""
notekeeper: a small personal notes service (FastAPI + SQLAlchemy) and the
async client that drives it.
"""

__version__ = "0.1.0"
