"""HPC admin server: users and pirgs administration API."""

__version__ = "0.1.0"
