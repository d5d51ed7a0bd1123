"""Fuzzy EC2 instance picker that opens an SSH session to the selection."""

__version__ = "0.1.0"
