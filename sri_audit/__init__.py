"""Subresource Integrity audit service."""

__version__ = "1.0.0"
