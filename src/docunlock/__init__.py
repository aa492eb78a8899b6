"""Normalize password-protected documents into their unprotected form."""

__version__ = "0.1.0"
