"""Root of the Restgate exception hierarchy."""

from __future__ import annotations


class RestgateError(Exception):
    """Base class for every error raised by Restgate."""
