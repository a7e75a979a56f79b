"""Product domain exceptions.

Raised by the Service and Repository layers.  The API layer (Views)
catches these and translates them into appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """No product exists with the requested id."""


class StoreError(Exception):
    """The persistence layer failed unexpectedly.

    Wraps the underlying database error (available as ``__cause__``).
    """
