"""
Error taxonomy for the inspection lifecycle and query engine.

ValidationError  - a required selection is missing (raised before any store call)
NotFoundError    - the targeted record no longer exists
StoreError       - the backing store failed (database, I/O)
DefaultedLookupWarning - a reference did not resolve; a placeholder was used
"""


class FimsError(Exception):
    """Base class for errors surfaced to callers."""
    status_code = 500

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(FimsError):
    status_code = 400


class NotFoundError(FimsError):
    status_code = 404


class StoreError(FimsError):
    status_code = 502


class DefaultedLookupWarning(UserWarning):
    """Non-fatal: a lookup (e.g. category_id) fell back to its default."""
