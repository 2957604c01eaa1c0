"""Domain errors raised by the catalog services.

Each error carries the HTTP status it maps to at the API boundary; the
handlers in :mod:`ghiblihub.api.errors` render them as ``{"error": message}``.
A missing relation (schema not migrated yet) is not an error at all: the
services degrade to empty results instead.
"""


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """Referenced movie, character or guide does not exist (or is unpublished)."""

    status_code = 404


class InvalidArgumentError(CatalogError):
    """Missing required parameter or unsupported value."""

    status_code = 400


class StoreUnavailableError(CatalogError):
    """Backing store cannot be reached."""

    status_code = 503
