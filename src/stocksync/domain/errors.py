"""Errors raised by external collaborators of the reconciliation pipeline."""

from __future__ import annotations


class CollaboratorError(RuntimeError):
    """Base class for failures of the catalog or stock oracle."""


class CatalogPageError(CollaboratorError):
    """Raised when a catalog page cannot be fetched or is malformed."""


class StockOracleError(CollaboratorError):
    """Raised when the stock oracle cannot be reached or answers garbage."""


class InventoryUpdateError(CollaboratorError):
    """Raised when a single inventory level could not be set."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
