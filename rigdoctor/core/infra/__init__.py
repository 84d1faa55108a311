"""Infrastructure components for rigdoctor core."""

from .git_client import (
    SPARSE_CHECKOUT_PATTERNS,
    GitOperationError,
    SparseCheckoutClient,
)

__all__ = ["SPARSE_CHECKOUT_PATTERNS", "GitOperationError", "SparseCheckoutClient"]
