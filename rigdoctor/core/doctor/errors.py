"""Doctor exceptions."""

from typing import List, Tuple


class DoctorError(Exception):
    """Base exception for doctor errors."""
    pass


class CheckNotFoundError(DoctorError):
    """Raised when a requested check name is not registered."""
    pass


class FixNotSupportedError(DoctorError):
    """Raised when fix is requested from a check that cannot fix."""
    pass


class SparseCheckoutFixError(DoctorError):
    """Raised after a fix pass in which one or more repos could not be configured.

    Attributes:
        failures: (relative path, cause) for every repo that failed
    """

    def __init__(self, failures: List[Tuple[str, str]]):
        self.failures = list(failures)
        lines = "; ".join(f"{rel}: {cause}" for rel, cause in self.failures)
        super().__init__(
            f"Failed to configure sparse checkout for {len(self.failures)} repo(s): {lines}"
        )
