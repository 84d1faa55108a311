"""Check base classes"""

from abc import ABC, abstractmethod

from .errors import FixNotSupportedError
from .models import CheckContext, CheckResult


class Check(ABC):
    """
    Every check implements `run`. The doctor calls run(ctx) without
    needing to know anything about the check's internals.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def run(self, ctx: CheckContext) -> CheckResult:
        """Execute the check against the given context."""
        ...

    def can_fix(self) -> bool:
        return False

    def fix(self, ctx: CheckContext) -> None:
        raise FixNotSupportedError(f"Check '{self.name}' has no automatic fix")


class FixableCheck(Check):
    """Check that also knows how to repair what it finds"""

    def can_fix(self) -> bool:
        return True

    @abstractmethod
    def fix(self, ctx: CheckContext) -> None:
        """Apply the repair. Must be safe to call repeatedly."""
        ...
