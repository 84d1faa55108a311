"""
Doctor - rig health checker and auto-fixer

- Checks run read-only by default
- Fixable checks repair what they find with `--fix`
- Every run rescans the disk; nothing is cached between calls
"""

from .base import Check, FixableCheck
from .errors import (
    CheckNotFoundError,
    DoctorError,
    FixNotSupportedError,
    SparseCheckoutFixError,
)
from .models import CheckContext, CheckResult, CheckStatus, FixResult
from .report import print_fix_summary, print_report
from .runner import Doctor, DoctorReport, default_doctor
from .sparse_checkout import SparseCheckoutCheck

__all__ = [
    "Check",
    "FixableCheck",
    "CheckContext",
    "CheckResult",
    "CheckStatus",
    "FixResult",
    "Doctor",
    "DoctorReport",
    "default_doctor",
    "SparseCheckoutCheck",
    "DoctorError",
    "CheckNotFoundError",
    "FixNotSupportedError",
    "SparseCheckoutFixError",
    "print_report",
    "print_fix_summary",
]
