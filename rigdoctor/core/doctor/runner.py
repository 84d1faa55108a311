"""Doctor runner: check registration, selection, run and fix"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .base import Check
from .errors import CheckNotFoundError
from .models import CheckContext, CheckResult, CheckStatus, FixResult

logger = logging.getLogger(__name__)


@dataclass
class DoctorReport:
    """Results of one doctor run, in check registration order"""

    results: List[CheckResult] = field(default_factory=list)

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def ok_count(self) -> int:
        return self._count(CheckStatus.OK)

    @property
    def warning_count(self) -> int:
        return self._count(CheckStatus.WARNING)

    @property
    def error_count(self) -> int:
        return self._count(CheckStatus.ERROR)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": {
                "ok": self.ok_count,
                "warning": self.warning_count,
                "error": self.error_count,
            },
        }


class Doctor:
    """Registry of checks plus the run/fix loop over them"""

    def __init__(self):
        self._checks: Dict[str, Check] = {}

    def register(self, check: Check) -> None:
        if check.name in self._checks:
            raise ValueError(f"Check already registered: {check.name}")
        self._checks[check.name] = check

    @property
    def names(self) -> List[str]:
        return list(self._checks)

    def checks(self, selected: Optional[Iterable[str]] = None) -> List[Check]:
        """Registered checks, optionally filtered by name token"""
        if selected is None:
            return list(self._checks.values())

        wanted = set(selected)
        unknown = sorted(wanted - set(self._checks))
        if unknown:
            raise CheckNotFoundError(f"Unknown check(s): {', '.join(unknown)}")
        return [c for name, c in self._checks.items() if name in wanted]

    def _run_one(self, check: Check, ctx: CheckContext) -> CheckResult:
        try:
            return check.run(ctx)
        except Exception as e:
            logger.exception(f"Check '{check.name}' raised")
            return CheckResult(
                name=check.name,
                status=CheckStatus.ERROR,
                message=f"Check failed to run: {e}",
            )

    def run(self, ctx: CheckContext, selected: Optional[Iterable[str]] = None) -> DoctorReport:
        report = DoctorReport()
        for check in self.checks(selected):
            result = self._run_one(check, ctx)
            logger.debug(f"{check.name}: {result.status.value} - {result.message}")
            report.results.append(result)
        return report

    def fix(self, ctx: CheckContext, selected: Optional[Iterable[str]] = None) -> List[FixResult]:
        """Fix every selected fixable check whose run is not OK"""
        results = []
        for check in self.checks(selected):
            if not check.can_fix():
                continue

            result = self._run_one(check, ctx)
            if result.ok:
                continue

            try:
                check.fix(ctx)
            except Exception as e:
                logger.error(f"Fix for '{check.name}' failed: {e}")
                results.append(FixResult(
                    check_name=check.name,
                    success=False,
                    message=f"Fix failed: {check.name}",
                    details=[str(e)],
                ))
                continue

            results.append(FixResult(
                check_name=check.name,
                success=True,
                message=f"Fix applied: {check.name}",
                details=list(result.details) or None,
            ))
        return results


def default_doctor() -> Doctor:
    """Doctor with the built-in checks registered"""
    from .sparse_checkout import SparseCheckoutCheck

    doctor = Doctor()
    doctor.register(SparseCheckoutCheck())
    return doctor
