"""
Doctor data model

Each check returns a CheckResult:
- status: OK/WARNING/ERROR
- message: One-line description
- details: Per-item lines (one per deficient item)
- fix_hint: What to run to repair it
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class CheckStatus(Enum):
    """Check result status"""
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CheckContext:
    """Input shared by every check in a doctor run"""
    town_root: Path
    rig_name: str = ""


@dataclass
class CheckResult:
    """Single check result"""
    name: str
    status: CheckStatus
    message: str
    details: List[str] = field(default_factory=list)
    fix_hint: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CheckStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": list(self.details),
            "fix_hint": self.fix_hint,
        }


@dataclass
class FixResult:
    """Result of a fix attempt"""
    check_name: str
    success: bool
    message: str
    details: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "check_name": self.check_name,
            "success": self.success,
            "message": self.message,
            "details": list(self.details or []),
        }
