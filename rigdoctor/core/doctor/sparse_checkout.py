"""
Sparse checkout check

Audits every role checkout of a rig and verifies sparse checkout is
configured to keep agent-local files out of the working tree:

- mayor:   <rig>/mayor/rig
- crew:    <rig>/crew/<member>
- polecat: <rig>/polecats/<name>

Directories that are missing or are not git working trees are skipped.
Nothing is cached between calls; run and fix both rescan the disk.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from rigdoctor.core.infra.git_client import SparseCheckoutClient

from .base import FixableCheck
from .errors import SparseCheckoutFixError
from .models import CheckContext, CheckResult, CheckStatus

logger = logging.getLogger(__name__)

CHECK_NAME = "sparse-checkout"
FIX_HINT = "Run 'rigdoctor doctor --fix' to configure sparse checkout"


class SparseCheckoutGit(Protocol):
    """Git capabilities the check depends on"""

    def is_git_repository(self, path: Union[str, Path]) -> bool:
        ...

    def is_sparse_checkout_configured(self, path: Union[str, Path]) -> bool:
        ...

    def configure_sparse_checkout(self, path: Union[str, Path]) -> None:
        ...


@dataclass(frozen=True)
class RepositoryRole:
    """Where checkouts of one role live, relative to the rig directory"""
    role: str
    parts: Tuple[str, ...]
    enumerate_children: bool = False


# Order matters: mayor first, then crew, then polecats
ROLES: Tuple[RepositoryRole, ...] = (
    RepositoryRole("mayor", ("mayor", "rig")),
    RepositoryRole("crew", ("crew",), enumerate_children=True),
    RepositoryRole("polecat", ("polecats",), enumerate_children=True),
)


@dataclass(frozen=True)
class CandidatePath:
    """A location that may hold a role checkout"""
    role: str
    path: Path
    relative: str


@dataclass(frozen=True)
class RepositoryFinding:
    """Audit outcome for one git repository"""
    candidate: CandidatePath
    configured: bool
    error: Optional[str] = None


def _candidates(rig_dir: Path, roles: Sequence[RepositoryRole]) -> List[CandidatePath]:
    candidates = []
    for role in roles:
        base = rig_dir.joinpath(*role.parts)
        rel_base = "/".join(role.parts)

        if not role.enumerate_children:
            candidates.append(CandidatePath(role.role, base, rel_base))
            continue

        if not base.is_dir():
            continue
        # sorted() keeps listing order stable across platforms
        for child in sorted(base.iterdir(), key=lambda p: p.name):
            if child.is_dir():
                candidates.append(CandidatePath(role.role, child, f"{rel_base}/{child.name}"))
    return candidates


def locate(
    town_root: Union[str, Path],
    rig_name: str,
    git: SparseCheckoutGit,
    roles: Sequence[RepositoryRole] = ROLES,
) -> List[CandidatePath]:
    """
    Find the role checkouts of a rig that are git repositories

    Args:
        town_root: Directory holding the rigs
        rig_name: Rig to inspect; empty yields nothing
        git: Git capabilities used to detect repositories
        roles: Role table, defaults to mayor/crew/polecat

    Returns:
        Candidates in role order (mayor, crew, polecats), children sorted by name
    """
    if not rig_name:
        return []

    rig_dir = Path(town_root) / rig_name
    if not rig_dir.is_dir():
        logger.debug(f"Rig directory not found: {rig_dir}")
        return []

    located = []
    for candidate in _candidates(rig_dir, roles):
        if not candidate.path.is_dir():
            logger.debug(f"Skipping missing path: {candidate.relative}")
            continue
        if not git.is_git_repository(candidate.path):
            logger.debug(f"Skipping non-git directory: {candidate.relative}")
            continue
        located.append(candidate)
    return located


def audit(candidates: Sequence[CandidatePath], git: SparseCheckoutGit) -> List[RepositoryFinding]:
    """Query sparse checkout state once per repository.

    A failing query never stops the audit; the repository is reported
    as not configured and the error is kept on the finding.
    """
    findings = []
    for candidate in candidates:
        try:
            configured = git.is_sparse_checkout_configured(candidate.path)
        except Exception as e:
            logger.warning(f"Cannot read sparse checkout state of {candidate.relative}: {e}")
            findings.append(RepositoryFinding(candidate, configured=False, error=str(e)))
            continue
        findings.append(RepositoryFinding(candidate, configured=configured))
    return findings


def report(ctx: CheckContext, findings: Sequence[RepositoryFinding]) -> CheckResult:
    """Turn audit findings into a CheckResult"""
    if not ctx.rig_name:
        return CheckResult(
            name=CHECK_NAME,
            status=CheckStatus.ERROR,
            message="No rig specified",
            fix_hint="Pass --rig <name> to select a rig",
        )

    if not findings:
        return CheckResult(
            name=CHECK_NAME,
            status=CheckStatus.OK,
            message="No git repos found to check",
        )

    missing = [f for f in findings if not f.configured]
    if not missing:
        return CheckResult(
            name=CHECK_NAME,
            status=CheckStatus.OK,
            message=f"All {len(findings)} repo(s) have sparse checkout configured",
        )

    details = []
    for finding in missing:
        line = f"{finding.candidate.relative}: sparse checkout not configured"
        if finding.error:
            line += f" ({finding.error})"
        details.append(line)

    return CheckResult(
        name=CHECK_NAME,
        status=CheckStatus.ERROR,
        message=f"{len(missing)} repo(s) missing sparse checkout configuration",
        details=details,
        fix_hint=FIX_HINT,
    )


class SparseCheckoutCheck(FixableCheck):
    """Verify sparse checkout is configured in every role checkout of a rig"""

    name = CHECK_NAME
    description = "Verify sparse checkout is configured to exclude .claude/"

    def __init__(self, git: Optional[SparseCheckoutGit] = None):
        self.git = git or SparseCheckoutClient()

    def _audit(self, ctx: CheckContext) -> List[RepositoryFinding]:
        return audit(locate(ctx.town_root, ctx.rig_name, self.git), self.git)

    def run(self, ctx: CheckContext) -> CheckResult:
        if not ctx.rig_name:
            return report(ctx, [])
        return report(ctx, self._audit(ctx))

    def fix(self, ctx: CheckContext) -> None:
        """
        Configure sparse checkout in every repo currently missing it

        Every deficient repo is attempted even if an earlier one fails.

        Raises:
            SparseCheckoutFixError: one or more repos could not be configured
        """
        missing = [f.candidate for f in self._audit(ctx) if not f.configured]
        if not missing:
            return

        failures = []
        for candidate in missing:
            try:
                self.git.configure_sparse_checkout(candidate.path)
            except Exception as e:
                logger.error(f"Failed to configure sparse checkout for {candidate.relative}: {e}")
                failures.append((candidate.relative, str(e)))
                continue
            logger.info(f"Configured sparse checkout for {candidate.relative}")

        if failures:
            raise SparseCheckoutFixError(failures)
