"""Git Client - sparse checkout adapter

Business logic must not call subprocess or GitPython directly.
All sparse checkout git operations go through SparseCheckoutClient.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

logger = logging.getLogger(__name__)

# Keep agent-local files out of every role checkout.
SPARSE_CHECKOUT_PATTERNS: Tuple[str, ...] = (
    "/*",
    "!/.claude/",
    "!/CLAUDE.md",
    "!/CLAUDE.local.md",
)


class GitOperationError(Exception):
    """Raised when a git query or configuration action fails."""
    pass


class SparseCheckoutClient:
    """Sparse checkout operations backed by GitPython"""

    def __init__(self, patterns: Tuple[str, ...] = SPARSE_CHECKOUT_PATTERNS):
        self.patterns = tuple(patterns)

    def _open(self, path: Union[str, Path]) -> Repo:
        try:
            return Repo(str(path))
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitOperationError(f"Not a git repository: {path}") from e

    def _sparse_file(self, repo: Repo) -> Path:
        # git_dir follows `gitdir:` files, so linked worktrees resolve correctly
        return Path(repo.git_dir) / "info" / "sparse-checkout"

    def is_git_repository(self, path: Union[str, Path]) -> bool:
        """
        Check whether path is the top of a git working tree

        Args:
            path: Candidate directory

        Returns:
            True if a `.git` directory or `gitdir:` file exists at path
        """
        return (Path(path) / ".git").exists()

    def is_sparse_checkout_configured(self, path: Union[str, Path]) -> bool:
        """
        Check whether sparse checkout is enabled with the expected patterns

        Args:
            path: Repository working tree

        Returns:
            True if core.sparseCheckout is true and every pattern is present

        Raises:
            GitOperationError: path cannot be opened as a repository
        """
        with self._open(path) as repo:
            value = self._get_flag(repo)
            if value is None or value.lower() != "true":
                return False

            sparse_file = self._sparse_file(repo)
            try:
                lines = sparse_file.read_text(encoding="utf-8").splitlines()
            except FileNotFoundError:
                return False
            except OSError as e:
                raise GitOperationError(f"Cannot read {sparse_file}: {e}") from e

        present = {line.strip() for line in lines}
        return all(pattern in present for pattern in self.patterns)

    def _get_flag(self, repo: Repo) -> Optional[str]:
        try:
            return repo.git.config("--get", "core.sparseCheckout").strip()
        except GitCommandError:
            # `git config --get` exits 1 when the key is unset
            return None

    def _restore(self, repo: Repo, sparse_file: Path, flag: Optional[str], patterns: Optional[str]) -> None:
        """Put the flag and pattern file back the way they were before configuring"""
        if flag is not None:
            try:
                repo.git.config("core.sparseCheckout", flag)
            except GitCommandError as e:
                logger.error(f"Cannot restore core.sparseCheckout in {repo.working_tree_dir}: {e}")
        elif self._get_flag(repo) is not None:
            try:
                repo.git.config("--unset", "core.sparseCheckout")
            except GitCommandError as e:
                logger.error(f"Cannot unset core.sparseCheckout in {repo.working_tree_dir}: {e}")

        try:
            if patterns is None:
                sparse_file.unlink(missing_ok=True)
            else:
                sparse_file.write_text(patterns, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot restore {sparse_file}: {e}")

    def configure_sparse_checkout(self, path: Union[str, Path]) -> None:
        """
        Enable sparse checkout and apply the exclusion patterns

        Safe to call on an already configured repository. On failure the
        flag and pattern file are restored, so the repo still reads as
        not configured and a later fix retries it.

        Args:
            path: Repository working tree

        Raises:
            GitOperationError: any git or filesystem step failed
        """
        if self.is_sparse_checkout_configured(path):
            logger.debug(f"Sparse checkout already configured: {path}")
            return

        with self._open(path) as repo:
            sparse_file = self._sparse_file(repo)
            old_flag = self._get_flag(repo)
            try:
                old_patterns = sparse_file.read_text(encoding="utf-8")
            except FileNotFoundError:
                old_patterns = None
            except OSError as e:
                raise GitOperationError(f"Cannot read {sparse_file}: {e}") from e

            try:
                repo.git.config("core.sparseCheckout", "true")
                sparse_file.parent.mkdir(parents=True, exist_ok=True)
                sparse_file.write_text("\n".join(self.patterns) + "\n", encoding="utf-8")
                # A repo without commits has nothing to re-materialize yet
                if repo.head.is_valid():
                    repo.git.read_tree("-mu", "HEAD")
            except GitCommandError as e:
                self._restore(repo, sparse_file, old_flag, old_patterns)
                raise GitOperationError(f"git failed in {path}: {e.stderr or e}") from e
            except OSError as e:
                self._restore(repo, sparse_file, old_flag, old_patterns)
                raise GitOperationError(f"Cannot write {sparse_file}: {e}") from e

        logger.info(f"Configured sparse checkout: {path}")
