"""Git repository queries."""

from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from pathlib import Path
from typing import Iterator, Optional, Union

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Reference, RemoteReference, Repo
from git.exc import BadName, BadObject

from branchtime.log import get_logger

logger = get_logger(__name__)

SHORT_ID_LENGTH = 8

# Errors GitPython raises while peeling a ref to its tip commit
_RESOLVE_ERRORS = (ValueError, TypeError, BadName, BadObject, GitCommandError)


class GitError(Exception):
    """Git operation error."""


class RepositoryOpenError(GitError):
    """The path could not be opened as a git repository."""


class BranchScope(Enum):
    """Which branch references to list."""

    LOCAL = "local"
    REMOTE = "remote"
    ALL = "all"

    @classmethod
    def from_flags(cls, show_remote: bool = False, show_all: bool = False) -> "BranchScope":
        """Pick a scope from the command line flags. ``show_all`` wins."""
        if show_all:
            return cls.ALL
        if show_remote:
            return cls.REMOTE
        return cls.LOCAL


@dataclass(frozen=True)
class BranchRecord:
    """A branch and the tip commit it points to."""

    name: str
    short_id: str
    committed_date: int
    is_head: bool = False
    is_remote: bool = False
    summary: str = ""


class GitRepo:
    """Read-only view of a repository's branches."""

    def __init__(self, path: Union[Path, str]) -> None:
        """Open the repository at ``path``.

        Raises:
            RepositoryOpenError: If the path does not exist or is not a git repository
        """
        try:
            self.repo: Repo = Repo(path)
        except (NoSuchPathError, InvalidGitRepositoryError, GitCommandError, ValueError) as err:
            reason = str(err) or type(err).__name__
            raise RepositoryOpenError(f"Failed to open repository: {reason}") from err
        logger.debug("Opened repository at %s", self.repo.git_dir)

    def close(self) -> None:
        """Release the git helper processes held by the repository."""
        self.repo.close()

    def head_branch_name(self) -> Optional[str]:
        """Get the short name of the branch HEAD points to.

        Returns None when HEAD is detached or unreadable.
        """
        try:
            return self.repo.active_branch.name
        except TypeError:
            # Detached HEAD
            return None
        except (ValueError, GitCommandError) as err:
            logger.debug("Could not read HEAD: %s", err)
            return None

    def iter_branch_refs(self, scope: BranchScope) -> Iterator[Reference]:
        """Yield the branch references in ``scope``, local before remote."""
        if scope in (BranchScope.LOCAL, BranchScope.ALL):
            yield from self.repo.branches
        if scope in (BranchScope.REMOTE, BranchScope.ALL):
            for ref in RemoteReference.iter_items(self.repo):
                # origin/HEAD is an alias of another remote branch
                if ref.remote_head == "HEAD":
                    continue
                yield ref

    def _branch_record(self, ref: Reference, head_name: Optional[str]) -> Optional[BranchRecord]:
        """Resolve a reference to a record, or None if its tip can't be read."""
        try:
            name = ref.name
            commit = ref.commit
            hexsha = commit.hexsha
            committed_date = int(commit.committed_date)
            summary = commit.summary
        except _RESOLVE_ERRORS as err:
            logger.debug("Skipping %s: %s", ref.path, err)
            return None

        if isinstance(summary, bytes):
            summary = summary.decode("utf-8", errors="replace")

        return BranchRecord(
            name=name,
            short_id=hexsha[:SHORT_ID_LENGTH],
            committed_date=committed_date,
            is_head=name == head_name,
            is_remote=isinstance(ref, RemoteReference),
            summary=summary or "",
        )

    def branch_records(self, scope: BranchScope = BranchScope.LOCAL) -> list[BranchRecord]:
        """Get the branches in ``scope`` sorted by tip commit time, oldest first.

        Branches whose tip commit can't be resolved are left out.
        """
        head_name = self.head_branch_name()
        logger.debug("HEAD branch: %s", head_name)
        records = []
        for ref in self.iter_branch_refs(scope):
            record = self._branch_record(ref, head_name)
            if record is not None:
                records.append(record)

        logger.debug("Resolved %d %s branch(es)", len(records), scope.value)
        return sorted(records, key=attrgetter("committed_date"))
