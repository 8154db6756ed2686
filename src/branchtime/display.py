"""Branch classification and line rendering."""

import re
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from rich.text import Text

from branchtime.git import BranchRecord

CORE_BRANCHES = frozenset({"master", "main", "develop", "test", "demo", "release"})
LOW_PRIORITY_SUFFIXES = ("old", "obs", "nouse", "merged")
VERSION_PATTERN = re.compile(r"^v\d+", re.IGNORECASE)
DEFAULT_REMOTES = ("origin",)

TIME_FORMAT = "%Y.%m.%d %H:%M"
SUMMARY_INDENT = 32

HEAD_MARK = "*"
REMOTE_MARK = "@"


class BranchCategory(Enum):
    """Display priority of a branch."""

    HEAD = "head"
    REMOTE = "remote"
    CORE_OR_VERSIONED = "core"
    LOW_PRIORITY = "low"
    DEFAULT = "default"


CATEGORY_STYLES = {
    BranchCategory.HEAD: "green",
    BranchCategory.REMOTE: "red",
    BranchCategory.CORE_OR_VERSIONED: "magenta",
    BranchCategory.LOW_PRIORITY: "blue",
    BranchCategory.DEFAULT: "white",
}


def is_version(name: str) -> bool:
    """Check if a branch name looks like a version (v1, V10-rc, ...)."""
    return VERSION_PATTERN.match(name) is not None


def is_remote_name(name: str, remotes: Iterable[str] = DEFAULT_REMOTES) -> bool:
    """Check if a branch name starts with a remote prefix such as ``origin/``."""
    prefixes = {f"{remote}/" for remote in (*DEFAULT_REMOTES, *remotes)}
    return any(name.startswith(prefix) for prefix in prefixes)


def classify_branch(
    name: str,
    head_name: Optional[str],
    remotes: Iterable[str] = DEFAULT_REMOTES,
) -> BranchCategory:
    """Get the display category of a branch.

    The first matching rule wins: current branch, remote branch, core or
    versioned branch, low priority suffix, everything else.

    Args:
        name: Short branch name, e.g. ``main`` or ``origin/main``
        head_name: Current branch name, None when HEAD is detached
        remotes: Remote names whose prefix marks a remote branch
    """
    if head_name is not None and name == head_name:
        return BranchCategory.HEAD
    if is_remote_name(name, remotes):
        return BranchCategory.REMOTE
    return _priority_category(name)


def _priority_category(name: str) -> BranchCategory:
    if name in CORE_BRANCHES or is_version(name):
        return BranchCategory.CORE_OR_VERSIONED
    if name.endswith(LOW_PRIORITY_SUFFIXES):
        return BranchCategory.LOW_PRIORITY
    return BranchCategory.DEFAULT


def record_category(record: BranchRecord) -> BranchCategory:
    """Get the display category of a resolved branch.

    Uses the ref kind from the repository, so a local branch named
    ``origin/x`` is not shown as remote.
    """
    if record.is_head:
        return BranchCategory.HEAD
    if record.is_remote:
        return BranchCategory.REMOTE
    return _priority_category(record.name)


def category_mark(category: BranchCategory) -> str:
    """Get the one character marker for a category."""
    if category == BranchCategory.HEAD:
        return HEAD_MARK
    if category == BranchCategory.REMOTE:
        return REMOTE_MARK
    return " "


def current_mark(name: str, head_name: Optional[str], remotes: Iterable[str] = DEFAULT_REMOTES) -> str:
    """Get the one character marker shown before a branch name."""
    return category_mark(classify_branch(name, head_name, remotes))


def format_commit_time(timestamp: int) -> str:
    """Format an epoch timestamp as ``[YYYY.MM.DD HH:MM]`` in local time."""
    try:
        formatted = datetime.fromtimestamp(timestamp).strftime(TIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        formatted = "?"
    return f"[{formatted}]"


def render_branch(record: BranchRecord) -> Text:
    """Render the report line for one branch."""
    category = record_category(record)
    mark = category_mark(category)
    mark_style = "red" if mark == REMOTE_MARK else "green"

    return Text.assemble(
        (format_commit_time(record.committed_date), "blue"),
        " ",
        (record.short_id, "yellow"),
        " ",
        (mark, mark_style),
        " ",
        (record.name, CATEGORY_STYLES[category]),
    )


def render_summary(record: BranchRecord) -> Text:
    """Render the indented commit summary line shown in verbose mode."""
    return Text.assemble(" " * SUMMARY_INDENT, (record.summary, "green"))
