"""List git branches sorted by latest commit time.

Features:
- Local, remote or all branches, oldest commit first
- Current branch marked with *, remote branches with @
- Branch names colored by priority (current, remote, core/version, obsolete)
- Verbose mode with the summary of each branch's latest commit
"""

__version__ = "0.1.0"
