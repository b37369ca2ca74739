"""
Git operations for repovol.

All git work goes through the git command line via repovol.cmd, so each
clone, fetch and reset shows up in the log with its duration.
"""

from .sync import clone, head_commit, remote_update, reset_hard, synchronize
from .urls import is_local_path, parse_repo_url, resolve_local_path

__all__ = [
    "clone",
    "head_commit",
    "remote_update",
    "reset_hard",
    "synchronize",
    "is_local_path",
    "parse_repo_url",
    "resolve_local_path",
]
