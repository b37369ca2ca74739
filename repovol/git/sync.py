import logging
import os
from typing import List

from repovol.cmd import PathLike, command_output, run_command

logger = logging.getLogger(__name__)


def _git_in(local_path: PathLike, *args: str) -> List[str]:
    """
    Build a git command line bound to the repository at ``local_path`` itself.

    Without explicit --git-dir/--work-tree git searches parent directories
    for a repository, so a non-repository path inside another clone would
    update and reset that enclosing clone instead of failing.
    """
    path = os.path.abspath(local_path)
    return [
        "git",
        f"--git-dir={os.path.join(path, '.git')}",
        f"--work-tree={path}",
        *args,
    ]


def clone(clone_uri: str, local_path: PathLike) -> None:
    run_command(["git", "clone", clone_uri, local_path])


def remote_update(local_path: PathLike) -> None:
    """Fetch all remotes and prune stale tracking refs; the working tree is untouched."""
    run_command(_git_in(local_path, "remote", "update", "--prune"), cwd=local_path)


def reset_hard(local_path: PathLike, commit: str) -> None:
    run_command(_git_in(local_path, "reset", "--hard", commit), cwd=local_path)


def head_commit(local_path: PathLike) -> str:
    """Return the full hash of the commit checked out at ``local_path``."""
    return command_output(_git_in(local_path, "rev-parse", "HEAD"), cwd=local_path).strip()


def synchronize(update: bool, clone_uri: str, local_path: PathLike, commit: str) -> None:
    """
    Bring ``local_path`` to exactly ``commit`` of ``clone_uri``.

    Without ``update`` the repository is cloned into ``local_path``. With
    ``update`` the path must already hold a clone of ``clone_uri`` and its
    remotes are fetched and pruned instead. In both cases the working tree is
    then hard reset to ``commit``, discarding any local modification.

    There is no locking: the caller must have exclusive use of
    ``local_path`` for the whole call. After an error the state of
    ``local_path`` is unknown and it should be provisioned again from a
    known-good clone rather than retried in place.

    Args:
        update: Whether ``local_path`` already holds a clone to update
        clone_uri: URI the repository is cloned from
        local_path: Working copy location
        commit: Commit the working tree must reflect afterwards

    Raises:
        CommandError: If cloning, updating or resetting fails
    """
    if not update:
        logger.debug(f"Cloning {clone_uri} into {local_path}")
        clone(clone_uri, local_path)
    else:
        # Update our repo to match the remote.
        logger.debug(f"Updating {local_path} from its remotes")
        remote_update(local_path)

    # Reset to the specific revision.
    reset_hard(local_path, commit)
