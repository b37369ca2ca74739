"""
Canonical clones and the isolated workspaces derived from them.

Layout:
    {clones_dir}/
    ├── github.com/
    │   └── user/
    │       ├── repo/          # canonical clone (a volume)
    │       └── repo.lock      # serializes changes and snapshots of repo/
    └── local/
        └── srv/git/project/

One canonical clone exists per repository. Each provision() call snapshots
it to a caller-chosen destination and then fetches and hard resets that
copy to the requested commit, so the canonical clone is only written when
it is first created or explicitly refreshed.

Usage:
    provisioner = WorkspaceProvisioner.from_config()
    path, commit = provisioner.provision(
        "https://github.com/user/repo", "1faafa2", Path("/srv/ws/request-42")
    )

Nothing here deletes directories. After a failure the affected directory is
left as is and must be cleaned up by the caller.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from filelock import FileLock

from repovol.capability import get_capabilities
from repovol.config import get_clones_dir
from repovol.fsutil import dir_exists
from repovol.git import head_commit, parse_repo_url, synchronize
from repovol.volumes import VolumeBackend, select_backend

logger = logging.getLogger(__name__)


class WorkspaceProvisioner:
    def __init__(
        self, clones_dir: Path, backend: VolumeBackend, lock_timeout: float = -1
    ):
        """
        Args:
            clones_dir: Directory holding the canonical clones
            backend: Volume backend used for canonical clones and workspaces
            lock_timeout: Seconds to wait for a canonical clone's lock; -1 waits forever
        """
        self.clones_dir = Path(clones_dir)
        self.backend = backend
        self.lock_timeout = lock_timeout

    @classmethod
    def from_config(cls, clones_dir: Optional[Path] = None) -> "WorkspaceProvisioner":
        if clones_dir is None:
            clones_dir = get_clones_dir()
        return cls(clones_dir, select_backend(get_capabilities()))

    def canonical_path(self, clone_uri: str) -> Path:
        return self.clones_dir / parse_repo_url(clone_uri)

    def _lock(self, canonical: Path) -> FileLock:
        lock_path = canonical.parent / f"{canonical.name}.lock"
        return FileLock(str(lock_path), timeout=self.lock_timeout)

    def _create_canonical(self, clone_uri: str, canonical: Path, commit: str) -> None:
        logger.info(f"Cloning {clone_uri} to {canonical}")
        canonical.parent.mkdir(parents=True, exist_ok=True)
        self.backend.create(canonical)
        synchronize(False, clone_uri, canonical, commit)

    def ensure_canonical(self, clone_uri: str, commit: str) -> Path:
        """
        Create the canonical clone of ``clone_uri``, or update it in place.

        Either way its working tree ends up at ``commit``.

        Returns:
            Path to the canonical clone
        """
        canonical = self.canonical_path(clone_uri)
        canonical.parent.mkdir(parents=True, exist_ok=True)

        with self._lock(canonical):
            if dir_exists(canonical):
                logger.info(f"Updating canonical clone at {canonical}")
                synchronize(True, clone_uri, canonical, commit)
            else:
                self._create_canonical(clone_uri, canonical, commit)

        return canonical

    def provision(self, clone_uri: str, commit: str, dest: Path) -> Tuple[Path, str]:
        """
        Provision an isolated working copy of ``clone_uri`` at ``commit``.

        Args:
            clone_uri: URI of the repository
            commit: Commit the workspace must reflect
            dest: Workspace location; must not exist, its parent must

        Returns:
            Tuple of (dest, resolved_commit_hash)
        """
        dest = Path(dest)
        canonical = self.canonical_path(clone_uri)
        canonical.parent.mkdir(parents=True, exist_ok=True)

        # The canonical clone must not change while it is being snapshotted.
        with self._lock(canonical):
            if not dir_exists(canonical):
                self._create_canonical(clone_uri, canonical, commit)
            logger.info(f"Snapshotting {canonical} to {dest} ({self.backend.name})")
            self.backend.snapshot(canonical, dest)

        synchronize(True, clone_uri, dest, commit)
        resolved = head_commit(dest)
        logger.info(f"Provisioned {clone_uri}@{resolved[:7]} at {dest}")
        return dest, resolved
