"""
Workspace volumes.

Two backends implement the same interface:

    - CopyOnWriteBackend: btrfs subvolumes and instantaneous snapshots
    - PlainCopyBackend: plain directories and recursive copies

The backend is chosen once from the detected host capabilities and then
reused for every call.

Usage:
    backend = select_backend(get_capabilities())
    backend.create(Path("/srv/clones/github.com/user/repo"))
    backend.snapshot(Path("/srv/clones/github.com/user/repo"), Path("/srv/ws/1"))
"""

from typing import Optional

from repovol.capability import Capabilities, get_capabilities
from repovol.cmd import PathLike

from .base import VolumeBackend
from .cow import CopyOnWriteBackend
from .plain import PlainCopyBackend


def select_backend(capabilities: Capabilities) -> VolumeBackend:
    if capabilities.copy_on_write:
        return CopyOnWriteBackend(tool=capabilities.cow_tool)
    return PlainCopyBackend()


def create_volume(
    path: PathLike, capabilities: Optional[Capabilities] = None
) -> None:
    """Create an empty volume, using the process-wide capabilities by default."""
    select_backend(capabilities or get_capabilities()).create(path)


def snapshot_volume(
    source: PathLike, dest: PathLike, capabilities: Optional[Capabilities] = None
) -> None:
    """Snapshot ``source`` to ``dest``, using the process-wide capabilities by default."""
    select_backend(capabilities or get_capabilities()).snapshot(source, dest)


__all__ = [
    "VolumeBackend",
    "CopyOnWriteBackend",
    "PlainCopyBackend",
    "select_backend",
    "create_volume",
    "snapshot_volume",
]
