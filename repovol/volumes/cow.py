"""btrfs subvolume backend"""

from repovol.cmd import PathLike, run_command
from repovol.volumes.base import VolumeBackend


class CopyOnWriteBackend(VolumeBackend):
    """Volumes are btrfs subvolumes; snapshots share extents until they diverge."""

    name = "btrfs"

    def __init__(self, tool: str = "btrfs"):
        self.tool = tool

    def create(self, path: PathLike) -> None:
        run_command([self.tool, "subvolume", "create", path])

    def snapshot(self, source: PathLike, dest: PathLike) -> None:
        run_command([self.tool, "subvolume", "snapshot", source, dest])

    def __repr__(self) -> str:
        return f"CopyOnWriteBackend(tool={self.tool!r})"
