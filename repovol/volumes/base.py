from abc import ABCMeta, abstractmethod

from repovol.cmd import PathLike


class VolumeBackend(metaclass=ABCMeta):
    """Interface for creating and snapshotting workspace volumes."""

    name = "abstract"

    @abstractmethod
    def create(self, path: PathLike) -> None:
        """
        Create a new, empty volume at ``path``.

        Args:
            path: Location of the new volume. Its parent must exist and the
                path itself must not.
        """
        pass

    @abstractmethod
    def snapshot(self, source: PathLike, dest: PathLike) -> None:
        """
        Make an independent copy of ``source`` at ``dest``.

        Once this returns, changes made under either path are never visible
        under the other.

        Args:
            source: Existing volume or directory to copy
            dest: Location of the copy; must not exist yet
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
