"""Portable fallback backend for filesystems without copy-on-write support."""

import logging
import os
import shutil

from repovol.cmd import PathLike, timed
from repovol.volumes.base import VolumeBackend

logger = logging.getLogger(__name__)

# owner-only
DIR_MODE = 0o700


class PlainCopyBackend(VolumeBackend):
    """
    Volumes are ordinary directories and snapshots are full recursive copies.

    A snapshot costs time and space proportional to the source, but the copy
    is complete before snapshot() returns, so it is as isolated as a
    copy-on-write snapshot.
    """

    name = "plain"

    def create(self, path: PathLike) -> None:
        os.mkdir(path, DIR_MODE)

    def snapshot(self, source: PathLike, dest: PathLike) -> None:
        try:
            with timed(f"copytree {source} {dest}"):
                shutil.copytree(source, dest, symlinks=True)
        except OSError as e:
            logger.error(e)
            raise
